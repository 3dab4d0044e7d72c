import os

import pytest

from launch_sim import cli


def test_parse_defaults():
    args = cli.parse_args([])
    assert args.abort_at is None
    assert args.land_at is None
    assert args.max_time is None
    assert args.output_dir == "plots"
    assert not args.no_plots
    assert not args.no_auto_abort


def test_parse_options():
    args = cli.parse_args(['--abort-at', '12.5', '--max-time', '60', '-q', '-o', 'out'])
    assert args.abort_at == 12.5
    assert args.max_time == 60.0
    assert args.quiet
    assert args.output_dir == 'out'


def test_short_quiet_run(tmp_path, capsys):
    csv_path = tmp_path / 'flight.csv'
    code = cli.main(['--max-time', '5', '--no-plots', '--quiet', '--csv', str(csv_path)])
    assert code == 0
    assert csv_path.exists()
    out = capsys.readouterr().out
    assert 'Time limit reached (5s)' in out


def test_plots_written(tmp_path):
    out_dir = tmp_path / 'plots'
    assert cli.main(['--max-time', '2', '--quiet', '-o', str(out_dir)]) == 0
    assert len(os.listdir(out_dir)) == 7


def test_bad_argument_exits():
    with pytest.raises(SystemExit):
        cli.parse_args(['--max-time', 'soon'])
