import csv
import os
import tempfile

import pytest

from launch_sim import main
from launch_sim.config import create_test_config
from launch_sim.state import FlightPhase


@pytest.fixture(scope="module")
def nominal():
    return main.run_flight(create_test_config(max_time=1200.0))


def test_short_run_hits_time_limit():
    result = main.run_flight(create_test_config(max_time=1.0))
    assert result.reason == "Time limit reached (1s)"
    assert result.steps == 10
    assert result.elapsed == pytest.approx(1.0)
    # Initial pad row plus one row per tick
    assert len(result.log) == 11
    assert result.log.time[0] == 0.0


def test_nominal_flight_reaches_orbit(nominal):
    assert nominal.reason == "Terminal phase ORBIT"
    assert nominal.final_state.phase == FlightPhase.ORBIT
    assert nominal.final_telemetry.thrust == 0.0
    assert not any(a.is_critical for a in nominal.anomalies)


def test_phase_changes_in_order(nominal):
    phases = [phase for _, phase in nominal.log.phase_changes()]
    assert phases == ['IGNITION', 'LAUNCH', 'ASCENT', 'MECO',
                      'STAGE_SEP', 'SECOND_STAGE', 'ORBIT']
    times = [t for t, _ in nominal.log.phase_changes()]
    assert times == sorted(times)


def test_log_columns_aligned(nominal):
    n = len(nominal.log)
    for name in ('mission_time', 'phase', 'altitude', 'velocity', 'mass', 'apogee'):
        assert len(getattr(nominal.log, name)) == n


def test_operator_abort():
    result = main.run_flight(create_test_config(max_time=300.0), abort_at=30.0)
    assert result.reason == "Operator abort, terminal phase ABORTED_STOPPED"
    assert result.final_state.abort_flag is True
    assert result.final_telemetry.altitude == 0.0
    assert result.elapsed < 300.0


def test_operator_landing():
    result = main.run_flight(create_test_config(max_time=3000.0), land_at=20.0)
    assert result.reason == "Terminal phase LANDED"
    assert result.final_state.landing_legs_deployed is True


def test_save_csv(nominal):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'out', 'flight.csv')
        nominal.log.save_csv(path)
        with open(path, newline='') as fh:
            rows = list(csv.reader(fh))
    assert rows[0][:3] == ['time', 'mission_time', 'phase']
    assert len(rows) == len(nominal.log) + 1
    assert rows[-1][2] == 'ORBIT'
