"""
Launch Vehicle Flight Simulation - CLI

The single entry point for running a headless flight, exporting the flight
log and generating plots.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace

from .config import ConfigurationError, create_default_config
from .main import run_flight
from .plotting import generate_all_plots

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Two-stage launch vehicle flight simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--abort-at",
        type=float,
        default=None,
        help="Command a mission abort at this elapsed time (s)"
    )
    parser.add_argument(
        "--land-at",
        type=float,
        default=None,
        help="Command the propulsive landing sequence at this elapsed time (s)"
    )
    parser.add_argument(
        "--max-time",
        type=float,
        default=None,
        help="Elapsed-time cut-off (s); defaults to the configured maximum"
    )
    parser.add_argument(
        "--no-auto-abort",
        action="store_true",
        help="Report CRITICAL anomalies without aborting"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write the flight log to this CSV file"
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default="plots",
        help="Directory to save output plots"
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip plot generation"
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Tick at wall-clock cadence instead of as fast as possible"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress verbose output"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution flow."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.quiet:
        print(f"\n{'='*70}\nLAUNCH VEHICLE FLIGHT SIMULATION\n{'='*70}\n")

    try:
        config = create_default_config()
        if args.quiet:
            config = replace(config, verbose=False)

        # 1. Fly
        logger.info("Starting flight...")
        result = run_flight(
            config=config,
            max_time=args.max_time,
            abort_at=args.abort_at,
            land_at=args.land_at,
            auto_abort=not args.no_auto_abort,
            realtime=args.realtime,
        )

        # 2. Summary
        final = result.final_telemetry
        print("\n" + "=" * 60)
        print("FLIGHT SUMMARY")
        print("=" * 60)
        print(f"Termination reason: {result.reason}")
        print(f"Final phase:        {result.final_state.phase.value}")
        print(f"Elapsed time:       {result.elapsed:.1f} s")
        print(f"Final altitude:     {final.altitude/1000:.2f} km")
        print(f"Final velocity:     {final.velocity:.1f} m/s")
        print(f"Final mass:         {final.mass:.0f} kg")
        print(f"Max-Q:              {final.max_q/1000:.2f} kPa")
        print(f"Anomalies:          {len(result.anomalies)}")
        print("=" * 60 + "\n")

        # 3. Export
        if args.csv:
            result.log.save_csv(args.csv)
            print(f">> Flight log written to: {args.csv}")

        # 4. Plots
        if not args.no_plots and len(result.log) > 0:
            if os.path.isabs(args.output_dir):
                plot_dir = args.output_dir
            else:
                plot_dir = os.path.join(os.getcwd(), args.output_dir)

            logger.info(f"Generating plots in {plot_dir}")
            files = generate_all_plots(result.log, plot_dir)
            print(f">> {len(files)} plots written to: {plot_dir}")

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"\n[ERROR] Invalid configuration: {e}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Simulation failed: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
