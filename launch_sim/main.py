"""
Launch Vehicle Flight Simulation - Headless Driver

This module implements the external driver loop around FlightSimulator:
- Countdown-free launch (arm and ignite; liftoff follows the thrust ramp)
- Fixed-cadence ticking with per-tick anomaly checks
- Optional operator abort / landing commands at a given elapsed time
- Data logging with CSV export

Elapsed time is counted in ticks * dt because mission time freezes during
abort and landing.
"""

import csv
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .anomaly import Anomaly
from .config import SimulationConfig, create_default_config
from .scheduler import ManualClock
from .simulator import FlightSimulator
from .state import FlightState, Telemetry, engine_status_label

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class FlightLog:
    """Container for logged per-tick flight data."""
    time: List[float] = field(default_factory=list)
    mission_time: List[float] = field(default_factory=list)
    phase: List[str] = field(default_factory=list)
    stage: List[int] = field(default_factory=list)
    engine_status: List[str] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)
    velocity: List[float] = field(default_factory=list)
    acceleration: List[float] = field(default_factory=list)
    downrange: List[float] = field(default_factory=list)
    mass: List[float] = field(default_factory=list)
    thrust: List[float] = field(default_factory=list)
    throttle: List[float] = field(default_factory=list)
    twr: List[float] = field(default_factory=list)
    g_force: List[float] = field(default_factory=list)
    dynamic_pressure: List[float] = field(default_factory=list)
    max_q: List[float] = field(default_factory=list)
    mach_number: List[float] = field(default_factory=list)
    pitch: List[float] = field(default_factory=list)
    apogee: List[float] = field(default_factory=list)
    perigee: List[float] = field(default_factory=list)
    orbital_velocity: List[float] = field(default_factory=list)
    propellant_remaining: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.time)

    def append(self, elapsed: float, state: FlightState, telemetry: Telemetry):
        """Append one tick of data."""
        self.time.append(elapsed)
        self.mission_time.append(state.mission_time)
        self.phase.append(state.phase.value)
        self.stage.append(state.stage_number)
        self.engine_status.append(engine_status_label(state.engine_status))
        self.altitude.append(telemetry.altitude)
        self.velocity.append(telemetry.velocity)
        self.acceleration.append(telemetry.acceleration)
        self.downrange.append(telemetry.downrange)
        self.mass.append(telemetry.mass)
        self.thrust.append(telemetry.thrust)
        self.throttle.append(telemetry.engine_throttle)
        self.twr.append(telemetry.twr)
        self.g_force.append(telemetry.g_force)
        self.dynamic_pressure.append(telemetry.dynamic_pressure)
        self.max_q.append(telemetry.max_q)
        self.mach_number.append(telemetry.mach_number)
        self.pitch.append(telemetry.pitch)
        self.apogee.append(telemetry.apogee)
        self.perigee.append(telemetry.perigee)
        self.orbital_velocity.append(telemetry.orbital_velocity)
        self.propellant_remaining.append(telemetry.propellant_remaining)

    def phase_changes(self) -> List[Tuple[float, str]]:
        """(elapsed time, phase) for the first tick of every phase, in order."""
        changes = []
        previous = None
        for t, phase in zip(self.time, self.phase):
            if phase != previous:
                changes.append((t, phase))
                previous = phase
        return changes

    def save_csv(self, filename: str):
        """Write logged data to CSV for offline analysis."""
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        header = [
            'time', 'mission_time', 'phase', 'stage', 'engine_status',
            'altitude_m', 'velocity_mps', 'acceleration_mps2', 'downrange_km',
            'mass_kg', 'thrust_N', 'throttle_pct', 'twr', 'g_force',
            'dynamic_pressure_Pa', 'max_q_Pa', 'mach', 'pitch_deg',
            'apogee_km', 'perigee_km', 'orbital_velocity_mps', 'propellant_pct',
        ]

        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            for i in range(len(self.time)):
                writer.writerow([
                    self.time[i], self.mission_time[i], self.phase[i], self.stage[i],
                    self.engine_status[i],
                    self.altitude[i], self.velocity[i], self.acceleration[i], self.downrange[i],
                    self.mass[i], self.thrust[i], self.throttle[i], self.twr[i], self.g_force[i],
                    self.dynamic_pressure[i], self.max_q[i], self.mach_number[i], self.pitch[i],
                    self.apogee[i], self.perigee[i], self.orbital_velocity[i],
                    self.propellant_remaining[i],
                ])
        logger.info(f"Flight log written to {filename} ({len(self)} rows)")


@dataclass
class FlightResult:
    """Outcome of a headless flight."""
    final_state: FlightState
    final_telemetry: Telemetry
    log: FlightLog
    anomalies: List[Anomaly]
    reason: str
    elapsed: float
    steps: int


def run_flight(config: SimulationConfig = None, max_time: float = None,
               abort_at: Optional[float] = None, land_at: Optional[float] = None,
               auto_abort: bool = True, realtime: bool = False) -> FlightResult:
    """
    Fly one mission from the pad until a terminal phase or the time limit.

    Args:
        config: SimulationConfig instance. If None a default is created.
        max_time: Elapsed-time cut-off (s). Overrides config.max_time if given.
        abort_at: Command abort() once this elapsed time is reached
        land_at: Command initiate_landing() once this elapsed time is reached
        auto_abort: Abort on the first CRITICAL anomaly
        realtime: Tick at wall-clock cadence; deferred actions use the real
                  clock. Otherwise a ManualClock advanced by dt per tick.

    Returns:
        FlightResult
    """
    if config is None:
        config = create_default_config()
    if max_time is None:
        max_time = config.max_time
    dt = config.dt

    clock = None if realtime else ManualClock()
    sim = FlightSimulator(config, clock=clock)
    log = FlightLog()
    seen: List[Anomaly] = []

    logger.info(f"Starting flight: dt={dt}s, max_time={max_time}s, "
                f"vehicle={config.vehicle.name}")

    sim.arm_ignition()
    sim.start_ignition_sequence()
    log.append(0.0, sim.state, sim.telemetry)

    if config.verbose:
        print("\n" + "=" * 80)
        print(f"FLIGHT SIMULATION    | dt={dt}s | T_max={max_time}s | vehicle={config.vehicle.name}")
        print("=" * 80)
        print(f"{'Time (s)':^10} | {'Alt (km)':^10} | {'Vel (m/s)':^10} | {'Mass (kg)':^12} | {'Phase':<15}")
        print("-" * 80)

    start_time = time.time()
    steps = 0
    elapsed = 0.0
    last_print_time = 0.0
    reason = None

    while elapsed < max_time:
        if abort_at is not None and elapsed >= abort_at and not sim.state.abort_flag:
            logger.warning(f"Operator abort at T+{elapsed:.1f}s")
            if sim.abort():
                reason = "Operator abort"
            abort_at = None
        if land_at is not None and elapsed >= land_at:
            logger.info(f"Operator landing command at T+{elapsed:.1f}s")
            sim.initiate_landing()
            land_at = None

        if clock is not None:
            clock.advance(dt)
        telemetry = sim.advance()
        steps += 1
        elapsed = round(steps * dt, 9)
        log.append(elapsed, sim.state, telemetry)

        for anomaly in sim.check_anomalies():
            seen.append(anomaly)
            if anomaly.is_critical:
                logger.error(f"CRITICAL anomaly at T+{elapsed:.1f}s: {anomaly.message} "
                             f"({anomaly.parameter}={anomaly.value:.2f}, limit={anomaly.limit:.2f})")
                if auto_abort and sim.abort():
                    reason = f"Critical anomaly: {anomaly.message}"
            else:
                logger.warning(f"Anomaly at T+{elapsed:.1f}s: {anomaly.message} "
                               f"({anomaly.parameter}={anomaly.value:.0f})")

        if sim.is_terminal:
            break

        if config.verbose and elapsed - last_print_time >= 10.0:
            _print_status(elapsed, sim.state, telemetry)
            last_print_time = elapsed

        if realtime:
            time.sleep(dt)

    if reason is None:
        if sim.is_terminal:
            reason = f"Terminal phase {sim.phase.value}"
        else:
            reason = f"Time limit reached ({max_time:.0f}s)"
    elif sim.is_terminal:
        reason = f"{reason}, terminal phase {sim.phase.value}"

    wall = time.time() - start_time
    logger.info(f"Flight complete: {steps} steps in {wall:.2f}s, reason: {reason}")
    if config.verbose:
        print("-" * 80)
        print(f"FLIGHT COMPLETED: {reason}")
        print("-" * 80)

    return FlightResult(
        final_state=sim.get_state(),
        final_telemetry=sim.get_telemetry(),
        log=log,
        anomalies=seen,
        reason=reason,
        elapsed=elapsed,
        steps=steps,
    )


def _print_status(elapsed: float, state: FlightState, telemetry: Telemetry):
    """Print a formatted status row."""
    msg = (f"{elapsed:10.1f} | {telemetry.altitude/1000:10.1f} | "
           f"{telemetry.velocity:10.1f} | {telemetry.mass:12.1f} | {state.phase.value:<15}")
    print(msg)
    logger.debug(msg)
