"""
Launch Vehicle Flight Simulation - Propulsive Landing Sequencer

Seven-band, altitude-keyed model of a booster return:

    1. > 50 km          re-entry burn (3 engines)
    2. 7 - 50 km        aerodynamic descent on grid fins
    3. 2 - 7 km         entry burn (3 engines)
    4. 500 m - 2 km     coast until landing-burn ignition (burn not started)
    5. 20 m - ignition  hoverslam (single engine, true Euler physics)
    6. 0 - 20 m         terminal touchdown
    7. <= 0             landed

Band selection is a pure function of altitude and the landing-burn latch.
"""

import logging
from enum import Enum
from typing import Dict

import numpy as np

from . import constants as C
from .config import SimulationConfig
from .dynamics import euler_step
from .state import EngineStatus, FlightPhase, FlightState, Telemetry

logger = logging.getLogger(__name__)


class LandingBand(Enum):
    REENTRY_BURN = 1
    AERO_DESCENT = 2
    ENTRY_BURN = 3
    COAST = 4
    LANDING_BURN = 5
    TOUCHDOWN = 6
    LANDED = 7


def select_landing_band(altitude: float, landing_burn_started: bool) -> LandingBand:
    """
    Pick the landing band for the current altitude.

    Below 500 m without a started burn the vehicle goes straight to the
    hoverslam band (late ignition) rather than coasting further.
    """
    if altitude > C.LANDING_REENTRY_ALTITUDE:
        return LandingBand.REENTRY_BURN
    if altitude > C.LANDING_AERO_ALTITUDE:
        return LandingBand.AERO_DESCENT
    if altitude > C.LANDING_ENTRY_BURN_ALTITUDE:
        return LandingBand.ENTRY_BURN
    if altitude > C.LANDING_COAST_FLOOR_ALTITUDE and not landing_burn_started:
        return LandingBand.COAST
    if altitude > C.LANDING_TOUCHDOWN_ALTITUDE:
        return LandingBand.LANDING_BURN
    if altitude > 0.0:
        return LandingBand.TOUCHDOWN
    return LandingBand.LANDED


def compute_hoverslam_thrust(altitude: float, velocity: float, mass: float) -> Dict[str, float]:
    """
    Single-engine suicide-burn thrust command.

    Time to impact t = h / |v|; the deceleration that stops the vehicle in
    that time is |v| / t = v^2 / h. Required thrust m * (a + g0) is clamped
    to the engine's throttle range [40 %, 100 %] of max thrust.

    Returns dict with keys: required_deceleration, required_thrust, thrust,
    throttle (%).
    """
    if velocity < 0.0 and altitude > 0.0:
        required_deceleration = velocity * velocity / altitude
    else:
        required_deceleration = 0.0
    required_thrust = mass * (required_deceleration + C.G0)

    max_thrust = C.MAX_SINGLE_ENGINE_THRUST
    min_thrust = max_thrust * C.MIN_ENGINE_THROTTLE_FRACTION
    thrust = float(np.clip(required_thrust, min_thrust, max_thrust))
    return {
        'required_deceleration': float(required_deceleration),
        'required_thrust': float(required_thrust),
        'thrust': thrust,
        'throttle': thrust / max_thrust * 100.0,
    }


def compute_touchdown_command(altitude: float, mass: float) -> Dict[str, float]:
    """
    Terminal touchdown law.

    Target descent rate follows v = -sqrt(0.8 h), limited to 5 m/s. Thrust is
    hover thrust plus a proportional velocity-error term, clamped to
    [400 kN, 850 kN].

    Returns dict with keys: target_velocity, velocity, thrust, throttle (%).
    """
    target_velocity = -float(np.sqrt(C.TOUCHDOWN_APPROACH_GAIN * max(altitude, 0.0)))
    velocity = max(-C.TOUCHDOWN_MAX_DESCENT_RATE, target_velocity)
    hover_thrust = mass * C.G0
    correction = (target_velocity - velocity) * mass * C.TOUCHDOWN_VELOCITY_GAIN
    thrust = float(np.clip(hover_thrust + correction,
                           C.TOUCHDOWN_MIN_THRUST, C.TOUCHDOWN_MAX_THRUST))
    return {
        'target_velocity': target_velocity,
        'velocity': velocity,
        'thrust': thrust,
        'throttle': thrust / C.MAX_SINGLE_ENGINE_THRUST * 100.0,
    }


class LandingSequencer:
    """Drives the LANDING phase to LANDED."""

    def __init__(self, config: SimulationConfig):
        self.config = config

    def update(self, state: FlightState, telemetry: Telemetry) -> LandingBand:
        """Advance the landing model by one tick. Returns the band flown."""
        dt = self.config.dt
        band = select_landing_band(telemetry.altitude, state.landing_burn_started)

        if band == LandingBand.REENTRY_BURN:
            telemetry.velocity = max(C.REENTRY_VELOCITY_FLOOR,
                                     telemetry.velocity - C.REENTRY_VELOCITY_STEP)
            telemetry.altitude += telemetry.velocity * dt
            telemetry.thrust = C.REENTRY_THRUST
            telemetry.engine_throttle = C.REENTRY_THROTTLE
            state.engine_status = EngineStatus.REENTRY_BURN

        elif band == LandingBand.AERO_DESCENT:
            telemetry.velocity = max(C.AERO_VELOCITY_FLOOR,
                                     telemetry.velocity - C.AERO_VELOCITY_STEP)
            telemetry.altitude += telemetry.velocity * dt
            telemetry.thrust = 0.0
            telemetry.engine_throttle = 0.0
            state.engine_status = EngineStatus.GRID_FIN_CONTROL

            # Grid fin control
            t = state.mission_time
            telemetry.pitch = 88.0 + np.sin(t * 0.5) * 2.0
            telemetry.gimbal_angle_x = np.sin(t * 1.5) * 3.0
            telemetry.gimbal_angle_y = np.cos(t * 1.5) * 3.0

        elif band == LandingBand.ENTRY_BURN:
            # Slews toward the floor and holds it; never reverses the descent
            error = C.ENTRY_VELOCITY_FLOOR - telemetry.velocity
            telemetry.velocity += float(np.clip(error, -C.ENTRY_VELOCITY_STEP,
                                                C.ENTRY_VELOCITY_STEP))
            telemetry.altitude += telemetry.velocity * dt
            telemetry.thrust = C.ENTRY_THRUST
            telemetry.engine_throttle = C.ENTRY_THROTTLE
            state.engine_status = EngineStatus.ENTRY_BURN

        elif band == LandingBand.COAST:
            telemetry.velocity = max(C.COAST_VELOCITY_FLOOR,
                                     telemetry.velocity - C.COAST_VELOCITY_STEP)
            telemetry.altitude += telemetry.velocity * dt
            telemetry.thrust = 0.0
            telemetry.engine_throttle = 0.0
            state.engine_status = EngineStatus.PREPARING_LANDING_BURN

            if telemetry.altitude <= C.LANDING_BURN_IGNITION_ALTITUDE:
                state.landing_burn_started = True
                logger.info(f"LANDING BURN: single engine start at "
                            f"Alt={telemetry.altitude:.0f}m, V={telemetry.velocity:.0f}m/s")

        elif band == LandingBand.LANDING_BURN:
            if not state.landing_burn_started:
                state.landing_burn_started = True
                logger.info(f"Late landing burn ignition at Alt={telemetry.altitude:.0f}m")
            self._hoverslam(state, telemetry, dt)

        elif band == LandingBand.TOUCHDOWN:
            command = compute_touchdown_command(telemetry.altitude, telemetry.mass)
            telemetry.velocity = command['velocity']
            telemetry.altitude = max(0.0, telemetry.altitude + telemetry.velocity * dt)
            telemetry.thrust = command['thrust']
            telemetry.engine_throttle = command['throttle']
            state.engine_status = EngineStatus.TOUCHDOWN_BURN

        else:
            self._touchdown_complete(state, telemetry)
            return band

        telemetry.acceleration = telemetry.thrust / telemetry.mass - C.G0
        telemetry.g_force = telemetry.acceleration / C.G0
        telemetry.total_flow_rate = telemetry.fuel_flow_rate + telemetry.oxidizer_flow_rate
        telemetry.fuel_turbopump_rpm = C.FUEL_TURBOPUMP_RPM * telemetry.engine_throttle / 100.0
        telemetry.oxidizer_turbopump_rpm = (C.OXIDIZER_TURBOPUMP_RPM
                                            * telemetry.engine_throttle / 100.0)
        return band

    def _hoverslam(self, state: FlightState, telemetry: Telemetry, dt: float) -> None:
        command = compute_hoverslam_thrust(telemetry.altitude, telemetry.velocity,
                                           telemetry.mass)
        telemetry.thrust = command['thrust']
        telemetry.engine_throttle = command['throttle']
        state.engine_status = EngineStatus.LANDING_BURN

        acceleration = telemetry.thrust / telemetry.mass - C.G0
        telemetry.velocity, telemetry.altitude = euler_step(
            telemetry.velocity, telemetry.altitude, acceleration, dt)

        throttle = telemetry.engine_throttle / 100.0
        telemetry.chamber_pressure = (C.LANDING_CHAMBER_PRESSURE_MIN
                                      + C.LANDING_CHAMBER_PRESSURE_SPAN * throttle)
        telemetry.chamber_temperature = (C.LANDING_CHAMBER_TEMP_MIN
                                         + C.LANDING_CHAMBER_TEMP_SPAN * throttle)
        telemetry.fuel_flow_rate = C.FUEL_FLOW_NOMINAL * throttle
        telemetry.oxidizer_flow_rate = C.OXIDIZER_FLOW_NOMINAL * throttle

        if telemetry.altitude < C.LANDING_LEGS_ALTITUDE and not state.landing_legs_deployed:
            state.landing_legs_deployed = True
            logger.info(f"Landing legs deployed at Alt={telemetry.altitude:.1f}m")

    def _touchdown_complete(self, state: FlightState, telemetry: Telemetry) -> None:
        touchdown_speed = abs(telemetry.velocity)
        telemetry.snap_to_rest()
        state.phase = FlightPhase.LANDED
        state.engine_status = EngineStatus.SHUTDOWN_LANDED
        logger.info(f"Touchdown confirmed at {touchdown_speed:.2f} m/s, "
                    f"legs deployed: {state.landing_legs_deployed}")
