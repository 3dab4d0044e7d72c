"""
Guidance module implementing the gravity-turn pitch program and max-Q
throttle protection.

The pitch program is a pure function of altitude. Throttle protection uses a
hysteresis band so that the commanded throttle does not chatter around a
single dynamic-pressure threshold.
"""

import logging

from . import constants as C
from .config import SimulationConfig
from .state import FlightState, GuidanceMode, Telemetry

logger = logging.getLogger(__name__)


def compute_target_pitch(altitude: float,
                         turn_start: float = C.GRAVITY_TURN_START) -> float:
    """
    Gravity-turn pitch (deg from horizontal, 90 = vertical).

    Vertical until `turn_start`, then decreases linearly with altitude,
    45 deg per 100 km, clamped at 0.
    """
    if altitude <= turn_start:
        return 90.0
    pitch = 90.0 - (altitude / C.GRAVITY_TURN_REFERENCE_ALTITUDE) * C.GRAVITY_TURN_PITCH_SPAN
    return max(pitch, 0.0)


def compute_throttle_command(dynamic_pressure: float, stage_number: int,
                             throttle_level: float,
                             config: SimulationConfig) -> float:
    """
    Max-Q throttle protection with hysteresis.

    Returns:
        New throttle level (%). Forced down to the max-Q level while q is
        above the upper threshold on stage 1; restored to 100 % once q drops
        below the lower threshold; otherwise unchanged.
    """
    if dynamic_pressure > config.max_q_throttle_down and stage_number == 1:
        return config.max_q_throttle_level
    if dynamic_pressure < config.max_q_throttle_up and throttle_level < 100.0:
        return 100.0
    return throttle_level


def update_guidance(state: FlightState, telemetry: Telemetry,
                    config: SimulationConfig) -> None:
    """Apply the pitch program and throttle protection in place."""
    if state.guidance_mode == GuidanceMode.GRAVITY_TURN:
        if telemetry.altitude > config.mission.gravity_turn_start:
            telemetry.pitch = compute_target_pitch(telemetry.altitude,
                                                   config.mission.gravity_turn_start)
            telemetry.flight_path_angle = telemetry.pitch

    throttle = compute_throttle_command(telemetry.dynamic_pressure, state.stage_number,
                                        state.throttle_level, config)
    if throttle != state.throttle_level:
        logger.info(f"Throttle {state.throttle_level:.0f}% -> {throttle:.0f}% "
                    f"at q={telemetry.dynamic_pressure:.0f}Pa")
        state.throttle_level = throttle
