"""
Launch Vehicle Flight Simulation - Dynamics

Per-tick physics for powered and coasting flight. Forces are accumulated
along the flight path and integrated with explicit Euler at the fixed step:

    a = (T - W - D) / m
    v <- v + a * dt
    h <- h + v * dt
"""

from typing import Tuple

import numpy as np

from . import constants as C
from .config import SimulationConfig
from .forces import (
    compute_exhaust_velocity,
    compute_force_breakdown,
    compute_mass_flow_rate,
    compute_stage_thrust,
)
from .guidance import update_guidance
from .state import FlightState, Telemetry


def euler_step(velocity: float, altitude: float, acceleration: float,
               dt: float) -> Tuple[float, float]:
    """
    Explicit Euler step: velocity first, then altitude with
    the updated velocity.

    Raises:
        ValueError: If dt <= 0
    """
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")
    velocity = velocity + acceleration * dt
    altitude = altitude + velocity * dt
    return velocity, altitude


def compute_downrange_increment(velocity: float, pitch_deg: float, dt: float) -> float:
    """Ground distance (km) covered in dt from the horizontal velocity component."""
    horizontal = velocity * np.sin(np.radians(90.0 - pitch_deg))
    return float(horizontal * dt / 1000.0)


def compute_fuel_remaining(burn_time: float, rated_burn_time: float) -> float:
    """Propellant remaining (%) = 100 * (1 - burn/rated), clamped to [0, 100]."""
    return float(np.clip(100.0 * (1.0 - burn_time / rated_burn_time), 0.0, 100.0))


def simulate_powered_flight(state: FlightState, telemetry: Telemetry,
                            config: SimulationConfig) -> None:
    """
    Advance one tick of powered flight for the active stage.

    Thrust is scaled by the commanded throttle; mass decreases with the
    Isp-derived flow but never below the stage burnout mass.
    """
    dt = config.dt
    vehicle = config.vehicle
    stage = vehicle.stage(state.stage_number)

    thrust = compute_stage_thrust(stage, state.stage_number, telemetry.altitude)
    thrust *= state.throttle_level / 100.0
    telemetry.thrust = thrust

    mdot = compute_mass_flow_rate(thrust, stage.specific_impulse)
    telemetry.mass = max(vehicle.burnout_mass(state.stage_number),
                         telemetry.mass - mdot * dt)

    if state.stage_number == 1:
        telemetry.stage1_burn_time = round(telemetry.stage1_burn_time + dt, 9)
        telemetry.stage1_fuel_remaining = compute_fuel_remaining(
            telemetry.stage1_burn_time, stage.burn_time)
        telemetry.propellant_remaining = telemetry.stage1_fuel_remaining
    else:
        telemetry.stage2_burn_time = round(telemetry.stage2_burn_time + dt, 9)
        telemetry.stage2_fuel_remaining = compute_fuel_remaining(
            telemetry.stage2_burn_time, stage.burn_time)
        telemetry.propellant_remaining = telemetry.stage2_fuel_remaining

    forces = compute_force_breakdown(thrust, telemetry.mass, telemetry.altitude,
                                     telemetry.velocity, telemetry.atmospheric_density,
                                     vehicle)
    telemetry.acceleration = forces['acceleration']
    telemetry.g_force = telemetry.acceleration / C.G0
    telemetry.velocity, telemetry.altitude = euler_step(
        telemetry.velocity, telemetry.altitude, telemetry.acceleration, dt)
    telemetry.downrange += compute_downrange_increment(telemetry.velocity,
                                                       telemetry.pitch, dt)

    update_guidance(state, telemetry, config)

    telemetry.engine_throttle = state.throttle_level
    telemetry.exhaust_velocity = compute_exhaust_velocity(stage.specific_impulse)
    telemetry.chamber_pressure = C.CHAMBER_PRESSURE_NOMINAL * telemetry.engine_throttle / 100.0
    telemetry.twr = thrust / forces['weight']


def simulate_coast(state: FlightState, telemetry: Telemetry,
                   config: SimulationConfig) -> None:
    """Unpowered flight: gravity and drag only (MECO and stage separation)."""
    dt = config.dt
    telemetry.thrust = 0.0
    telemetry.twr = 0.0
    telemetry.engine_throttle = 0.0
    telemetry.chamber_pressure = 0.0

    forces = compute_force_breakdown(0.0, telemetry.mass, telemetry.altitude,
                                     telemetry.velocity, telemetry.atmospheric_density,
                                     config.vehicle)
    telemetry.acceleration = forces['acceleration']
    telemetry.g_force = telemetry.acceleration / C.G0
    telemetry.velocity, telemetry.altitude = euler_step(
        telemetry.velocity, telemetry.altitude, telemetry.acceleration, dt)
    telemetry.downrange += compute_downrange_increment(telemetry.velocity,
                                                       telemetry.pitch, dt)


def simulate_ignition(state: FlightState, telemetry: Telemetry,
                      config: SimulationConfig) -> bool:
    """
    Ramp stage-1 thrust up on the pad.

    Progress runs 0 -> 1 over the ignition ramp time measured from the start
    of the ignition sequence. The vehicle does not move.

    Returns:
        True once the engines reach full thrust
    """
    ramp = config.ignition_ramp_time
    ignition_time = state.ignition_time if state.ignition_time is not None else 0.0
    if ramp > 0.0:
        progress = min((state.mission_time - ignition_time) / ramp, 1.0)
    else:
        progress = 1.0

    stage = config.vehicle.first_stage
    telemetry.thrust = compute_stage_thrust(stage, 1, telemetry.altitude) * progress
    telemetry.engine_throttle = progress * 100.0
    telemetry.chamber_pressure = C.CHAMBER_PRESSURE_NOMINAL * progress
    return progress >= 1.0
