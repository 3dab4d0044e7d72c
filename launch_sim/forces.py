"""
Launch Vehicle Flight Simulation - Force Computations

This module implements the 1-D (along the flight path) force model:
- Inverse-square gravity referenced to Earth radius
- Pressure-compensated stage thrust
- Atmospheric drag with a single drag coefficient
- Propellant mass flow from specific impulse
"""

from . import constants as C
from .atmosphere import compute_pressure
from .config import StageSpec, VehicleSpec
from .types import ForceBreakdown


def compute_local_gravity(altitude: float) -> float:
    """
    Gravitational acceleration at altitude.

    g(h) = g0 * (Re / (Re + h))^2
    """
    r = C.R_EARTH + max(0.0, altitude)
    return C.G0 * (C.R_EARTH / r) ** 2


def compute_weight(mass: float, altitude: float) -> float:
    """Weight magnitude (N)."""
    return mass * compute_local_gravity(altitude)


def compute_stage_thrust(stage: StageSpec, stage_number: int, altitude: float) -> float:
    """
    Full-throttle thrust of the active stage (N).

    Stage 1 is pressure-compensated between its sea-level and vacuum rating:
        T = T_sl + (P / P0) * (T_vac - T_sl)
    Stage 2 operates above the sensible atmosphere and always delivers its
    vacuum thrust.
    """
    if stage_number == 1:
        pressure_ratio = compute_pressure(altitude) / C.ATM_P0
        return stage.thrust_sl + pressure_ratio * (stage.thrust_vac - stage.thrust_sl)
    return stage.thrust_vac


def compute_drag_force(density: float, velocity: float, altitude: float,
                       vehicle: VehicleSpec) -> float:
    """
    Drag magnitude (N).

    F_drag = 0.5 * rho * v^2 * Cd * A, zero above the atmosphere ceiling.
    """
    if altitude > C.ATMOSPHERE_CEILING:
        return 0.0
    return 0.5 * density * velocity * velocity * vehicle.drag_coefficient * vehicle.cross_section


def compute_mass_flow_rate(thrust: float, specific_impulse: float) -> float:
    """Propellant mass flow mdot = T / (Isp * g0) (kg/s), never negative."""
    if thrust <= 0.0 or specific_impulse <= 0.0:
        return 0.0
    return thrust / (specific_impulse * C.G0)


def compute_exhaust_velocity(specific_impulse: float) -> float:
    """Effective exhaust velocity Isp * g0 (m/s)."""
    return specific_impulse * C.G0


def compute_force_breakdown(thrust: float, mass: float, altitude: float,
                            velocity: float, density: float,
                            vehicle: VehicleSpec) -> ForceBreakdown:
    """
    Accumulate thrust, weight and drag into a net force and acceleration.

    Args:
        thrust: Thrust magnitude (N)
        mass: Current vehicle mass (kg), must be positive
        altitude: Altitude (m)
        velocity: Velocity along the flight path (m/s)
        density: Local air density (kg/m^3)
        vehicle: Vehicle specification (Cd, area)

    Returns:
        ForceBreakdown with net force and acceleration
    """
    weight = compute_weight(mass, altitude)
    drag = compute_drag_force(density, velocity, altitude, vehicle)
    net = thrust - weight - drag
    return ForceBreakdown(
        thrust=thrust,
        weight=weight,
        drag=drag,
        net=net,
        acceleration=net / mass,
    )
