"""
Launch Vehicle Flight Simulation - Atmosphere Model

Exponential density/pressure decay with a fixed scale height and a
three-layer piecewise-linear temperature profile (troposphere lapse,
isothermal layer, inversion layer). Above the ceiling the atmosphere is
treated as vacuum at the cosmic background temperature.
"""

import numpy as np

from . import constants as C
from .types import AtmosphereProperties


def compute_temperature(altitude: float) -> float:
    """Temperature (K) at altitude, three-layer profile below the ceiling."""
    h = max(0.0, float(altitude))
    if h >= C.ATMOSPHERE_CEILING:
        return C.SPACE_TEMPERATURE
    if h < C.ATM_TROPOPAUSE:
        return C.ATM_T0 - C.ATM_LAPSE_RATE * h
    if h < C.ATM_INVERSION_BASE:
        return C.ATM_T_STRATOSPHERE
    return C.ATM_T_STRATOSPHERE + C.ATM_INVERSION_RATE * (h - C.ATM_INVERSION_BASE)


def compute_pressure(altitude: float) -> float:
    """Static pressure (Pa); zero above the ceiling."""
    h = max(0.0, float(altitude))
    if h >= C.ATMOSPHERE_CEILING:
        return 0.0
    return float(C.ATM_P0 * np.exp(-h / C.H_SCALE))


def compute_density(altitude: float) -> float:
    """Air density (kg/m^3); zero above the ceiling."""
    h = max(0.0, float(altitude))
    if h >= C.ATMOSPHERE_CEILING:
        return 0.0
    return float(C.RHO_0 * np.exp(-h / C.H_SCALE))


def compute_speed_of_sound(temperature: float) -> float:
    """Ideal-gas speed of sound a = sqrt(gamma * R * T)."""
    return float(np.sqrt(C.GAMMA * C.R_GAS * max(temperature, 0.0)))


def compute_atmosphere_properties(altitude: float) -> AtmosphereProperties:
    """
    Compute atmospheric properties at altitude.

    Args:
        altitude: Geometric altitude above sea level (m); negative is sea level

    Returns:
        AtmosphereProperties with temperature (K), pressure (Pa),
        density (kg/m^3) and speed of sound (m/s)
    """
    T = compute_temperature(altitude)
    return AtmosphereProperties(
        temperature=T,
        pressure=compute_pressure(altitude),
        density=compute_density(altitude),
        speed_of_sound=compute_speed_of_sound(T),
    )


def compute_dynamic_pressure(density: float, velocity: float) -> float:
    """q = 0.5 * rho * v^2 (Pa), never negative."""
    return max(0.0, 0.5 * density * velocity * velocity)


def compute_mach_number(velocity: float, speed_of_sound: float) -> float:
    """Mach number of the speed |v|; zero when the speed of sound is undefined."""
    if speed_of_sound <= 0.0:
        return 0.0
    return abs(velocity) / speed_of_sound


def update_environment(telemetry) -> None:
    """
    Refresh the environmental telemetry in place and track max-Q.

    Below the ceiling: density, temperature, Mach and dynamic pressure follow
    the model. Above it: density, q and Mach are zero, temperature is 2.7 K.
    The running max-Q is never lowered.
    """
    alt = telemetry.altitude
    if alt < C.ATMOSPHERE_CEILING:
        props = compute_atmosphere_properties(alt)
        telemetry.atmospheric_density = props['density']
        telemetry.temperature = props['temperature']
        telemetry.mach_number = compute_mach_number(telemetry.velocity,
                                                    props['speed_of_sound'])
        telemetry.dynamic_pressure = compute_dynamic_pressure(props['density'],
                                                              telemetry.velocity)
    else:
        telemetry.atmospheric_density = 0.0
        telemetry.dynamic_pressure = 0.0
        telemetry.mach_number = 0.0
        telemetry.temperature = C.SPACE_TEMPERATURE

    telemetry.max_q = max(telemetry.max_q, telemetry.dynamic_pressure)
