"""
Launch Vehicle Flight Simulation - Orbital Estimator

Derives apogee, perigee and circular orbital velocity from the current
altitude and speed using a central gravity potential mu = g0 * Re^2.

Known simplification: when the specific energy implies a bound orbit the
apogee is reported as 2a - r (a distance from the Earth centre, not offset
by the Earth radius) and the perigee as the current altitude. Neither is a
true ellipse fit.
"""

import numpy as np

from . import constants as C
from .types import OrbitalEstimate

# Gravitational parameter consistent with the surface-gravity model (m^3/s^2)
MU = C.G0 * C.R_EARTH ** 2


def compute_circular_velocity(altitude: float) -> float:
    """Circular orbital velocity sqrt(mu / r) at altitude (m/s)."""
    r = C.R_EARTH + altitude
    return float(np.sqrt(MU / r))


def estimate_orbit(altitude: float, velocity: float) -> OrbitalEstimate:
    """
    Estimate orbital parameters.

    Args:
        altitude: Altitude above the surface (m)
        velocity: Speed (m/s)

    Returns:
        OrbitalEstimate; apogee/perigee (km) and semi-major axis (m) are None
        when the speed is not positive or the orbit is not bound
    """
    r = C.R_EARTH + altitude
    estimate = OrbitalEstimate(
        orbital_velocity=compute_circular_velocity(altitude),
        apogee=None,
        perigee=None,
        semi_major_axis=None,
    )
    if velocity <= 0.0:
        return estimate

    energy = 0.5 * velocity * velocity - MU / r
    if energy >= 0.0:
        return estimate

    a = -MU / (2.0 * energy)
    if a > 0.0:
        estimate['semi_major_axis'] = float(a)
        estimate['apogee'] = float((2.0 * a - r) / 1000.0)
        estimate['perigee'] = float(altitude / 1000.0)
    return estimate


def update_orbital_parameters(telemetry) -> None:
    """Write the orbital estimate into telemetry; apsides keep their last value
    when no bound estimate exists."""
    estimate = estimate_orbit(telemetry.altitude, telemetry.velocity)
    telemetry.orbital_velocity = estimate['orbital_velocity']
    if estimate['apogee'] is not None:
        telemetry.apogee = estimate['apogee']
        telemetry.perigee = estimate['perigee']
