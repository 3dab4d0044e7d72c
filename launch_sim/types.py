"""
Launch Vehicle Flight Simulation - Type Definitions

This module provides TypedDict definitions for structured return types.
"""

from typing import Optional, TypedDict


class AtmosphereProperties(TypedDict):
    """Return type for atmosphere model output."""
    temperature: float  # Temperature (K)
    pressure: float  # Pressure (Pa)
    density: float  # Density (kg/m^3)
    speed_of_sound: float  # Speed of sound (m/s)


class ForceBreakdown(TypedDict):
    """Return type for the 1-D force model (positive = up)."""
    thrust: float  # Thrust (N)
    weight: float  # Weight magnitude (N)
    drag: float  # Drag magnitude (N)
    net: float  # thrust - weight - drag (N)
    acceleration: float  # net / mass (m/s^2)


class OrbitalEstimate(TypedDict):
    """Return type for the orbital estimator."""
    orbital_velocity: float  # Circular velocity at current radius (m/s)
    apogee: Optional[float]  # km, None when no bound-orbit estimate exists
    perigee: Optional[float]  # km, None when no bound-orbit estimate exists
    semi_major_axis: Optional[float]  # m, None when energy is not negative
