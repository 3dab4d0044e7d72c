import numpy as np
import pytest

from launch_sim import atmosphere
from launch_sim import constants as C
from launch_sim.state import Telemetry


def test_sea_level_properties():
    props = atmosphere.compute_atmosphere_properties(0.0)
    assert props['temperature'] == pytest.approx(C.ATM_T0)
    assert props['pressure'] == pytest.approx(C.ATM_P0)
    assert props['density'] == pytest.approx(C.RHO_0)
    assert props['speed_of_sound'] == pytest.approx(np.sqrt(1.4 * 287.0 * 288.0))


def test_density_scale_height():
    assert atmosphere.compute_density(C.H_SCALE) == pytest.approx(C.RHO_0 / np.e)


def test_temperature_layers():
    assert atmosphere.compute_temperature(5000.0) == pytest.approx(288.0 - 0.0065 * 5000.0)
    assert atmosphere.compute_temperature(15000.0) == pytest.approx(216.65)
    assert atmosphere.compute_temperature(30000.0) == pytest.approx(216.65 + 0.0028 * 5000.0)


def test_vacuum_above_ceiling():
    props = atmosphere.compute_atmosphere_properties(150000.0)
    assert props['density'] == 0.0
    assert props['pressure'] == 0.0
    assert props['temperature'] == C.SPACE_TEMPERATURE


def test_negative_altitude_is_sea_level():
    assert atmosphere.compute_density(-50.0) == pytest.approx(C.RHO_0)


def test_dynamic_pressure_non_negative():
    assert atmosphere.compute_dynamic_pressure(1.225, -100.0) == pytest.approx(6125.0)
    assert atmosphere.compute_dynamic_pressure(0.0, 1000.0) == 0.0


def test_mach_uses_speed_magnitude():
    assert atmosphere.compute_mach_number(-340.0, 340.0) == pytest.approx(1.0)
    assert atmosphere.compute_mach_number(100.0, 0.0) == 0.0


def test_update_environment_tracks_max_q():
    t = Telemetry(altitude=10000.0, velocity=400.0)
    atmosphere.update_environment(t)
    q1 = t.dynamic_pressure
    assert q1 > 0
    assert t.max_q == q1

    t.velocity = 100.0
    atmosphere.update_environment(t)
    assert t.dynamic_pressure < q1
    assert t.max_q == q1


def test_update_environment_in_space():
    t = Telemetry(altitude=200000.0, velocity=7000.0, max_q=30000.0)
    atmosphere.update_environment(t)
    assert t.atmospheric_density == 0.0
    assert t.dynamic_pressure == 0.0
    assert t.mach_number == 0.0
    assert t.temperature == C.SPACE_TEMPERATURE
    assert t.max_q == 30000.0
