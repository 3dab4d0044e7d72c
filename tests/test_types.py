from launch_sim import types
from launch_sim.atmosphere import compute_atmosphere_properties
from launch_sim.config import create_test_config
from launch_sim.forces import compute_force_breakdown
from launch_sim.orbit import estimate_orbit


def test_atmosphere_properties_typeddict():
    out = types.AtmosphereProperties(
        temperature=288.0,
        pressure=101325.0,
        density=1.225,
        speed_of_sound=340.0,
    )
    assert out["density"] == 1.225
    assert set(compute_atmosphere_properties(0.0)) == set(out)


def test_forcebreakdown_keys():
    cfg = create_test_config()
    out = compute_force_breakdown(7.6e6, cfg.vehicle.total_mass, 0.0, 0.0, 1.225, cfg.vehicle)
    assert set(out) == set(types.ForceBreakdown.__annotations__)


def test_orbital_estimate_keys():
    out = estimate_orbit(200000.0, 7000.0)
    assert set(out) == set(types.OrbitalEstimate.__annotations__)
