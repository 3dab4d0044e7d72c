"""Tests for config module."""
from dataclasses import replace

import pytest

from launch_sim import config
from launch_sim import constants as C


def test_simulation_config_defaults():
    """Default config uses constants values."""
    cfg = config.SimulationConfig()
    assert cfg.dt == C.DT
    assert cfg.max_time == C.MAX_TIME
    assert cfg.meco_separation_delay == C.MECO_SEPARATION_DELAY
    assert cfg.second_stage_ignition_delay == C.SECOND_STAGE_IGNITION_DELAY
    assert cfg.limits.max_q == C.LIMIT_MAX_Q
    assert cfg.limits.max_g == C.LIMIT_MAX_G
    assert cfg.limits.max_thrust == C.LIMIT_MAX_THRUST


def test_simulation_config_frozen():
    """Config is immutable (frozen)."""
    cfg = config.SimulationConfig()
    with pytest.raises(Exception):  # FrozenInstanceError
        cfg.dt = 0.5


def test_create_test_config_overrides():
    cfg = config.create_test_config(dt=0.05, max_time=10.0, meco_separation_delay=1.0)
    assert cfg.dt == 0.05
    assert cfg.max_time == 10.0
    assert cfg.meco_separation_delay == 1.0
    assert cfg.verbose is False


def test_vehicle_stage_lookup():
    vehicle = config.VehicleSpec()
    assert vehicle.stage(1).thrust_sl == C.STAGE1_THRUST_SL
    assert vehicle.stage(2).thrust_vac == C.STAGE2_THRUST_VAC
    assert vehicle.stage(1).engines == 9


def test_upper_stack_mass():
    vehicle = config.VehicleSpec()
    expected = C.STAGE2_DRY_MASS + C.STAGE2_PROPELLANT_MASS + C.PAYLOAD_MASS
    assert vehicle.upper_stack_mass == pytest.approx(expected)
    assert vehicle.upper_stack_mass == pytest.approx(138300.0)


def test_burnout_masses():
    vehicle = config.VehicleSpec()
    assert vehicle.burnout_mass(1) == pytest.approx(C.TOTAL_MASS - C.STAGE1_PROPELLANT_MASS)
    assert vehicle.burnout_mass(2) == pytest.approx(C.STAGE2_DRY_MASS + C.PAYLOAD_MASS)
    # Never below the stage's dry mass plus payload
    assert vehicle.burnout_mass(1) >= C.STAGE1_DRY_MASS + C.PAYLOAD_MASS


def test_validate_default_config_passes():
    cfg = config.create_default_config()
    assert config.validate_config(cfg) is cfg


@pytest.mark.parametrize("dt", [0.0, -0.1])
def test_validate_rejects_non_positive_dt(dt):
    with pytest.raises(config.ConfigurationError):
        config.validate_config(config.SimulationConfig(dt=dt))


def test_validate_rejects_zero_isp():
    vehicle = config.VehicleSpec()
    bad_stage = replace(vehicle.first_stage, specific_impulse=0.0)
    cfg = config.SimulationConfig(vehicle=replace(vehicle, first_stage=bad_stage))
    with pytest.raises(config.ConfigurationError, match="Isp"):
        config.validate_config(cfg)


def test_validate_rejects_light_liftoff_mass():
    vehicle = replace(config.VehicleSpec(), total_mass=100000.0)
    with pytest.raises(config.ConfigurationError, match="upper stack"):
        config.validate_config(config.SimulationConfig(vehicle=vehicle))


def test_validate_rejects_non_positive_limits():
    cfg = config.SimulationConfig(limits=config.Limits(max_g=0.0))
    with pytest.raises(config.ConfigurationError):
        config.validate_config(cfg)


def test_configuration_error_is_value_error():
    assert issubclass(config.ConfigurationError, ValueError)
