import pytest

import launch_sim.constants as C


def test_earth_parameters():
    assert C.R_EARTH > 6e6
    assert C.G0 > 9.0
    assert C.RHO_0 > 0
    assert C.H_SCALE > 0


def test_vehicle_masses():
    upper = C.STAGE2_DRY_MASS + C.STAGE2_PROPELLANT_MASS + C.PAYLOAD_MASS
    assert C.STAGE1_DRY_MASS + upper < C.TOTAL_MASS
    assert C.STAGE2_DRY_MASS < C.STAGE2_PROPELLANT_MASS


def test_thrust_and_isp():
    assert C.STAGE1_THRUST_VAC > C.STAGE1_THRUST_SL > 0
    assert C.STAGE2_ISP > C.STAGE1_ISP > 0
    # Liftoff is possible on stage-1 sea-level thrust
    assert C.STAGE1_THRUST_SL > C.TOTAL_MASS * C.G0


def test_rated_thrust_inside_safety_limit():
    assert C.STAGE1_THRUST_VAC < C.LIMIT_MAX_THRUST


def test_max_q_hysteresis_band():
    assert C.MAX_Q_THROTTLE_UP_PRESSURE < C.MAX_Q_THROTTLE_DOWN_PRESSURE
    assert 0 < C.MAX_Q_THROTTLE_LEVEL < 100


def test_landing_band_ordering():
    assert (C.LANDING_REENTRY_ALTITUDE > C.LANDING_AERO_ALTITUDE >
            C.LANDING_ENTRY_BURN_ALTITUDE > C.LANDING_BURN_IGNITION_ALTITUDE >
            C.LANDING_COAST_FLOOR_ALTITUDE > C.LANDING_LEGS_ALTITUDE >
            C.LANDING_TOUCHDOWN_ALTITUDE > 0)
    assert C.TOUCHDOWN_MIN_THRUST <= C.TOUCHDOWN_MAX_THRUST <= C.MAX_SINGLE_ENGINE_THRUST


@pytest.mark.parametrize("name", [
    'ABORT_ALTITUDE_DECAY', 'ABORT_VELOCITY_DECAY', 'ABORT_DOWNRANGE_DECAY',
    'ABORT_CHAMBER_PRESSURE_DECAY', 'ABORT_FLOW_RATE_DECAY', 'ABORT_MASS_DECAY',
    'ABORT_NEAR_GROUND_DECAY',
])
def test_abort_decays_are_contractions(name):
    assert 0.0 < getattr(C, name) < 1.0


def test_simulation_parameters():
    assert C.DT > 0
    assert C.MAX_TIME > C.STAGE1_BURN_TIME + C.STAGE2_BURN_TIME
    assert C.TARGET_ALTITUDE > 0
    assert C.TARGET_VELOCITY > 0
