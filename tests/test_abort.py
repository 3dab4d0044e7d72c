"""Tests for the abort decay sequencer."""
import pytest

from launch_sim import constants as C
from launch_sim.abort import AbortSequencer, decay
from launch_sim.config import create_test_config
from launch_sim.state import EngineStatus, FlightPhase, FlightState, Telemetry


@pytest.fixture
def sequencer():
    return AbortSequencer(create_test_config())


def make_abort(altitude=30000.0, velocity=900.0, mass=400000.0):
    state = FlightState(phase=FlightPhase.ABORT, abort_flag=True)
    telemetry = Telemetry(altitude=altitude, velocity=velocity, mass=mass,
                          thrust=7e6, chamber_pressure=270.0,
                          chamber_temperature=3500.0, fuel_flow_rate=250.0,
                          oxidizer_flow_rate=650.0, fuel_turbopump_rpm=20000.0,
                          nozzle_throat_temp=2000.0, vibration_level=3.0,
                          exhaust_velocity=2766.0)
    return state, telemetry


def test_decay_floor():
    assert decay(100.0, 0.5) == 50.0
    assert decay(400.0, 0.5, floor=300.0) == 300.0
    assert decay(-10.0, 0.75) == 0.0


def test_single_tick_decay(sequencer):
    state, t = make_abort()
    sequencer.update(state, t)
    assert t.thrust == 0.0
    assert t.altitude == pytest.approx(30000.0 * C.ABORT_ALTITUDE_DECAY)
    assert t.velocity == pytest.approx(900.0 * C.ABORT_VELOCITY_DECAY)
    assert t.acceleration == pytest.approx(-C.G0)
    assert t.g_force == -1.0
    assert t.fuel_flow_rate == pytest.approx(250.0 * 0.70)
    assert t.total_flow_rate == pytest.approx((250.0 + 650.0) * 0.70)
    assert t.fuel_turbopump_rpm == pytest.approx(20000.0 * 0.75)
    assert t.nozzle_throat_temp == pytest.approx(2000.0 * 0.88)
    assert t.mass == pytest.approx(400000.0 * C.ABORT_MASS_DECAY)
    assert state.phase == FlightPhase.ABORT


def test_temperatures_floor_at_ambient(sequencer):
    state, t = make_abort()
    t.nozzle_throat_temp = 310.0
    sequencer.update(state, t)
    assert t.nozzle_throat_temp == C.AMBIENT_HARDWARE_TEMPERATURE


def test_mass_floor_fraction(sequencer):
    floor = C.TOTAL_MASS * C.ABORT_MASS_FLOOR_FRACTION
    state, t = make_abort(mass=floor + 10.0)
    sequencer.update(state, t)
    assert t.mass == pytest.approx(floor)


def test_light_upper_stage_mass_not_raised(sequencer):
    state, t = make_abort(mass=50000.0)
    sequencer.update(state, t)
    assert t.mass == pytest.approx(50000.0)


def test_near_ground_extra_decay(sequencer):
    state, t = make_abort(altitude=110.0, velocity=10.0)
    sequencer.update(state, t)
    # 110 * 0.85 = 93.5 < 100, then the harsher x0.5
    assert t.altitude == pytest.approx(110.0 * 0.85 * 0.5)


def test_stops_below_one_metre(sequencer):
    state, t = make_abort(altitude=1.5, velocity=1.0)
    sequencer.update(state, t)
    assert state.phase == FlightPhase.ABORTED_STOPPED
    assert state.engine_status == EngineStatus.SHUTDOWN_ABORTED
    assert t.altitude == 0.0
    assert t.velocity == 0.0
    assert t.chamber_temperature == C.AMBIENT_HARDWARE_TEMPERATURE


def test_stops_immediately_on_ground(sequencer):
    state, t = make_abort(altitude=0.0, velocity=0.0)
    sequencer.update(state, t)
    assert state.phase == FlightPhase.ABORTED_STOPPED


@pytest.mark.parametrize("altitude", [5.0, 1000.0, 80000.0, 400000.0])
def test_terminates_in_finite_ticks(sequencer, altitude):
    state, t = make_abort(altitude=altitude)
    previous_alt, previous_speed = t.altitude, abs(t.velocity)
    for _ in range(1000):
        sequencer.update(state, t)
        assert t.thrust == 0.0
        assert t.altitude <= previous_alt
        assert abs(t.velocity) <= previous_speed
        previous_alt, previous_speed = t.altitude, abs(t.velocity)
        if state.phase == FlightPhase.ABORTED_STOPPED:
            break
    assert state.phase == FlightPhase.ABORTED_STOPPED
