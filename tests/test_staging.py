"""Tests for stage separation and the deferred second-stage ignition."""
import pytest

from launch_sim import constants as C
from launch_sim.config import create_test_config
from launch_sim.scheduler import DeferredScheduler, ManualClock
from launch_sim.staging import StagingController
from launch_sim.state import EngineStatus, FlightPhase, FlightState, Telemetry


@pytest.fixture
def setup():
    clock = ManualClock()
    scheduler = DeferredScheduler(clock)
    staging = StagingController(create_test_config(), scheduler)
    state = FlightState(phase=FlightPhase.MECO, mission_time=165.0)
    telemetry = Telemetry(altitude=80000.0, velocity=2500.0, mass=138054.0,
                          stage2_fuel_remaining=100.0)
    return clock, scheduler, staging, state, telemetry


def test_separation_mass_discontinuity(setup):
    clock, scheduler, staging, state, telemetry = setup
    assert staging.separate(state, telemetry) is True
    assert state.phase == FlightPhase.STAGE_SEP
    assert state.stage_number == 2
    assert telemetry.mass == pytest.approx(
        C.STAGE2_DRY_MASS + C.STAGE2_PROPELLANT_MASS + C.PAYLOAD_MASS)
    assert telemetry.thrust == 0.0
    assert len(scheduler.pending) == 1


def test_separation_only_once(setup):
    clock, scheduler, staging, state, telemetry = setup
    staging.separate(state, telemetry)
    assert staging.separate(state, telemetry) is False
    assert len(scheduler.pending) == 1


def test_ignition_after_scheduler_delay(setup):
    clock, scheduler, staging, state, telemetry = setup
    staging.separate(state, telemetry)
    clock.advance(1.0)
    scheduler.service()
    assert state.phase == FlightPhase.STAGE_SEP
    clock.advance(1.0)
    scheduler.service()
    assert state.phase == FlightPhase.SECOND_STAGE
    assert state.engine_status == EngineStatus.RUNNING


def test_ignition_independent_of_mission_time(setup):
    clock, scheduler, staging, state, telemetry = setup
    staging.separate(state, telemetry)
    state.mission_time += 100.0
    scheduler.service()
    assert state.phase == FlightPhase.STAGE_SEP


def test_cancel_prevents_ignition(setup):
    clock, scheduler, staging, state, telemetry = setup
    staging.separate(state, telemetry)
    assert staging.cancel() is True
    clock.advance(5.0)
    scheduler.service()
    assert state.phase == FlightPhase.STAGE_SEP


def test_preempted_phase_not_resurrected(setup):
    clock, scheduler, staging, state, telemetry = setup
    staging.separate(state, telemetry)
    state.phase = FlightPhase.ABORT
    clock.advance(5.0)
    scheduler.service()
    assert state.phase == FlightPhase.ABORT
