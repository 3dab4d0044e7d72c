"""Shared fixtures for the flight simulation tests."""

import pytest

from launch_sim.config import create_test_config
from launch_sim.scheduler import ManualClock
from launch_sim.simulator import FlightSimulator
from launch_sim.state import FlightPhase


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def sim(clock):
    return FlightSimulator(create_test_config(max_time=1200.0), clock=clock)


@pytest.fixture
def launched_sim(sim):
    """Simulator past the ignition ramp, in LAUNCH."""
    sim.arm_ignition()
    sim.start_ignition_sequence()
    sim.advance()
    assert sim.phase == FlightPhase.LAUNCH
    return sim


@pytest.fixture
def tick(clock):
    """Advance scheduler time and a simulator together, n ticks."""
    def _tick(simulator, n=1):
        telemetry = None
        for _ in range(n):
            clock.advance(simulator.config.dt)
            telemetry = simulator.advance()
        return telemetry
    return _tick
