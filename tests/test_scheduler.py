"""Tests for the cancellable deferred-action scheduler."""
import pytest

from launch_sim.scheduler import DeferredScheduler, ManualClock


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return DeferredScheduler(clock)


def test_manual_clock_advances():
    clock = ManualClock(5.0)
    assert clock() == 5.0
    assert clock.advance(1.5) == 6.5
    with pytest.raises(ValueError):
        clock.advance(-1.0)


def test_action_fires_only_when_due(scheduler, clock):
    fired = []
    action = scheduler.schedule("ignite", 2.0, lambda: fired.append(clock()))
    clock.advance(1.9)
    assert scheduler.service() == 0
    assert action.pending
    clock.advance(0.2)
    assert scheduler.service() == 1
    assert fired == [pytest.approx(2.1)]
    assert action.fired
    assert not action.pending


def test_action_fires_once(scheduler, clock):
    fired = []
    scheduler.schedule("once", 0.5, lambda: fired.append(1))
    clock.advance(1.0)
    scheduler.service()
    scheduler.service()
    assert fired == [1]


def test_cancelled_action_never_fires(scheduler, clock):
    fired = []
    action = scheduler.schedule("ignite", 1.0, lambda: fired.append(1))
    assert action.cancel() is True
    assert action.cancel() is False
    clock.advance(5.0)
    assert scheduler.service() == 0
    assert fired == []


def test_cancel_all(scheduler, clock):
    fired = []
    scheduler.schedule("a", 1.0, lambda: fired.append('a'))
    scheduler.schedule("b", 2.0, lambda: fired.append('b'))
    assert len(scheduler.pending) == 2
    assert scheduler.cancel_all() == 2
    clock.advance(10.0)
    scheduler.service()
    assert fired == []
    assert scheduler.pending == []


def test_due_order(scheduler, clock):
    fired = []
    scheduler.schedule("late", 2.0, lambda: fired.append('late'))
    scheduler.schedule("early", 1.0, lambda: fired.append('early'))
    clock.advance(3.0)
    assert scheduler.service() == 2
    assert fired == ['early', 'late']


def test_default_clock_is_monotonic():
    import time
    assert DeferredScheduler().clock is time.monotonic
