"""
Launch Vehicle Flight Simulation - Deferred Actions

A small cancellable scheduler for actions that must fire after a delay on a
clock independent of the simulation tick (e.g. second-stage ignition after
separation). The clock is injectable: wall-clock `time.monotonic` for live
runs, `ManualClock` for headless runs and tests.

The scheduler never spawns threads; due actions run when the owner calls
`service()`, so all state mutation stays on the owner's thread.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ManualClock:
    """Clock advanced explicitly by its owner (scheduler time)."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"Cannot move clock backwards by {seconds}")
        self._now += seconds
        return self._now


@dataclass
class DeferredAction:
    """Handle for a scheduled callback."""
    name: str
    due: float
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """Cancel if still pending. Returns True if this call cancelled it."""
        if not self.pending:
            return False
        self.cancelled = True
        return True


class DeferredScheduler:
    """Holds deferred actions keyed to a clock."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or time.monotonic
        self._actions: List[DeferredAction] = []

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> DeferredAction:
        """Run `callback` once `delay` seconds of clock time have elapsed."""
        action = DeferredAction(name=name, due=self.clock() + delay, callback=callback)
        self._actions.append(action)
        logger.debug(f"Scheduled '{name}' in {delay:.2f}s")
        return action

    def service(self) -> int:
        """Fire every pending action whose due time has passed, in due order.

        Returns:
            Number of actions fired
        """
        now = self.clock()
        due = sorted((a for a in self._actions if a.pending and a.due <= now),
                     key=lambda a: a.due)
        for action in due:
            action.fired = True
            logger.debug(f"Firing deferred action '{action.name}'")
            action.callback()
        self._actions = [a for a in self._actions if a.pending]
        return len(due)

    def cancel_all(self) -> int:
        """Cancel every pending action. Returns the number cancelled."""
        cancelled = sum(1 for a in self._actions if a.cancel())
        self._actions = []
        if cancelled:
            logger.info(f"Cancelled {cancelled} pending deferred action(s)")
        return cancelled

    @property
    def pending(self) -> List[DeferredAction]:
        return [a for a in self._actions if a.pending]
