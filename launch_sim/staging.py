"""
Launch Vehicle Flight Simulation - Staging Controller

Handles the stage-1 jettison mass discontinuity and the delayed second-stage
ignition. The ignition delay runs on the scheduler clock, not on simulated
mission time.
"""

import logging
from typing import Optional

from .config import SimulationConfig
from .scheduler import DeferredAction, DeferredScheduler
from .state import EngineStatus, FlightPhase, FlightState, Telemetry

logger = logging.getLogger(__name__)


class StagingController:
    """Performs stage separation and schedules second-stage ignition."""

    def __init__(self, config: SimulationConfig, scheduler: DeferredScheduler):
        self.config = config
        self.scheduler = scheduler
        self.ignition_action: Optional[DeferredAction] = None

    def separate(self, state: FlightState, telemetry: Telemetry) -> bool:
        """
        Jettison stage 1.

        Phase -> STAGE_SEP, stage -> 2, mass -> S2 wet + payload, then
        second-stage ignition is scheduled after the configured delay.

        Returns:
            True if separation happened; False if stage 1 was already gone
        """
        if state.stage_number != 1:
            return False

        state.phase = FlightPhase.STAGE_SEP
        state.stage_number = 2
        state.engine_status = EngineStatus.CUTOFF
        telemetry.thrust = 0.0
        telemetry.mass = self.config.vehicle.upper_stack_mass
        telemetry.propellant_remaining = telemetry.stage2_fuel_remaining
        logger.info(f"Stage separation confirmed at t={state.mission_time:.1f}s, "
                    f"Alt={telemetry.altitude/1000:.1f}km, "
                    f"mass={telemetry.mass:.0f}kg")

        self.ignition_action = self.scheduler.schedule(
            "second_stage_ignition",
            self.config.second_stage_ignition_delay,
            lambda: self._ignite_second_stage(state),
        )
        return True

    def _ignite_second_stage(self, state: FlightState) -> None:
        # Phase may have been pre-empted (abort, landing) without a cancel
        if state.phase != FlightPhase.STAGE_SEP:
            logger.debug(f"Second stage ignition skipped in phase {state.phase.value}")
            return
        state.phase = FlightPhase.SECOND_STAGE
        state.engine_status = EngineStatus.RUNNING
        logger.info(f"Second stage ignition at t={state.mission_time:.1f}s")

    def cancel(self) -> bool:
        """Cancel a pending second-stage ignition."""
        if self.ignition_action is None:
            return False
        cancelled = self.ignition_action.cancel()
        if cancelled:
            logger.info("Pending second stage ignition cancelled")
        return cancelled
