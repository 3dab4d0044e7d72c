"""
Launch Vehicle Flight Simulation - Mission Manager

Evaluates the nominal phase-transition predicates once per tick, after the
phase updater has run:

  - LAUNCH -> ASCENT:          tower cleared (altitude > 1 km)
  - ASCENT -> MECO:            stage-1 propellant exhausted or rated burn time reached
  - MECO -> STAGE_SEP:         configured coast after MECO (mission time)
  - STAGE_SEP -> SECOND_STAGE: deferred ignition owned by the staging controller
  - SECOND_STAGE -> ORBIT:     stage-2 propellant exhausted or targets reached

Abort and landing are commanded side branches and never entered here.
"""

import logging
from typing import Optional

from .config import SimulationConfig
from .staging import StagingController
from .state import EngineStatus, FlightPhase, FlightState, Telemetry

logger = logging.getLogger(__name__)


class MissionManager:
    """
    Owns the transition logic of the nominal flight path.
    """

    def __init__(self, config: SimulationConfig):
        self.config = config

    def update(self, state: FlightState, telemetry: Telemetry,
               staging: StagingController) -> Optional[FlightPhase]:
        """
        Check for phase transitions based on the current telemetry.

        Args:
            state: Flight state, mutated on transition
            telemetry: Telemetry after this tick's physics
            staging: Controller performing the separation event

        Returns:
            The new phase if a transition happened, else None
        """
        previous = state.phase
        mission = self.config.mission

        # LAUNCH -> ASCENT
        if state.phase == FlightPhase.LAUNCH:
            if telemetry.altitude > mission.tower_clear_altitude:
                state.phase = FlightPhase.ASCENT
                logger.info(f"Tower cleared at t={state.mission_time:.1f}s, "
                            f"V={telemetry.velocity:.0f}m/s")

        # ASCENT -> MECO
        if state.phase == FlightPhase.ASCENT and state.stage_number == 1:
            rated = self.config.vehicle.first_stage.burn_time
            if (telemetry.stage1_fuel_remaining <= 0.0 or
                    telemetry.stage1_burn_time >= rated):
                state.phase = FlightPhase.MECO
                state.engine_status = EngineStatus.CUTOFF
                state.meco_time = state.mission_time
                telemetry.thrust = 0.0
                logger.info(f"MECO at t={state.mission_time:.1f}s, "
                            f"Alt={telemetry.altitude/1000:.1f}km, "
                            f"V={telemetry.velocity:.0f}m/s, "
                            f"mass={telemetry.mass:.0f}kg")

        # MECO -> STAGE_SEP
        # Measured from MECO rather than from ignition
        elif state.phase == FlightPhase.MECO:
            meco_time = state.meco_time if state.meco_time is not None else 0.0
            if state.mission_time - meco_time >= self.config.meco_separation_delay:
                staging.separate(state, telemetry)

        # SECOND_STAGE -> ORBIT
        elif state.phase == FlightPhase.SECOND_STAGE:
            if (telemetry.stage2_fuel_remaining <= 0.0 or
                    telemetry.altitude >= mission.target_altitude or
                    telemetry.velocity >= mission.target_velocity):
                state.phase = FlightPhase.ORBIT
                state.engine_status = EngineStatus.CUTOFF
                telemetry.thrust = 0.0
                logger.info(f"Orbital insertion complete at t={state.mission_time:.1f}s, "
                            f"Alt={telemetry.altitude/1000:.1f}km, "
                            f"V={telemetry.velocity:.0f}m/s, "
                            f"Apogee={telemetry.apogee:.1f}km")

        if state.phase != previous:
            return state.phase
        return None
