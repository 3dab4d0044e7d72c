"""
Launch Vehicle Flight Simulation - Flight Simulator

FlightSimulator is the single owner of one flight: it holds the flight state,
the telemetry record and the pending deferred actions, exposes the command
surface used by an external driver, and runs the per-tick pipeline:

    1. service due deferred actions (second-stage ignition)
    2. advance mission time (frozen during abort and landing)
    3. dispatch to the phase updater
    4. refresh atmosphere and orbital estimate
    5. evaluate phase transitions

Commands that are invalid for the current phase are silent no-ops (logged at
DEBUG) and report False. Read accessors return copies, so callers can never
mutate the simulator's state.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from .abort import AbortSequencer
from .anomaly import Anomaly, AnomalyDetector
from .atmosphere import update_environment
from .config import SimulationConfig, create_default_config, validate_config
from .dynamics import simulate_coast, simulate_ignition, simulate_powered_flight
from .mission_manager import MissionManager
from .orbit import update_orbital_parameters
from .recovery import LandingSequencer
from .scheduler import DeferredScheduler
from .staging import StagingController
from .state import (
    ABSORBING_PHASES,
    TERMINAL_PHASES,
    TIME_FROZEN_PHASES,
    EngineStatus,
    FlightPhase,
    FlightState,
    Telemetry,
    create_initial_state,
    create_initial_telemetry,
)

logger = logging.getLogger(__name__)

# Phases in which stage 1 is still attached and may be jettisoned on command
SEPARABLE_PHASES = frozenset({FlightPhase.LAUNCH, FlightPhase.ASCENT, FlightPhase.MECO})


class FlightSimulator:
    """
    Two-stage launch vehicle flight simulation engine.

    Args:
        config: Simulation configuration (validated at construction)
        clock: Clock for deferred actions; defaults to time.monotonic.
               Pass a scheduler.ManualClock for deterministic runs.

    Raises:
        ConfigurationError: If the configuration is physically impossible
    """

    def __init__(self, config: SimulationConfig = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = validate_config(config or create_default_config())
        self.clock = clock
        self.scheduler = DeferredScheduler(clock)
        self.state: FlightState = create_initial_state()
        self.telemetry: Telemetry = create_initial_telemetry(self.config.vehicle)

        self.staging = StagingController(self.config, self.scheduler)
        self.mission_manager = MissionManager(self.config)
        self.abort_sequencer = AbortSequencer(self.config)
        self.landing_sequencer = LandingSequencer(self.config)
        self.anomaly_detector = AnomalyDetector(self.config.limits)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def phase(self) -> FlightPhase:
        return self.state.phase

    @property
    def is_terminal(self) -> bool:
        """True once ORBIT, LANDED or ABORTED_STOPPED is reached."""
        return self.state.phase in TERMINAL_PHASES

    def get_state(self) -> FlightState:
        return self.state.copy()

    def get_telemetry(self) -> Telemetry:
        return self.telemetry.copy()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def arm_ignition(self) -> bool:
        """Arm the ignition sequence. Valid only on the pad."""
        if self.state.phase != FlightPhase.PAD:
            logger.debug(f"arm_ignition ignored in phase {self.state.phase.value}")
            return False
        self.state.ignition_armed = True
        logger.info("Ignition sequence armed")
        return True

    def start_ignition_sequence(self) -> bool:
        """Start engine ignition. Requires an armed ignition on the pad."""
        if not self.state.ignition_armed or self.state.phase != FlightPhase.PAD:
            logger.debug(f"start_ignition_sequence ignored in phase {self.state.phase.value}")
            return False
        self.state.phase = FlightPhase.IGNITION
        self.state.engine_status = EngineStatus.STARTING
        self.state.ignition_time = self.state.mission_time
        logger.info("Engine ignition sequence started")
        return True

    def launch(self) -> bool:
        """Liftoff from IGNITION, or directly from PAD for quick-launch flows."""
        if self.state.phase not in (FlightPhase.IGNITION, FlightPhase.PAD):
            logger.debug(f"launch ignored in phase {self.state.phase.value}")
            return False
        self.state.phase = FlightPhase.LAUNCH
        self.state.engine_status = EngineStatus.RUNNING
        logger.info("Liftoff!")
        return True

    def abort(self) -> bool:
        """Force the ABORT branch from any phase; thrust drops to zero at once."""
        if self.state.phase in (FlightPhase.ABORT, FlightPhase.ABORTED_STOPPED):
            return False
        self.staging.cancel()
        self.scheduler.cancel_all()
        previous = self.state.phase
        self.state.phase = FlightPhase.ABORT
        self.state.abort_flag = True
        self.state.engine_status = EngineStatus.CUTOFF
        self.telemetry.thrust = 0.0
        logger.warning(f"Mission abort initiated from {previous.value} at "
                       f"t={self.state.mission_time:.1f}s, "
                       f"Alt={self.telemetry.altitude/1000:.2f}km")
        return True

    def initiate_landing(self) -> bool:
        """Force the LANDING branch from any phase."""
        if self.state.phase == FlightPhase.LANDING:
            return False
        self.staging.cancel()
        self.scheduler.cancel_all()
        previous = self.state.phase
        self.state.phase = FlightPhase.LANDING
        self.state.landing_burn_started = False
        logger.info(f"Landing sequence initiated from {previous.value} at "
                    f"Alt={self.telemetry.altitude/1000:.2f}km, "
                    f"V={self.telemetry.velocity:.0f}m/s")
        return True

    def set_throttle(self, level: float) -> float:
        """Store a throttle command clamped to [0, 100] %. Returns the stored value."""
        clamped = float(np.clip(level, 0.0, 100.0))
        self.state.throttle_level = clamped
        logger.debug(f"Throttle command {level} -> {clamped:.1f}%")
        return clamped

    def separate_stage(self) -> bool:
        """Manual stage separation while stage 1 is still attached."""
        if self.state.phase not in SEPARABLE_PHASES:
            logger.debug(f"separate_stage ignored in phase {self.state.phase.value}")
            return False
        return self.staging.separate(self.state, self.telemetry)

    def request_manual_separation(self) -> bool:
        """Operator separation request: honoured only in ASCENT above the minimum altitude."""
        min_altitude = self.config.mission.manual_separation_min_altitude
        if (self.state.phase != FlightPhase.ASCENT or
                self.telemetry.altitude <= min_altitude):
            logger.debug(f"Manual separation refused: phase={self.state.phase.value}, "
                         f"Alt={self.telemetry.altitude:.0f}m")
            return False
        return self.separate_stage()

    def check_anomalies(self) -> List[Anomaly]:
        """Limit checks on the current telemetry. Never changes flight state."""
        return self.anomaly_detector.check(self.telemetry)

    def service_deferred(self) -> int:
        """Fire any deferred actions that are due. Returns the number fired."""
        return self.scheduler.service()

    def reset(self) -> None:
        """Return to a fresh pad state, cancelling anything still pending."""
        self.scheduler.cancel_all()
        self.state = create_initial_state()
        self.telemetry = create_initial_telemetry(self.config.vehicle)
        self.staging = StagingController(self.config, self.scheduler)
        logger.info("Simulation reset")

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self) -> Telemetry:
        """
        Run one fixed time step.

        Returns:
            Snapshot of the telemetry after the step. In absorbing phases the
            step is a no-op and the unchanged telemetry is returned.
        """
        state = self.state
        if state.phase in ABSORBING_PHASES:
            return self.telemetry.copy()

        self.scheduler.service()

        if state.phase not in TIME_FROZEN_PHASES:
            state.mission_time = round(state.mission_time + self.config.dt, 9)

        self._dispatch()

        update_environment(self.telemetry)
        update_orbital_parameters(self.telemetry)

        new_phase = self.mission_manager.update(state, self.telemetry, self.staging)
        if new_phase is not None:
            logger.debug(f"Phase -> {new_phase.value}")

        return self.telemetry.copy()

    def _dispatch(self) -> None:
        state, telemetry, config = self.state, self.telemetry, self.config
        phase = state.phase

        if phase == FlightPhase.IGNITION:
            if simulate_ignition(state, telemetry, config):
                state.phase = FlightPhase.LAUNCH
                state.engine_status = EngineStatus.RUNNING
                logger.info("All engines at full thrust")
        elif phase in (FlightPhase.LAUNCH, FlightPhase.ASCENT, FlightPhase.SECOND_STAGE):
            simulate_powered_flight(state, telemetry, config)
        elif phase in (FlightPhase.MECO, FlightPhase.STAGE_SEP):
            simulate_coast(state, telemetry, config)
        elif phase == FlightPhase.ABORT:
            self.abort_sequencer.update(state, telemetry)
        elif phase == FlightPhase.LANDING:
            self.landing_sequencer.update(state, telemetry)
