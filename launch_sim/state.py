"""
Launch Vehicle Flight Simulation - Flight State and Telemetry

This module defines the mutable flight state (phase machine flags) and the
telemetry record. Both are owned by a single FlightSimulator instance; there
is no module-level shared state.

Every telemetry field is allocated at construction with an ambient default,
so consumers never see a partially populated record.
"""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Optional

from . import constants as C
from .config import VehicleSpec


class FlightPhase(Enum):
    PAD = "PAD"
    IGNITION = "IGNITION"
    LAUNCH = "LAUNCH"
    ASCENT = "ASCENT"
    MECO = "MECO"
    STAGE_SEP = "STAGE_SEP"
    SECOND_STAGE = "SECOND_STAGE"
    ORBIT = "ORBIT"
    ABORT = "ABORT"
    ABORTED_STOPPED = "ABORTED_STOPPED"
    LANDING = "LANDING"
    LANDED = "LANDED"


# Phases in which advance() returns the telemetry unchanged
ABSORBING_PHASES = frozenset({
    FlightPhase.PAD,
    FlightPhase.ORBIT,
    FlightPhase.LANDED,
    FlightPhase.ABORTED_STOPPED,
})

TERMINAL_PHASES = frozenset({
    FlightPhase.ORBIT,
    FlightPhase.LANDED,
    FlightPhase.ABORTED_STOPPED,
})

# Mission time is frozen in these phases while physics keeps running
TIME_FROZEN_PHASES = frozenset({FlightPhase.ABORT, FlightPhase.LANDING})


class EngineStatus(Enum):
    OFF = "OFF"
    STARTING = "STARTING"
    RUNNING = "RUNNING"
    CUTOFF = "CUTOFF"
    REENTRY_BURN = "REENTRY_BURN"
    GRID_FIN_CONTROL = "GRID_FIN_CONTROL"
    ENTRY_BURN = "ENTRY_BURN"
    PREPARING_LANDING_BURN = "PREPARING_LANDING_BURN"
    LANDING_BURN = "LANDING_BURN"
    TOUCHDOWN_BURN = "TOUCHDOWN_BURN"
    SHUTDOWN_LANDED = "SHUTDOWN_LANDED"
    SHUTDOWN_ABORTED = "SHUTDOWN_ABORTED"


ENGINE_STATUS_LABELS = {
    EngineStatus.OFF: "OFF",
    EngineStatus.STARTING: "STARTING",
    EngineStatus.RUNNING: "RUNNING",
    EngineStatus.CUTOFF: "CUTOFF",
    EngineStatus.REENTRY_BURN: "RE-ENTRY BURN (3 ENGINES)",
    EngineStatus.GRID_FIN_CONTROL: "GRID FIN CONTROL",
    EngineStatus.ENTRY_BURN: "ENTRY BURN (3 ENGINES)",
    EngineStatus.PREPARING_LANDING_BURN: "PREPARING LANDING BURN",
    EngineStatus.LANDING_BURN: "LANDING BURN (1 ENGINE)",
    EngineStatus.TOUCHDOWN_BURN: "TOUCHDOWN BURN",
    EngineStatus.SHUTDOWN_LANDED: "SHUTDOWN - LANDED",
    EngineStatus.SHUTDOWN_ABORTED: "SHUTDOWN - ABORTED",
}


def engine_status_label(status: EngineStatus) -> str:
    """Human-readable label for an engine status (presentation boundary only)."""
    return ENGINE_STATUS_LABELS[status]


class GuidanceMode(Enum):
    GRAVITY_TURN = "GRAVITY_TURN"


@dataclass
class FlightState:
    """
    Discrete state of the flight state machine.

    Attributes:
        phase: Current flight phase
        stage_number: Active stage (1 or 2)
        ignition_armed: Set by arm_ignition() on the pad
        engine_status: Enumerated engine status
        guidance_mode: Active guidance law
        throttle_level: Commanded throttle (%) in [0, 100]
        mission_time: Seconds since ignition start (frozen during abort/landing)
        abort_flag: True once abort() has been called
        landing_burn_started: Hoverslam ignition latch
        landing_legs_deployed: Landing legs latch
        meco_time: Mission time at main engine cutoff
        ignition_time: Mission time at ignition start
    """
    phase: FlightPhase = FlightPhase.PAD
    stage_number: int = 1
    ignition_armed: bool = False
    engine_status: EngineStatus = EngineStatus.OFF
    guidance_mode: GuidanceMode = GuidanceMode.GRAVITY_TURN
    throttle_level: float = 100.0
    mission_time: float = 0.0
    abort_flag: bool = False
    landing_burn_started: bool = False
    landing_legs_deployed: bool = False
    meco_time: Optional[float] = None
    ignition_time: Optional[float] = None

    def copy(self) -> 'FlightState':
        return replace(self)

    def to_dict(self) -> dict:
        """Flat record with enums rendered for observers."""
        data = asdict(self)
        data['phase'] = self.phase.value
        data['engine_status'] = engine_status_label(self.engine_status)
        data['guidance_mode'] = self.guidance_mode.value
        return data

    def __str__(self) -> str:
        return (f"FlightState(phase={self.phase.value}, "
                f"stage={self.stage_number}, t={self.mission_time:.1f}s)")


@dataclass
class Telemetry:
    """
    Per-tick physical telemetry. Units follow the field comments.
    """
    # Position & velocity
    altitude: float = 0.0  # m
    velocity: float = 0.0  # m/s
    acceleration: float = 0.0  # m/s^2
    downrange: float = 0.0  # km

    # Orbital parameters
    apogee: float = 0.0  # km
    perigee: float = 0.0  # km
    inclination: float = C.TARGET_INCLINATION  # deg
    orbital_velocity: float = 0.0  # m/s

    # Vehicle status
    mass: float = C.TOTAL_MASS  # kg
    thrust: float = 0.0  # N
    twr: float = 0.0
    max_q: float = 0.0  # Pa
    g_force: float = 0.0  # g

    # Propulsion
    propellant_remaining: float = 100.0  # %
    engine_throttle: float = 0.0  # %
    chamber_pressure: float = 0.0  # bar
    exhaust_velocity: float = 0.0  # m/s

    # Attitude
    pitch: float = 90.0  # deg (90 = vertical)
    yaw: float = 0.0  # deg
    roll: float = 0.0  # deg
    flight_path_angle: float = 90.0  # deg
    gimbal_angle_x: float = 0.0  # deg
    gimbal_angle_y: float = 0.0  # deg

    # Environment
    dynamic_pressure: float = 0.0  # Pa
    mach_number: float = 0.0
    atmospheric_density: float = C.RHO_0  # kg/m^3
    temperature: float = C.ATM_T0  # K

    # Stage specific
    stage1_fuel_remaining: float = 100.0  # %
    stage2_fuel_remaining: float = 100.0  # %
    stage1_burn_time: float = 0.0  # s
    stage2_burn_time: float = 0.0  # s

    # Secondary propulsion (driven during abort and landing)
    chamber_temperature: float = C.AMBIENT_HARDWARE_TEMPERATURE  # K
    fuel_flow_rate: float = 0.0  # kg/s
    oxidizer_flow_rate: float = 0.0  # kg/s
    total_flow_rate: float = 0.0  # kg/s
    fuel_turbopump_rpm: float = 0.0
    oxidizer_turbopump_rpm: float = 0.0
    turbopump_inlet_pressure: float = 0.0  # bar
    nozzle_throat_temp: float = C.AMBIENT_HARDWARE_TEMPERATURE  # K
    turbine_inlet_temp: float = C.AMBIENT_HARDWARE_TEMPERATURE  # K
    vibration_level: float = 0.0  # g

    def copy(self) -> 'Telemetry':
        return replace(self)

    def snap_to_rest(self) -> None:
        """Zero kinematics and engine hardware; temperatures return to ambient."""
        ambient = C.AMBIENT_HARDWARE_TEMPERATURE
        self.altitude = 0.0
        self.velocity = 0.0
        self.acceleration = 0.0
        self.g_force = 0.0
        self.thrust = 0.0
        self.twr = 0.0
        self.engine_throttle = 0.0
        self.chamber_pressure = 0.0
        self.chamber_temperature = ambient
        self.fuel_flow_rate = 0.0
        self.oxidizer_flow_rate = 0.0
        self.total_flow_rate = 0.0
        self.fuel_turbopump_rpm = 0.0
        self.oxidizer_turbopump_rpm = 0.0
        self.turbopump_inlet_pressure = 0.0
        self.nozzle_throat_temp = ambient
        self.turbine_inlet_temp = ambient
        self.dynamic_pressure = 0.0
        self.mach_number = 0.0
        self.vibration_level = 0.0
        self.exhaust_velocity = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"Telemetry(alt={self.altitude/1000:.2f}km, "
            f"v={self.velocity:.1f}m/s, "
            f"m={self.mass:.1f}kg)"
        )


def create_initial_state() -> FlightState:
    """Flight state on the pad."""
    return FlightState()


def create_initial_telemetry(vehicle: VehicleSpec = None) -> Telemetry:
    """Telemetry on the pad for the given vehicle."""
    if vehicle is None:
        vehicle = VehicleSpec()
    return Telemetry(mass=vehicle.total_mass)
