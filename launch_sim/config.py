"""
Launch Vehicle Flight Simulation - Configuration

This module provides immutable configuration dataclasses for dependency
injection, allowing different vehicles, limits and timing to be passed to a
simulator without modifying global constants.

Create modified configs via dataclasses.replace() or create_test_config().
"""

from dataclasses import dataclass, field

from . import constants as C


class ConfigurationError(ValueError):
    """Raised when a configuration describes a physically impossible vehicle."""
    pass


@dataclass(frozen=True)
class StageSpec:
    """Propulsion and mass properties of a single stage."""
    dry_mass: float
    propellant_mass: float
    thrust_sl: float
    thrust_vac: float
    burn_time: float
    specific_impulse: float
    engines: int = 1


@dataclass(frozen=True)
class VehicleSpec:
    """
    Static description of the two-stage vehicle.

    Attributes:
        first_stage: Booster stage, pressure-compensated thrust
        second_stage: Upper stage, always at vacuum thrust
        payload_mass: Payload carried to orbit (kg)
        drag_coefficient: Single Cd for the whole stack
        cross_section: Reference area (m^2)
        total_mass: Liftoff mass (kg)
    """
    name: str = C.VEHICLE_NAME
    first_stage: StageSpec = field(default_factory=lambda: StageSpec(
        dry_mass=C.STAGE1_DRY_MASS,
        propellant_mass=C.STAGE1_PROPELLANT_MASS,
        thrust_sl=C.STAGE1_THRUST_SL,
        thrust_vac=C.STAGE1_THRUST_VAC,
        burn_time=C.STAGE1_BURN_TIME,
        specific_impulse=C.STAGE1_ISP,
        engines=C.STAGE1_ENGINES,
    ))
    second_stage: StageSpec = field(default_factory=lambda: StageSpec(
        dry_mass=C.STAGE2_DRY_MASS,
        propellant_mass=C.STAGE2_PROPELLANT_MASS,
        thrust_sl=C.STAGE2_THRUST_VAC,
        thrust_vac=C.STAGE2_THRUST_VAC,
        burn_time=C.STAGE2_BURN_TIME,
        specific_impulse=C.STAGE2_ISP,
        engines=C.STAGE2_ENGINES,
    ))
    payload_mass: float = C.PAYLOAD_MASS
    drag_coefficient: float = C.DRAG_COEFFICIENT
    cross_section: float = C.CROSS_SECTION
    total_mass: float = C.TOTAL_MASS

    def stage(self, number: int) -> StageSpec:
        """Return the spec for stage 1 or 2."""
        return self.first_stage if number == 1 else self.second_stage

    @property
    def upper_stack_mass(self) -> float:
        """Mass left after stage-1 jettison: S2 wet + payload (kg)."""
        s2 = self.second_stage
        return s2.dry_mass + s2.propellant_mass + self.payload_mass

    def burnout_mass(self, number: int) -> float:
        """Lowest mass the vehicle may reach while stage `number` burns."""
        if number == 1:
            return max(self.total_mass - self.first_stage.propellant_mass,
                       self.first_stage.dry_mass + self.payload_mass)
        return self.second_stage.dry_mass + self.payload_mass


@dataclass(frozen=True)
class MissionTargets:
    """Orbit targets and guidance/staging trigger points."""
    target_altitude: float = C.TARGET_ALTITUDE
    target_velocity: float = C.TARGET_VELOCITY
    inclination: float = C.TARGET_INCLINATION
    gravity_turn_start: float = C.GRAVITY_TURN_START
    tower_clear_altitude: float = C.TOWER_CLEAR_ALTITUDE
    manual_separation_min_altitude: float = C.MANUAL_SEPARATION_MIN_ALTITUDE


@dataclass(frozen=True)
class Limits:
    """Safety limits consulted only by the anomaly detector."""
    max_q: float = C.LIMIT_MAX_Q
    max_g: float = C.LIMIT_MAX_G
    max_thrust: float = C.LIMIT_MAX_THRUST


@dataclass(frozen=True)
class AbortDecayRates:
    """Per-tick multiplicative decay applied while the vehicle is aborting."""
    altitude: float = C.ABORT_ALTITUDE_DECAY
    velocity: float = C.ABORT_VELOCITY_DECAY
    downrange: float = C.ABORT_DOWNRANGE_DECAY
    chamber_pressure: float = C.ABORT_CHAMBER_PRESSURE_DECAY
    chamber_temperature: float = C.ABORT_CHAMBER_TEMPERATURE_DECAY
    flow_rate: float = C.ABORT_FLOW_RATE_DECAY
    propellant: float = C.ABORT_PROPELLANT_DECAY
    turbopump: float = C.ABORT_TURBOPUMP_DECAY
    inlet_pressure: float = C.ABORT_INLET_PRESSURE_DECAY
    temperature: float = C.ABORT_TEMPERATURE_DECAY
    vibration: float = C.ABORT_VIBRATION_DECAY
    exhaust_velocity: float = C.ABORT_EXHAUST_VELOCITY_DECAY
    mass: float = C.ABORT_MASS_DECAY
    mass_floor_fraction: float = C.ABORT_MASS_FLOOR_FRACTION
    near_ground_altitude: float = C.ABORT_NEAR_GROUND_ALTITUDE
    near_ground: float = C.ABORT_NEAR_GROUND_DECAY
    stop_altitude: float = C.ABORT_STOP_ALTITUDE


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for a simulator instance.

    Section grouping:
      1. Simulation timing
      2. Vehicle, mission and limits
      3. Staging
      4. Guidance
      5. Abort model
      6. Misc
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    dt: float = C.DT
    max_time: float = C.MAX_TIME

    # ── 2. Vehicle, mission and limits ───────────────────────────────────
    vehicle: VehicleSpec = field(default_factory=VehicleSpec)
    mission: MissionTargets = field(default_factory=MissionTargets)
    limits: Limits = field(default_factory=Limits)

    # ── 3. Staging ───────────────────────────────────────────────────────
    meco_separation_delay: float = C.MECO_SEPARATION_DELAY
    second_stage_ignition_delay: float = C.SECOND_STAGE_IGNITION_DELAY
    ignition_ramp_time: float = C.IGNITION_RAMP_TIME

    # ── 4. Guidance ──────────────────────────────────────────────────────
    max_q_throttle_down: float = C.MAX_Q_THROTTLE_DOWN_PRESSURE
    max_q_throttle_up: float = C.MAX_Q_THROTTLE_UP_PRESSURE
    max_q_throttle_level: float = C.MAX_Q_THROTTLE_LEVEL

    # ── 5. Abort model ───────────────────────────────────────────────────
    abort_decay: AbortDecayRates = field(default_factory=AbortDecayRates)

    # ── 6. Misc ──────────────────────────────────────────────────────────
    verbose: bool = True


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(dt: float = 0.1, max_time: float = 100.0,
                       **overrides) -> SimulationConfig:
    """Create a quiet config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)


def validate_config(config: SimulationConfig) -> SimulationConfig:
    """
    Check a configuration for impossible values.

    Returns:
        The same config, for chaining

    Raises:
        ConfigurationError: On non-positive timing, mass, burn time, Isp or limits
    """
    if config.dt <= 0:
        raise ConfigurationError(f"Time step dt must be positive, got {config.dt}")
    if config.second_stage_ignition_delay < 0:
        raise ConfigurationError("Second-stage ignition delay cannot be negative")

    vehicle = config.vehicle
    for number in (1, 2):
        stage = vehicle.stage(number)
        if stage.dry_mass <= 0 or stage.propellant_mass <= 0:
            raise ConfigurationError(f"Stage {number} masses must be positive")
        if stage.burn_time <= 0:
            raise ConfigurationError(f"Stage {number} burn time must be positive")
        if stage.specific_impulse <= 0:
            raise ConfigurationError(f"Stage {number} Isp must be positive")
    if vehicle.total_mass <= vehicle.upper_stack_mass:
        raise ConfigurationError(
            f"Liftoff mass {vehicle.total_mass:.0f} kg does not exceed "
            f"upper stack mass {vehicle.upper_stack_mass:.0f} kg"
        )

    limits = config.limits
    if min(limits.max_q, limits.max_g, limits.max_thrust) <= 0:
        raise ConfigurationError("Safety limits must be positive")
    return config
