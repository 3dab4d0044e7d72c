"""
Launch Vehicle Flight Simulation - Abort Sequencer

Decay-based model of an uncontrolled descent after a mission abort. Each tick
every kinematic and engine parameter decays geometrically toward a floor
until the vehicle comes to rest in the ABORTED_STOPPED phase.

Decay multipliers live in config.AbortDecayRates.
"""

import logging

from . import constants as C
from .config import AbortDecayRates, SimulationConfig
from .state import EngineStatus, FlightPhase, FlightState, Telemetry

logger = logging.getLogger(__name__)


def decay(value: float, rate: float, floor: float = 0.0) -> float:
    """One geometric decay step, never below `floor`."""
    return max(floor, value * rate)


class AbortSequencer:
    """Drives the ABORT phase to ABORTED_STOPPED."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.rates: AbortDecayRates = config.abort_decay

    def _stop(self, state: FlightState, telemetry: Telemetry) -> None:
        telemetry.snap_to_rest()
        state.phase = FlightPhase.ABORTED_STOPPED
        state.engine_status = EngineStatus.SHUTDOWN_ABORTED
        logger.info(f"Abort sequence complete: vehicle stopped, "
                    f"downrange={telemetry.downrange:.1f}km")

    def update(self, state: FlightState, telemetry: Telemetry) -> None:
        """Advance the abort model by one tick."""
        if telemetry.altitude <= 0.0 and telemetry.velocity <= 0.0:
            self._stop(state, telemetry)
            return

        r = self.rates
        ambient = C.AMBIENT_HARDWARE_TEMPERATURE

        telemetry.thrust = 0.0
        telemetry.twr = 0.0
        telemetry.engine_throttle = 0.0
        telemetry.chamber_pressure = decay(telemetry.chamber_pressure, r.chamber_pressure)
        telemetry.chamber_temperature = decay(telemetry.chamber_temperature,
                                              r.chamber_temperature, ambient)

        telemetry.altitude = decay(telemetry.altitude, r.altitude)
        telemetry.velocity = decay(telemetry.velocity, r.velocity)
        telemetry.downrange = decay(telemetry.downrange, r.downrange)
        telemetry.acceleration = -C.G0
        telemetry.g_force = -1.0

        telemetry.fuel_flow_rate = decay(telemetry.fuel_flow_rate, r.flow_rate)
        telemetry.oxidizer_flow_rate = decay(telemetry.oxidizer_flow_rate, r.flow_rate)
        telemetry.total_flow_rate = telemetry.fuel_flow_rate + telemetry.oxidizer_flow_rate
        telemetry.propellant_remaining = decay(telemetry.propellant_remaining, r.propellant)

        telemetry.fuel_turbopump_rpm = decay(telemetry.fuel_turbopump_rpm, r.turbopump)
        telemetry.oxidizer_turbopump_rpm = decay(telemetry.oxidizer_turbopump_rpm, r.turbopump)
        telemetry.turbopump_inlet_pressure = decay(telemetry.turbopump_inlet_pressure,
                                                   r.inlet_pressure)

        telemetry.nozzle_throat_temp = decay(telemetry.nozzle_throat_temp, r.temperature, ambient)
        telemetry.turbine_inlet_temp = decay(telemetry.turbine_inlet_temp, r.temperature, ambient)

        telemetry.vibration_level = decay(telemetry.vibration_level, r.vibration)
        telemetry.exhaust_velocity = decay(telemetry.exhaust_velocity, r.exhaust_velocity)

        # Breakup; an upper stage already lighter than the floor keeps its mass
        mass_floor = min(self.config.vehicle.total_mass * r.mass_floor_fraction,
                         telemetry.mass)
        telemetry.mass = max(mass_floor, telemetry.mass * r.mass)

        if telemetry.altitude < r.near_ground_altitude:
            telemetry.altitude = decay(telemetry.altitude, r.near_ground)

        if telemetry.altitude < r.stop_altitude:
            self._stop(state, telemetry)
