"""
Launch Vehicle Flight Simulation Package

A fixed-step simulation of a two-stage orbital launch vehicle from pad to
orbit, with a catastrophic-abort branch and a propulsive-landing return.

Modules:
    - constants: Physical constants and vehicle parameters
    - config: Immutable configuration dataclasses
    - state: Flight phase machine state and telemetry record
    - atmosphere: Exponential atmosphere, Mach and dynamic pressure
    - forces: Gravity, thrust, drag and mass flow
    - dynamics: Explicit Euler integration of powered and coasting flight
    - guidance: Gravity-turn pitch program and max-Q throttling
    - orbit: Simplified orbital estimate
    - scheduler: Cancellable deferred actions on an injectable clock
    - staging: Stage separation and delayed second-stage ignition
    - mission_manager: Nominal phase transitions
    - abort: Abort decay sequencer
    - recovery: Seven-band propulsive landing sequencer
    - anomaly: Safety-limit checks
    - simulator: FlightSimulator engine (command surface and tick)
    - main: Headless driver and flight log
"""

from .config import (
    ConfigurationError,
    SimulationConfig,
    create_default_config,
    create_test_config,
    validate_config,
)
from .state import EngineStatus, FlightPhase, FlightState, Telemetry
from .anomaly import Anomaly, Severity
from .scheduler import ManualClock
from .simulator import FlightSimulator
from .main import FlightLog, FlightResult, run_flight

__version__ = "1.0.0"
__author__ = "Launch Simulation Team"

__all__ = [
    'ConfigurationError',
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
    'validate_config',
    'EngineStatus',
    'FlightPhase',
    'FlightState',
    'Telemetry',
    'Anomaly',
    'Severity',
    'ManualClock',
    'FlightSimulator',
    'FlightLog',
    'FlightResult',
    'run_flight',
]
