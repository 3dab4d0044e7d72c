"""
Launch Vehicle Flight Simulation - Physical Constants and Vehicle Parameters

This module defines the physical constants, Earth parameters, vehicle
specifications, mission targets and safety limits used throughout the
simulation. Values describe a Falcon-X class two-stage vehicle flying to an
ISS-like 400 km orbit.
"""

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Standard gravitational acceleration at sea level (m/s^2)
G0 = 9.81

# Earth mean radius (m)
R_EARTH = 6371000.0

# =============================================================================
# ATMOSPHERE MODEL (exponential, three-layer temperature profile)
# =============================================================================

RHO_0 = 1.225            # Sea level density (kg/m^3)
ATM_P0 = 101325.0        # Sea level pressure (Pa)
H_SCALE = 8000.0         # Scale height (m)
ATMOSPHERE_CEILING = 100000.0  # Above this the atmosphere is vacuum (m)

ATM_T0 = 288.0           # Sea level temperature (K)
ATM_LAPSE_RATE = 0.0065  # Troposphere lapse rate (K/m)
ATM_TROPOPAUSE = 11000.0         # m
ATM_T_STRATOSPHERE = 216.65      # Isothermal layer temperature (K)
ATM_INVERSION_BASE = 25000.0     # m
ATM_INVERSION_RATE = 0.0028      # Inversion layer warming (K/m)
SPACE_TEMPERATURE = 2.7          # Cosmic background temperature (K)

GAMMA = 1.4      # Adiabatic index for air
R_GAS = 287.0    # Specific gas constant (J/(kg*K))

# Speed of sound used by the landing sequencer's Mach estimate (m/s)
SEA_LEVEL_SPEED_OF_SOUND = 343.0

# =============================================================================
# VEHICLE PARAMETERS - FALCON-X
# =============================================================================

VEHICLE_NAME = "Falcon-X"
TOTAL_MASS = 549054.0  # kg at liftoff

# Stage 1 (9 engines)
STAGE1_DRY_MASS = 22200.0          # kg
STAGE1_PROPELLANT_MASS = 411000.0  # kg
STAGE1_THRUST_SL = 7607000.0       # N (sea level)
STAGE1_THRUST_VAC = 8227000.0      # N (vacuum)
STAGE1_BURN_TIME = 162.0           # s
STAGE1_ISP = 282.0                 # s (sea level)
STAGE1_ENGINES = 9

# Stage 2 (single vacuum engine)
STAGE2_DRY_MASS = 4000.0           # kg
STAGE2_PROPELLANT_MASS = 111500.0  # kg
STAGE2_THRUST_VAC = 934000.0       # N (vacuum)
STAGE2_BURN_TIME = 397.0           # s
STAGE2_ISP = 348.0                 # s (vacuum)
STAGE2_ENGINES = 1

PAYLOAD_MASS = 22800.0  # kg to LEO

# Aerodynamics (single drag coefficient, no angle-of-attack effects)
DRAG_COEFFICIENT = 0.3
CROSS_SECTION = 10.52  # m^2

# Nominal chamber pressure at 100 % throttle (bar)
CHAMBER_PRESSURE_NOMINAL = 270.0

# =============================================================================
# MISSION PARAMETERS
# =============================================================================

TARGET_ALTITUDE = 400000.0     # m (ISS altitude)
TARGET_VELOCITY = 7660.0       # m/s (orbital velocity at 400 km)
TARGET_INCLINATION = 51.6      # deg
GRAVITY_TURN_START = 150.0     # m
GRAVITY_TURN_REFERENCE_ALTITUDE = 100000.0  # m over which pitch drops 45 deg
GRAVITY_TURN_PITCH_SPAN = 45.0  # deg
TOWER_CLEAR_ALTITUDE = 1000.0  # m (LAUNCH -> ASCENT)
MANUAL_SEPARATION_MIN_ALTITUDE = 60000.0  # m

# Staging timing
MECO_SEPARATION_DELAY = 3.0       # s of mission time after MECO
SECOND_STAGE_IGNITION_DELAY = 2.0  # s of scheduler time after separation

# Ignition ramp (mission time from ignition start to full thrust)
IGNITION_RAMP_TIME = 0.1  # s

# Max-Q throttle protection (hysteresis band)
MAX_Q_THROTTLE_DOWN_PRESSURE = 35000.0  # Pa
MAX_Q_THROTTLE_UP_PRESSURE = 25000.0    # Pa
MAX_Q_THROTTLE_LEVEL = 70.0             # %

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

DT = 0.1          # Fixed tick (s), 10 Hz
MAX_TIME = 1200.0  # Headless driver cut-off (s)

# =============================================================================
# SAFETY LIMITS (anomaly detection only)
# =============================================================================

LIMIT_MAX_Q = 45000.0        # Pa
LIMIT_MAX_G = 5.0            # g
LIMIT_MAX_THRUST = 8500000.0  # N

# =============================================================================
# ABORT DECAY MODEL (per-tick multipliers)
# =============================================================================

ABORT_ALTITUDE_DECAY = 0.85
ABORT_VELOCITY_DECAY = 0.75
ABORT_DOWNRANGE_DECAY = 0.98
ABORT_CHAMBER_PRESSURE_DECAY = 0.85
ABORT_CHAMBER_TEMPERATURE_DECAY = 0.90
ABORT_FLOW_RATE_DECAY = 0.70
ABORT_PROPELLANT_DECAY = 0.95
ABORT_TURBOPUMP_DECAY = 0.75
ABORT_INLET_PRESSURE_DECAY = 0.80
ABORT_TEMPERATURE_DECAY = 0.88
ABORT_VIBRATION_DECAY = 0.70
ABORT_EXHAUST_VELOCITY_DECAY = 0.80
ABORT_MASS_DECAY = 0.995
ABORT_MASS_FLOOR_FRACTION = 0.3
ABORT_NEAR_GROUND_ALTITUDE = 100.0  # m
ABORT_NEAR_GROUND_DECAY = 0.5
ABORT_STOP_ALTITUDE = 1.0           # m

# Ambient temperature for engine hardware at rest (K)
AMBIENT_HARDWARE_TEMPERATURE = 300.0

# =============================================================================
# PROPULSIVE LANDING
# =============================================================================

# Band altitude boundaries (m)
LANDING_REENTRY_ALTITUDE = 50000.0
LANDING_AERO_ALTITUDE = 7000.0
LANDING_ENTRY_BURN_ALTITUDE = 2000.0
LANDING_COAST_FLOOR_ALTITUDE = 500.0
LANDING_BURN_IGNITION_ALTITUDE = 600.0
LANDING_TOUCHDOWN_ALTITUDE = 20.0
LANDING_LEGS_ALTITUDE = 40.0

# Re-entry burn (3 engines)
REENTRY_VELOCITY_STEP = 30.0     # m/s per tick
REENTRY_VELOCITY_FLOOR = -1200.0  # m/s
REENTRY_THRUST = 1800000.0       # N
REENTRY_THROTTLE = 30.0          # %

# Aerodynamic descent (grid fins)
AERO_VELOCITY_STEP = 15.0
AERO_VELOCITY_FLOOR = -350.0

# Entry burn (3 engines)
ENTRY_VELOCITY_STEP = 10.0
ENTRY_VELOCITY_FLOOR = -250.0
ENTRY_THRUST = 2200000.0
ENTRY_THROTTLE = 70.0

# Coast before landing burn
COAST_VELOCITY_STEP = 8.0
COAST_VELOCITY_FLOOR = -120.0

# Landing burn (single engine)
MAX_SINGLE_ENGINE_THRUST = 850000.0  # N
MIN_ENGINE_THROTTLE_FRACTION = 0.4

# Touchdown
TOUCHDOWN_APPROACH_GAIN = 0.8
TOUCHDOWN_MAX_DESCENT_RATE = 5.0     # m/s
TOUCHDOWN_VELOCITY_GAIN = 10.0       # 1/s
TOUCHDOWN_MIN_THRUST = 400000.0      # N
TOUCHDOWN_MAX_THRUST = 850000.0      # N

# Engine hardware telemetry at full throttle
FUEL_TURBOPUMP_RPM = 20000.0
OXIDIZER_TURBOPUMP_RPM = 22000.0
FUEL_FLOW_NOMINAL = 250.0        # kg/s
OXIDIZER_FLOW_NOMINAL = 650.0    # kg/s
LANDING_CHAMBER_PRESSURE_MIN = 100.0   # bar
LANDING_CHAMBER_PRESSURE_SPAN = 150.0  # bar
LANDING_CHAMBER_TEMP_MIN = 2500.0      # K
LANDING_CHAMBER_TEMP_SPAN = 800.0      # K
