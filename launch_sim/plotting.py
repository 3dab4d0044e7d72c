"""
Launch Vehicle Flight Simulation - Flight Visualization

Batch plotting of a FlightLog: altitude, velocity, mass, dynamic pressure,
thrust/throttle, propellant and a combined dashboard. Phase changes are
marked on every time-history plot.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Tuple

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
import numpy as np

logger = logging.getLogger(__name__)

PHASE_COLORS = {
    'LAUNCH': '#2ca02c',
    'ASCENT': '#1f77b4',
    'MECO': '#d62728',
    'STAGE_SEP': '#ff7f0e',
    'SECOND_STAGE': '#9467bd',
    'ORBIT': '#17becf',
    'ABORT': '#8c564b',
    'ABORTED_STOPPED': '#7f7f7f',
    'LANDING': '#bcbd22',
    'LANDED': '#e377c2',
}


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class FlightData:
    """Log columns as numpy arrays, in plotting units.

    Attributes:
        time: Elapsed time (s)
        altitude: Altitude (km)
        velocity: Velocity (m/s)
        mass: Vehicle mass (t)
        dynamic_pressure: Dynamic pressure (kPa)
        max_q: Running max dynamic pressure (kPa)
        thrust: Thrust (kN)
        throttle: Engine throttle (%)
        propellant: Active-stage propellant remaining (%)
        mach: Mach number
        pitch: Pitch angle (deg)
        phase_changes: (time, phase) pairs
    """
    time: np.ndarray
    altitude: np.ndarray
    velocity: np.ndarray
    mass: np.ndarray
    dynamic_pressure: np.ndarray
    max_q: np.ndarray
    thrust: np.ndarray
    throttle: np.ndarray
    propellant: np.ndarray
    mach: np.ndarray
    pitch: np.ndarray
    phase_changes: List[Tuple[float, str]]


def configure_plot_style() -> None:
    """Defaults for report-quality plots."""
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'figure.dpi': 100,
        'savefig.dpi': 150,
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'grid.linewidth': 0.5,
        'font.size': 11,
        'axes.titlesize': 13,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'lines.linewidth': 1.8,
        'xtick.direction': 'in',
        'ytick.direction': 'in',
    })


def extract_log_data(log) -> FlightData:
    """Convert a FlightLog into plotting arrays."""
    return FlightData(
        time=np.asarray(log.time, dtype=float),
        altitude=np.asarray(log.altitude, dtype=float) / 1000.0,
        velocity=np.asarray(log.velocity, dtype=float),
        mass=np.asarray(log.mass, dtype=float) / 1000.0,
        dynamic_pressure=np.asarray(log.dynamic_pressure, dtype=float) / 1000.0,
        max_q=np.asarray(log.max_q, dtype=float) / 1000.0,
        thrust=np.asarray(log.thrust, dtype=float) / 1000.0,
        throttle=np.asarray(log.throttle, dtype=float),
        propellant=np.asarray(log.propellant_remaining, dtype=float),
        mach=np.asarray(log.mach_number, dtype=float),
        pitch=np.asarray(log.pitch, dtype=float),
        phase_changes=log.phase_changes(),
    )


def _mark_phases(ax: Axes, data: FlightData) -> None:
    """Vertical line at every phase change after the first."""
    for t, phase in data.phase_changes[1:]:
        ax.axvline(t, color=PHASE_COLORS.get(phase, 'gray'), linestyle='--',
                   linewidth=1.0, alpha=0.7, label=phase)


def _save(fig, output_dir: str, name: str) -> str:
    plt.tight_layout()
    path = os.path.join(output_dir, name)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


# =============================================================================
# Individual Plots
# =============================================================================

def plot_altitude_profile(data: FlightData, output_dir: str) -> str:
    """Altitude vs time with phase markers."""
    fig, ax = plt.subplots()
    ax.fill_between(data.time, 0, data.altitude, alpha=0.25, color='#1f77b4')
    ax.plot(data.time, data.altitude, 'b-', linewidth=2, label='Altitude')
    _mark_phases(ax, data)

    peak = int(np.argmax(data.altitude))
    ax.scatter([data.time[peak]], [data.altitude[peak]], c='red', s=80, marker='x',
               zorder=5, label=f'Peak ({data.altitude[peak]:.1f} km)')

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Altitude Profile', fontweight='bold')
    ax.legend(loc='best', framealpha=0.95)
    ax.set_xlim(0, data.time[-1])
    return _save(fig, output_dir, '01_altitude_profile.png')


def plot_velocity_profile(data: FlightData, output_dir: str) -> str:
    """Velocity along the flight path vs time."""
    fig, ax = plt.subplots()
    ax.plot(data.time, data.velocity, 'r-', linewidth=2, label='Velocity')
    ax.axhline(0.0, color='black', linewidth=0.8)
    _mark_phases(ax, data)

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Velocity (m/s)')
    ax.set_title('Velocity Profile', fontweight='bold')
    ax.legend(loc='best', framealpha=0.95)
    ax.set_xlim(0, data.time[-1])
    return _save(fig, output_dir, '02_velocity_profile.png')


def plot_mass_profile(data: FlightData, output_dir: str) -> str:
    """Vehicle mass vs time; staging shows as a step."""
    fig, ax = plt.subplots()
    ax.fill_between(data.time, 0, data.mass, alpha=0.25, color='#2ca02c')
    ax.plot(data.time, data.mass, 'g-', linewidth=2, label='Vehicle Mass')
    _mark_phases(ax, data)

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Mass (tonnes)')
    ax.set_title('Vehicle Mass Profile', fontweight='bold')
    ax.legend(loc='upper right', framealpha=0.95)
    ax.set_xlim(0, data.time[-1])
    ax.set_ylim(0, None)
    return _save(fig, output_dir, '03_mass_profile.png')


def plot_dynamic_pressure(data: FlightData, output_dir: str) -> str:
    """Dynamic pressure and the running max-Q."""
    fig, ax = plt.subplots()
    ax.plot(data.time, data.dynamic_pressure, 'm-', linewidth=2, label='Dynamic Pressure')
    ax.plot(data.time, data.max_q, 'k:', linewidth=1.5, label='Max-Q (running)')
    _mark_phases(ax, data)

    if len(data.max_q):
        ax.text(0.98, 0.95, f'Max-Q = {data.max_q[-1]:.1f} kPa',
                transform=ax.transAxes, fontsize=10, ha='right', va='top',
                bbox=dict(boxstyle='round', facecolor='white', alpha=0.9))

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Dynamic Pressure (kPa)')
    ax.set_title('Dynamic Pressure', fontweight='bold')
    ax.legend(loc='upper left', framealpha=0.95)
    ax.set_xlim(0, data.time[-1])
    ax.set_ylim(0, None)
    return _save(fig, output_dir, '04_dynamic_pressure.png')


def plot_thrust_throttle(data: FlightData, output_dir: str) -> str:
    """Thrust (left axis) and throttle (right axis)."""
    fig, ax = plt.subplots()
    ax.plot(data.time, data.thrust, 'b-', linewidth=2, label='Thrust')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Thrust (kN)', color='b')
    _mark_phases(ax, data)

    ax2 = ax.twinx()
    ax2.plot(data.time, data.throttle, 'r--', linewidth=1.5, label='Throttle')
    ax2.set_ylabel('Throttle (%)', color='r')
    ax2.set_ylim(0, 110)
    ax2.grid(False)

    ax.set_title('Thrust and Throttle', fontweight='bold')
    ax.set_xlim(0, data.time[-1])
    return _save(fig, output_dir, '05_thrust_throttle.png')


def plot_propellant(data: FlightData, output_dir: str) -> str:
    """Active-stage propellant remaining."""
    fig, ax = plt.subplots()
    ax.plot(data.time, data.propellant, color='#ff7f0e', linewidth=2,
            label='Propellant Remaining')
    _mark_phases(ax, data)

    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Propellant (%)')
    ax.set_title('Propellant Remaining (active stage)', fontweight='bold')
    ax.legend(loc='upper right', framealpha=0.95)
    ax.set_xlim(0, data.time[-1])
    ax.set_ylim(0, 105)
    return _save(fig, output_dir, '06_propellant.png')


def plot_dashboard(data: FlightData, output_dir: str) -> str:
    """Four-panel summary: altitude, velocity, Mach, pitch."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 9))
    panels = [
        (axes[0, 0], data.altitude, 'Altitude (km)', 'b'),
        (axes[0, 1], data.velocity, 'Velocity (m/s)', 'r'),
        (axes[1, 0], data.mach, 'Mach', 'g'),
        (axes[1, 1], data.pitch, 'Pitch (deg)', 'k'),
    ]
    for ax, series, label, color in panels:
        ax.plot(data.time, series, color=color, linewidth=1.5)
        ax.set_ylabel(label)
        ax.set_xlabel('Time (s)')
        ax.set_xlim(0, data.time[-1])
        for t, phase in data.phase_changes[1:]:
            ax.axvline(t, color=PHASE_COLORS.get(phase, 'gray'), linestyle='--',
                       linewidth=0.8, alpha=0.6)

    final_phase = data.phase_changes[-1][1] if data.phase_changes else 'UNKNOWN'
    fig.suptitle(f'Flight Dashboard (final phase: {final_phase})', fontweight='bold')
    return _save(fig, output_dir, '07_dashboard.png')


# =============================================================================
# Main Entry Point
# =============================================================================

def generate_all_plots(log, output_dir: str = "plots") -> List[str]:
    """Generate every flight plot for a FlightLog.

    Args:
        log: FlightLog from run_flight()
        output_dir: Directory to save plots (created if it doesn't exist)

    Returns:
        List of paths to saved plot files

    Raises:
        ValueError: If the log is empty
    """
    if len(log) == 0:
        raise ValueError("Cannot plot an empty flight log")

    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    data = extract_log_data(log)

    plot_functions = [
        plot_altitude_profile,
        plot_velocity_profile,
        plot_mass_profile,
        plot_dynamic_pressure,
        plot_thrust_throttle,
        plot_propellant,
        plot_dashboard,
    ]

    saved_files = []
    for plot_func in plot_functions:
        path = plot_func(data, output_dir)
        saved_files.append(path)
        logger.debug(f"Saved {path}")

    logger.info(f"Generated {len(saved_files)} plots in {output_dir}")
    return saved_files
