"""Trajectory analysis for plotting and summary display."""

from projectile_sim.analysis.trajectory import (
    AxisMotion,
    time_of_flight,
    max_height,
    sample_trajectory,
    plot_bounds,
)

__all__ = [
    'AxisMotion',
    'time_of_flight',
    'max_height',
    'sample_trajectory',
    'plot_bounds',
]
