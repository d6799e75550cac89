"""Kinematic inference engine for two-axis projectile motion."""

from projectile_sim.core import (
    Axis,
    Quantity,
    Scalar,
    KinematicVariable,
    VariableView,
    ProjectileEngine,
    SolveReport,
)

__all__ = [
    'Axis',
    'Quantity',
    'Scalar',
    'KinematicVariable',
    'VariableView',
    'ProjectileEngine',
    'SolveReport',
]
