"""Core abstractions for the projectile inference engine."""

from projectile_sim.core.variable import Axis, Quantity, Scalar, KinematicVariable, VariableView
from projectile_sim.core.variable_set import AxisState, VariableSet
from projectile_sim.core.equations import RuleId, Rule, CATALOGUE, apply_catalogue
from projectile_sim.core.solver import AxisSolver
from projectile_sim.core.coupling import CouplingReconciler
from projectile_sim.core.engine import ProjectileEngine, SolveReport

__all__ = [
    'Axis',
    'Quantity',
    'Scalar',
    'KinematicVariable',
    'VariableView',
    'AxisState',
    'VariableSet',
    'RuleId',
    'Rule',
    'CATALOGUE',
    'apply_catalogue',
    'AxisSolver',
    'CouplingReconciler',
    'ProjectileEngine',
    'SolveReport',
]
