"""
ProjectileEngine: owns the variable set and orchestrates a full solve.

The engine is responsible for:
  - Accepting user edits, clears and resets
  - Forgetting derived values before every solve
  - Seeding cross-axis knowledge (launch velocity, final speed, time)
  - Alternating the axis solvers so time found on one axis reaches the other
  - Back-deriving the coupling scalars
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Tuple, Union

from projectile_sim.constants import GRAVITY, MAX_ROUNDS, OUTER_PASSES
from projectile_sim.core.coupling import CouplingReconciler
from projectile_sim.core.solver import AxisSolver
from projectile_sim.core.variable import Axis, Quantity, Scalar, KinematicVariable, VariableView
from projectile_sim.core.variable_set import AxisState, VariableSet

log = logging.getLogger(__name__)

SCALAR_TARGET = 'scalar'

Target = Union[Axis, str]
Index = Union[Quantity, Scalar, int, str]


@dataclass
class SolveReport:
    """
    Summary of one orchestration run.

    Attributes:
        passes_run: Outer X/Y passes executed (stops early once a pass adds nothing)
        rounds: (x_rounds, y_rounds) catalogue rounds per pass
        known_after_pass: (x_known, y_known) quantity sets after each pass;
                          entry 0 is the state after seeding
    """
    passes_run: int = 0
    rounds: List[Tuple[int, int]] = field(default_factory=list)
    known_after_pass: List[Tuple[FrozenSet[Quantity], FrozenSet[Quantity]]] = field(default_factory=list)

    @property
    def unresolved(self) -> Dict[Axis, List[Quantity]]:
        """Quantities still unknown on each axis after the solve"""
        if not self.known_after_pass:
            return {Axis.X: list(Quantity), Axis.Y: list(Quantity)}
        x_known, y_known = self.known_after_pass[-1]
        return {
            Axis.X: [q for q in Quantity if q not in x_known],
            Axis.Y: [q for q in Quantity if q not in y_known],
        }

    @property
    def fully_determined(self) -> bool:
        return not any(self.unresolved.values())


class ProjectileEngine:
    """
    Infers every derivable kinematic quantity of a two-axis projectile problem.

    Every edit, clear and reset triggers a full solve from the user-set
    values; derived values never persist across solves.

    Parameters:
        gravity: Magnitude of the default Y acceleration [m/s²]
        max_rounds: Catalogue sweeps per axis per pass
        outer_passes: Maximum X/Y alternations per solve

    Usage:
        engine = ProjectileEngine()
        engine.set_user_value('scalar', Scalar.LAUNCH_SPEED, 20.0)
        engine.set_user_value('scalar', Scalar.LAUNCH_ANGLE, 30.0)
        engine.set_user_value(Axis.Y, Quantity.PF, 0.0)
        engine.variable(Axis.X, Quantity.PF).value   # range, ~35.3 m
    """

    def __init__(self,
                 gravity: float = GRAVITY,
                 max_rounds: int = MAX_ROUNDS,
                 outer_passes: int = OUTER_PASSES):
        if outer_passes < 1:
            raise ValueError(f"outer_passes must be at least 1, got {outer_passes}")

        self.variables = VariableSet(gravity)
        self.solver = AxisSolver(max_rounds)
        self.reconciler = CouplingReconciler()
        self.outer_passes = outer_passes
        self.last_report = self.solve()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_user_value(self, target: Target, index: Index, value: float) -> SolveReport:
        """
        Set one variable or coupling scalar as user-known and re-solve.

        Args:
            target: Axis.X, Axis.Y, 'x', 'y' or 'scalar'
            index: Quantity/Scalar, its integer position, or its label
            value: New value (angles in degrees)

        Raises:
            ValueError: If target/index is invalid or value is not a finite number
        """
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Value must be a number, got {value!r}") from e
        if not math.isfinite(value):
            raise ValueError(f"Value must be finite, got {value}")

        self.variable(target, index).set_user(value)
        return self.solve()

    def clear(self, target: Target, index: Index) -> SolveReport:
        """Reset one variable or scalar to unknown (dropping user input) and re-solve."""
        self.variable(target, index).clear()
        return self.solve()

    def reset_all(self) -> SolveReport:
        """Restore every variable and scalar to its default and re-solve."""
        self.variables.reset()
        return self.solve()

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self) -> SolveReport:
        """
        Run the full inference from the current user-set values.

        Steps:
            1. Forget every derived value and all provenance
            2. Seed launch velocity, final velocity and shared time
            3. Alternate X and Y axis solves, sharing time in between
            4. Back-derive launch speed, launch angle and final speed

        Returns:
            SolveReport (also stored as self.last_report)
        """
        variables = self.variables
        reconciler = self.reconciler
        report = SolveReport()

        variables.forget_derived()

        reconciler.seed_launch_velocity(variables)
        reconciler.seed_final_velocity(variables)
        reconciler.seed_shared_time(variables)
        report.known_after_pass.append(self._known())

        for _ in range(self.outer_passes):
            x_rounds = self.solver.solve(variables.x)
            reconciler.share_time(variables.x, variables.y)
            y_rounds = self.solver.solve(variables.y)
            reconciler.share_time(variables.y, variables.x)

            report.passes_run += 1
            report.rounds.append((x_rounds, y_rounds))
            report.known_after_pass.append(self._known())
            if report.known_after_pass[-1] == report.known_after_pass[-2]:
                break

        reconciler.back_derive_scalars(variables)

        log.debug("solve finished after %d pass(es); unresolved: %s",
                  report.passes_run,
                  {axis.value: [q.label for q in qs] for axis, qs in report.unresolved.items()})

        self.last_report = report
        return report

    def _known(self) -> Tuple[FrozenSet[Quantity], FrozenSet[Quantity]]:
        return self.variables.x.known_quantities(), self.variables.y.known_quantities()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @property
    def x(self) -> AxisState:
        return self.variables.x

    @property
    def y(self) -> AxisState:
        return self.variables.y

    def axis(self, target: Target) -> AxisState:
        """Look up an axis by Axis member or 'x'/'y'."""
        return self.variables.axis(_resolve_axis(target))

    def scalar(self, index: Index) -> KinematicVariable:
        return self.variables.scalar(_resolve_index(Scalar, index))

    def variable(self, target: Target, index: Index) -> KinematicVariable:
        """
        Return the live variable addressed by (target, index).

        Raises:
            ValueError: Unknown target, or index out of range for that target
        """
        if isinstance(target, str) and target.lower() == SCALAR_TARGET:
            return self.scalar(index)
        return self.axis(target)[_resolve_index(Quantity, index)]

    def view(self, target: Target, index: Index) -> VariableView:
        return self.variable(target, index).view()

    def snapshot(self) -> Dict[str, Dict[str, VariableView]]:
        """
        Read-only copy of every cell, keyed by 'x'/'y'/'scalar' then label.

        Example:
            >>> engine.snapshot()['x']['pf'].known
        """
        return {
            'x': {q.label: self.x[q].view() for q in Quantity},
            'y': {q.label: self.y[q].view() for q in Quantity},
            SCALAR_TARGET: {s.label: self.variables.scalar(s).view() for s in Scalar},
        }

    def provenance_text(self, target: Target, separator: str = ', ') -> str:
        """Labels of rules that fired on one axis during the last solve"""
        return self.axis(target).provenance_text(separator)

    def __repr__(self) -> str:
        return f"ProjectileEngine(g={self.variables.gravity}, {self.x!r}, {self.y!r})"


def _resolve_axis(target: Target) -> Axis:
    if isinstance(target, Axis):
        return target
    if isinstance(target, str):
        try:
            return Axis(target.lower())
        except ValueError:
            pass
    raise ValueError(f"Unknown target '{target}': expected 'x', 'y' or '{SCALAR_TARGET}'")


def _resolve_index(kind, index: Index):
    """Map an enum member, integer position or label onto a Quantity/Scalar."""
    if isinstance(index, kind):
        return index
    if isinstance(index, (Quantity, Scalar)):
        raise ValueError(f"{index!r} does not address a {kind.__name__}")
    if isinstance(index, str):
        for member in kind:
            if member.label == index.lower():
                return member
        labels = ', '.join(member.label for member in kind)
        raise ValueError(f"Unknown {kind.__name__} '{index}': expected one of {labels}")
    if isinstance(index, numbers.Integral) and not isinstance(index, bool):
        try:
            return kind(int(index))
        except ValueError:
            pass
    raise ValueError(f"{kind.__name__} index out of range: {index!r}")
