"""
Variable set: the complete state the engine solves over.

Holds the seven kinematic quantities of each axis, the three coupling
scalars, and a per-axis provenance record of which rules fired during the
last solve. The set is owned by ProjectileEngine and passed explicitly to
the solver and the coupling reconciler.
"""

from typing import Dict, List, Iterator, TYPE_CHECKING

from projectile_sim.constants import GRAVITY
from projectile_sim.core.variable import Axis, Quantity, Scalar, KinematicVariable

if TYPE_CHECKING:
    from projectile_sim.core.equations import RuleId


class AxisState:
    """
    The seven kinematic variables of one axis plus provenance.

    Variables are stored in Quantity order so they can be indexed either by
    Quantity or by plain integer position.

    Attributes:
        axis: Which axis this state describes
        variables: List of 7 KinematicVariable objects
        provenance: Rule identifiers that fired during the last solve,
                    in first-fired order (dict used as an ordered set)
    """

    def __init__(self, axis: Axis, acceleration: float = 0.0):
        self.axis = axis
        self.default_acceleration = acceleration
        self.variables: List[KinematicVariable] = [KinematicVariable() for _ in Quantity]
        self.provenance: Dict['RuleId', None] = {}
        self.reset()

    def reset(self) -> None:
        """Restore defaults: p0 = 0 and the axis acceleration, both user-set."""
        for var in self.variables:
            var.clear()
        self.variables[Quantity.P0].set_user(0.0)
        self.variables[Quantity.A].set_user(self.default_acceleration)
        self.provenance.clear()

    def __getitem__(self, quantity: Quantity) -> KinematicVariable:
        return self.variables[quantity]

    def __iter__(self) -> Iterator[KinematicVariable]:
        return iter(self.variables)

    def is_known(self, quantity: Quantity) -> bool:
        return self.variables[quantity].known

    def value(self, quantity: Quantity) -> float:
        return self.variables[quantity].value

    def known_quantities(self) -> frozenset:
        return frozenset(q for q in Quantity if self.variables[q].known)

    def forget_derived(self) -> None:
        for var in self.variables:
            var.forget()
        self.provenance.clear()

    def record(self, rule_id: 'RuleId') -> None:
        self.provenance.setdefault(rule_id, None)

    def provenance_text(self, separator: str = ', ') -> str:
        """Render fired rule labels, de-duplicated and in firing order"""
        return separator.join(rule_id.label for rule_id in self.provenance)

    def __repr__(self) -> str:
        cells = ', '.join(
            f"{q.label}={self.variables[q].value:g}" if self.variables[q].known else f"{q.label}=?"
            for q in Quantity
        )
        return f"AxisState({self.axis.value}: {cells})"


class VariableSet:
    """
    Both axes and the coupling scalars.

    Lifecycle:
        Every variable starts unknown except p0 on both axes (0 m) and the
        accelerations (X = 0, Y = -gravity), which are system defaults
        marked user-set so inference never overrides them.
    """

    def __init__(self, gravity: float = GRAVITY):
        if gravity <= 0:
            raise ValueError(f"Gravity must be positive, got {gravity}")

        self.gravity = gravity
        self.x = AxisState(Axis.X, acceleration=0.0)
        self.y = AxisState(Axis.Y, acceleration=-gravity)
        self.scalars: Dict[Scalar, KinematicVariable] = {s: KinematicVariable() for s in Scalar}

    def reset(self) -> None:
        self.x.reset()
        self.y.reset()
        for var in self.scalars.values():
            var.clear()

    def axis(self, axis: Axis) -> AxisState:
        return self.x if axis is Axis.X else self.y

    def other(self, axis: Axis) -> AxisState:
        return self.y if axis is Axis.X else self.x

    def scalar(self, scalar: Scalar) -> KinematicVariable:
        return self.scalars[scalar]

    def forget_derived(self) -> None:
        """Un-derive everything the user did not supply (start of every solve)."""
        self.x.forget_derived()
        self.y.forget_derived()
        for var in self.scalars.values():
            var.forget()

    def __repr__(self) -> str:
        return f"VariableSet({self.x!r}, {self.y!r})"
