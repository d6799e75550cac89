"""
Kinematic variables and the identifiers used to address them.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Axis(Enum):
    """One of the two independent 1-D motion problems."""
    X = 'x'
    Y = 'y'


class Quantity(IntEnum):
    """
    Per-axis kinematic quantities, in display order.

    The integer value is the position of the quantity in an axis tuple
    (p0, pf, v0, vf, a, d, t).
    """
    P0 = 0
    PF = 1
    V0 = 2
    VF = 3
    A = 4
    D = 5
    T = 6

    @property
    def label(self) -> str:
        return _QUANTITY_LABELS[self]


_QUANTITY_LABELS = {
    Quantity.P0: 'p0',
    Quantity.PF: 'pf',
    Quantity.V0: 'v0',
    Quantity.VF: 'vf',
    Quantity.A: 'a',
    Quantity.D: 'd',
    Quantity.T: 't',
}


class Scalar(IntEnum):
    """Coupling scalars relating the X and Y velocity vectors."""
    LAUNCH_SPEED = 0
    LAUNCH_ANGLE = 1
    FINAL_SPEED = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def units(self) -> str:
        return 'deg' if self is Scalar.LAUNCH_ANGLE else 'm/s'


@dataclass
class KinematicVariable:
    """
    A single cell of the variable set.

    Attributes:
        value: Current value (0.0 while unknown)
        known: Whether value is valid, either supplied or derived
        user_set: Supplied by the user; never overwritten by inference

    Invariant: user_set implies known.
    """
    value: float = 0.0
    known: bool = False
    user_set: bool = False

    def set_user(self, value: float) -> None:
        self.value = float(value)
        self.known = True
        self.user_set = True

    def derive(self, value: float) -> None:
        """Store an inferred value. User-set values are left untouched."""
        if self.user_set:
            return
        self.value = float(value)
        self.known = True

    def clear(self) -> None:
        self.value = 0.0
        self.known = False
        self.user_set = False

    def forget(self) -> None:
        """Drop a derived value so the next solve can recompute it."""
        if not self.user_set:
            self.value = 0.0
            self.known = False

    def view(self) -> 'VariableView':
        return VariableView(self.value, self.known, self.user_set)

    def __repr__(self) -> str:
        if not self.known:
            return "KinematicVariable(?)"
        origin = 'user' if self.user_set else 'derived'
        return f"KinematicVariable({self.value:g}, {origin})"


@dataclass(frozen=True)
class VariableView:
    """Read-only copy of a variable handed to display and plotting code."""
    value: float
    known: bool
    user_set: bool
