"""
Trajectory helpers consumed by plotting code.

All functions read the engine between solves and return None when the
quantities they depend on are not known yet.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from projectile_sim.constants import DEFAULT_SAMPLES, PLOT_MARGIN, PLOT_MIN_SPAN
from projectile_sim.core.engine import ProjectileEngine
from projectile_sim.core.variable import Quantity
from projectile_sim.core.variable_set import AxisState


@dataclass(frozen=True)
class AxisMotion:
    """
    Parametric uniformly-accelerated motion along one axis.

        p(t) = p0 + v0·t + ½·a·t²
        v(t) = v0 + a·t

    Attributes:
        p0: Initial position [m]
        v0: Initial velocity [m/s]
        a: Acceleration [m/s²]
    """
    p0: float
    v0: float
    a: float

    @classmethod
    def from_axis(cls, axis: AxisState) -> Optional['AxisMotion']:
        """Build from a solved axis; None unless p0, v0 and a are all known"""
        if not all(axis.is_known(q) for q in (Quantity.P0, Quantity.V0, Quantity.A)):
            return None
        return cls(axis.value(Quantity.P0), axis.value(Quantity.V0), axis.value(Quantity.A))

    def position(self, t):
        """Position at time t (scalar or numpy array)"""
        return self.p0 + self.v0 * t + 0.5 * self.a * t ** 2

    def velocity(self, t):
        return self.v0 + self.a * t


def time_of_flight(engine: ProjectileEngine) -> Optional[float]:
    """Shared time once known on either axis"""
    for axis in (engine.x, engine.y):
        if axis.is_known(Quantity.T):
            return axis.value(Quantity.T)
    return None


def max_height(engine: ProjectileEngine) -> Optional[float]:
    """
    Apex height of the Y motion.

    Only meaningful for a rising launch under downward acceleration: requires
    Y acceleration known negative and Y initial velocity known positive.
    An unknown starting height is taken as 0.

    Returns:
        y at t = -v0/a, or None if not applicable
    """
    y = engine.y
    if not (y.is_known(Quantity.V0) and y.is_known(Quantity.A)):
        return None

    v0 = y.value(Quantity.V0)
    a = y.value(Quantity.A)
    if a >= 0 or v0 <= 0:
        return None

    y0 = y.value(Quantity.P0) if y.is_known(Quantity.P0) else 0.0
    t_apex = -v0 / a
    return AxisMotion(y0, v0, a).position(t_apex)


def sample_trajectory(engine: ProjectileEngine,
                      samples: int = DEFAULT_SAMPLES) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """
    Sample x(t), y(t) evenly over [0, time_of_flight].

    Args:
        engine: Solved engine
        samples: Number of points including both endpoints (>= 2)

    Returns:
        (t, x, y) arrays, or None if either axis motion or a positive
        time of flight is unknown

    Raises:
        ValueError: If samples < 2
    """
    if samples < 2:
        raise ValueError(f"Need at least 2 samples, got {samples}")

    x_motion = AxisMotion.from_axis(engine.x)
    y_motion = AxisMotion.from_axis(engine.y)
    total_time = time_of_flight(engine)
    if x_motion is None or y_motion is None or total_time is None or total_time <= 0:
        return None

    t = np.linspace(0.0, total_time, samples)
    return t, x_motion.position(t), y_motion.position(t)


def plot_bounds(x: np.ndarray,
                y: np.ndarray,
                margin: float = PLOT_MARGIN,
                min_span: float = PLOT_MIN_SPAN) -> Tuple[float, float, float, float]:
    """
    Padded axis limits for a sampled path.

    Each span is widened to at least min_span, then both ends are padded by
    margin times the span.

    Returns:
        (x_min, x_max, y_min, y_max)

    Raises:
        ValueError: If margin is negative, min_span is not positive, or the
                    arrays are empty
    """
    if margin < 0:
        raise ValueError(f"Margin must be non-negative, got {margin}")
    if min_span <= 0:
        raise ValueError(f"Minimum span must be positive, got {min_span}")

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.size == 0 or y.size == 0:
        raise ValueError("Cannot compute bounds of an empty path")

    limits = []
    for values in (x, y):
        lo, hi = float(values.min()), float(values.max())
        span = max(hi - lo, min_span)
        limits.extend([lo - span * margin, hi + span * margin])
    return tuple(limits)
