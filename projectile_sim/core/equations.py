"""
Equation catalogue: closed-form constant-acceleration identities.

Each rule is a (precondition, compute, identifier) triple over one axis
tuple (p0, pf, v0, vf, a, d, t):

    precondition: the output is unknown and every required input is known
    compute:      closed-form expression; returns None when a numeric guard
                  rejects it (zero denominator, negative discriminant,
                  negative time)
    identifier:   RuleId, recorded in the axis provenance when the rule fires

Rules are evaluated in catalogue order. Exact rules come first; the
velocity-squared rules, which must guess a sign, come last so that a
velocity recoverable from t is never guessed from its magnitude instead.

Governing identities:
    d = pf - p0
    vf = v0 + a·t
    d = v0·t + ½·a·t²  =  vf·t - ½·a·t²  =  (v0 + vf)·t / 2
    vf² = v0² + 2·a·d
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from projectile_sim.constants import ROOT_THRESHOLD
from projectile_sim.core.variable import Quantity

log = logging.getLogger(__name__)

P0, PF, V0, VF, A, D, T = Quantity


class RuleId(Enum):
    """Identifiers for every inference step; the value is the display label."""

    # Positions
    D_FROM_POSITIONS = 'd=pf-p0'
    PF_FROM_DISPLACEMENT = 'pf=p0+d'
    P0_FROM_DISPLACEMENT = 'p0=pf-d'

    # Velocity form
    T_FROM_VELOCITIES = 't=(vf-v0)/a'
    VF_FROM_V0_A_T = 'vf=v0+at'
    V0_FROM_VF_A_T = 'v0=vf-at'
    A_FROM_VELOCITIES = 'a=(vf-v0)/t'
    VF_AT_ZERO_ACCEL = 'vf=v0(a=0)'
    V0_AT_ZERO_ACCEL = 'v0=vf(a=0)'

    # Displacement forms
    D_FROM_V0_A_T = 'd=v0t+.5at2'
    D_FROM_VF_A_T = 'd=vft-.5at2'
    D_FROM_MEAN_VELOCITY = 'd=(v0+vf)t/2'
    T_QUADRATIC_V0 = 't:quadratic'
    T_LINEAR_V0 = 't=d/v0'
    T_QUADRATIC_VF = 't:quadratic(vf)'
    T_LINEAR_VF = 't=d/vf'
    T_FROM_MEAN_VELOCITY = 't=2d/(v0+vf)'
    V0_FROM_D_A_T = 'v0=(d-.5at2)/t'
    VF_FROM_D_A_T = 'vf=(d+.5at2)/t'
    A_FROM_V0_D_T = 'a=2(d-v0t)/t2'
    A_FROM_VF_D_T = 'a=2(vft-d)/t2'
    V0_FROM_MEAN_VELOCITY = 'v0=2d/t-vf'
    VF_FROM_MEAN_VELOCITY = 'vf=2d/t-v0'

    # Velocity squared
    VF_FROM_VELOCITY_SQUARED = 'vf2=v02+2ad'
    V0_FROM_VELOCITY_SQUARED = 'v02=vf2-2ad'
    A_FROM_VELOCITY_SQUARED = 'a=(vf2-v02)/2d'
    D_FROM_VELOCITY_SQUARED = 'd=(vf2-v02)/2a'

    # Cross-axis coupling (recorded by CouplingReconciler)
    V0_FROM_LAUNCH_COS = 'v0=|v|cos'
    V0_FROM_LAUNCH_SIN = 'v0=|v|sin'
    VF_FROM_FINAL_SPEED_POS = 'vf=+sqrt(|vf|2-vf2)'
    VF_FROM_FINAL_SPEED_NEG = 'vf=-sqrt(|vf|2-vf2)'
    T_SHARED = 't:shared'

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Rule:
    """
    One guarded identity.

    Attributes:
        rule_id: Provenance identifier
        output: Quantity this rule computes
        requires: Quantities that must be known before it can fire
        compute: values -> new value, or None if a guard rejects it
    """
    rule_id: RuleId
    output: Quantity
    requires: Tuple[Quantity, ...]
    compute: Callable[[np.ndarray], Optional[float]]

    def applicable(self, known: np.ndarray) -> bool:
        if known[self.output]:
            return False
        return all(known[q] for q in self.requires)

    def apply(self, values: np.ndarray, known: np.ndarray) -> bool:
        """
        Fire the rule against local working arrays.

        Returns:
            True if the output became known
        """
        if not self.applicable(known):
            return False
        result = self.compute(values)
        if result is None or not np.isfinite(result):
            return False
        values[self.output] = result
        known[self.output] = True
        return True


# ============================================================================
# Guarded helpers
# ============================================================================

def _non_negative(t: float) -> Optional[float]:
    return t if t >= 0 else None


def _pick_time_root(r1: float, r2: float) -> Optional[float]:
    """
    Choose between the two roots of a quadratic in t.

    Prefers the larger root when it is clearly in the future; falls back to
    the smaller root only if it is not in the past.
    """
    t_max = max(r1, r2)
    t_min = min(r1, r2)
    if t_max > ROOT_THRESHOLD:
        return t_max
    if t_min >= 0:
        return t_min
    return None


def _time_quadratic_v0(v: np.ndarray) -> Optional[float]:
    # ½·a·t² + v0·t - d = 0
    a, v0, d = v[A], v[V0], v[D]
    if a == 0:
        return None
    disc = v0 * v0 + 2 * a * d
    if disc < 0:
        return None
    root = np.sqrt(disc)
    return _pick_time_root((-v0 + root) / a, (-v0 - root) / a)


def _time_quadratic_vf(v: np.ndarray) -> Optional[float]:
    # ½·a·t² - vf·t + d = 0
    a, vf, d = v[A], v[VF], v[D]
    if a == 0:
        return None
    disc = vf * vf - 2 * a * d
    if disc < 0:
        return None
    root = np.sqrt(disc)
    return _pick_time_root((vf + root) / a, (vf - root) / a)


def _time_linear(velocity: Quantity) -> Callable[[np.ndarray], Optional[float]]:
    def compute(v: np.ndarray) -> Optional[float]:
        if v[A] != 0 or v[velocity] == 0:
            return None
        return _non_negative(v[D] / v[velocity])
    return compute


def _vf_from_velocity_squared(v: np.ndarray) -> Optional[float]:
    v0, a, d = v[V0], v[A], v[D]
    disc = v0 * v0 + 2 * a * d
    if disc < 0:
        return None
    magnitude = np.sqrt(disc)
    if v0 != 0:
        return magnitude if v0 > 0 else -magnitude
    return magnitude if a * d >= 0 else -magnitude


def _v0_from_velocity_squared(v: np.ndarray) -> Optional[float]:
    vf, a, d = v[VF], v[A], v[D]
    disc = vf * vf - 2 * a * d
    if disc < 0:
        return None
    magnitude = np.sqrt(disc)
    if vf != 0:
        return magnitude if vf > 0 else -magnitude
    # Coming to rest: v0 opposes a, so a·d <= 0 means forward motion
    return magnitude if a * d <= 0 else -magnitude


def _when(condition: Callable[[np.ndarray], bool],
          expression: Callable[[np.ndarray], float]) -> Callable[[np.ndarray], Optional[float]]:
    def compute(v: np.ndarray) -> Optional[float]:
        if not condition(v):
            return None
        return expression(v)
    return compute


def _nonzero(q: Quantity) -> Callable[[np.ndarray], bool]:
    return lambda v: v[q] != 0


# ============================================================================
# Catalogue
# ============================================================================

CATALOGUE: Sequence[Rule] = (
    # Positions
    Rule(RuleId.D_FROM_POSITIONS, D, (P0, PF), lambda v: v[PF] - v[P0]),
    Rule(RuleId.PF_FROM_DISPLACEMENT, PF, (P0, D), lambda v: v[P0] + v[D]),
    Rule(RuleId.P0_FROM_DISPLACEMENT, P0, (PF, D), lambda v: v[PF] - v[D]),

    # vf = v0 + a·t
    Rule(RuleId.T_FROM_VELOCITIES, T, (V0, VF, A),
         _when(_nonzero(A), lambda v: _non_negative((v[VF] - v[V0]) / v[A]))),
    Rule(RuleId.VF_FROM_V0_A_T, VF, (V0, A, T), lambda v: v[V0] + v[A] * v[T]),
    Rule(RuleId.V0_FROM_VF_A_T, V0, (VF, A, T), lambda v: v[VF] - v[A] * v[T]),
    Rule(RuleId.A_FROM_VELOCITIES, A, (V0, VF, T),
         _when(_nonzero(T), lambda v: (v[VF] - v[V0]) / v[T])),
    Rule(RuleId.VF_AT_ZERO_ACCEL, VF, (V0, A),
         _when(lambda v: v[A] == 0, lambda v: v[V0])),
    Rule(RuleId.V0_AT_ZERO_ACCEL, V0, (VF, A),
         _when(lambda v: v[A] == 0, lambda v: v[VF])),

    # Displacement forms
    Rule(RuleId.D_FROM_V0_A_T, D, (V0, A, T),
         lambda v: v[V0] * v[T] + 0.5 * v[A] * v[T] ** 2),
    Rule(RuleId.D_FROM_VF_A_T, D, (VF, A, T),
         lambda v: v[VF] * v[T] - 0.5 * v[A] * v[T] ** 2),
    Rule(RuleId.D_FROM_MEAN_VELOCITY, D, (V0, VF, T),
         lambda v: (v[V0] + v[VF]) * 0.5 * v[T]),
    Rule(RuleId.T_QUADRATIC_V0, T, (V0, A, D), _time_quadratic_v0),
    Rule(RuleId.T_LINEAR_V0, T, (V0, A, D), _time_linear(V0)),
    Rule(RuleId.T_QUADRATIC_VF, T, (VF, A, D), _time_quadratic_vf),
    Rule(RuleId.T_LINEAR_VF, T, (VF, A, D), _time_linear(VF)),
    Rule(RuleId.T_FROM_MEAN_VELOCITY, T, (V0, VF, D),
         _when(lambda v: v[V0] + v[VF] != 0,
               lambda v: _non_negative(2 * v[D] / (v[V0] + v[VF])))),
    Rule(RuleId.V0_FROM_D_A_T, V0, (D, A, T),
         _when(_nonzero(T), lambda v: (v[D] - 0.5 * v[A] * v[T] ** 2) / v[T])),
    Rule(RuleId.VF_FROM_D_A_T, VF, (D, A, T),
         _when(_nonzero(T), lambda v: (v[D] + 0.5 * v[A] * v[T] ** 2) / v[T])),
    Rule(RuleId.A_FROM_V0_D_T, A, (V0, D, T),
         _when(_nonzero(T), lambda v: 2 * (v[D] - v[V0] * v[T]) / v[T] ** 2)),
    Rule(RuleId.A_FROM_VF_D_T, A, (VF, D, T),
         _when(_nonzero(T), lambda v: 2 * (v[VF] * v[T] - v[D]) / v[T] ** 2)),
    Rule(RuleId.V0_FROM_MEAN_VELOCITY, V0, (VF, D, T),
         _when(_nonzero(T), lambda v: 2 * v[D] / v[T] - v[VF])),
    Rule(RuleId.VF_FROM_MEAN_VELOCITY, VF, (V0, D, T),
         _when(_nonzero(T), lambda v: 2 * v[D] / v[T] - v[V0])),

    # vf² = v0² + 2·a·d
    Rule(RuleId.VF_FROM_VELOCITY_SQUARED, VF, (V0, A, D), _vf_from_velocity_squared),
    Rule(RuleId.V0_FROM_VELOCITY_SQUARED, V0, (VF, A, D), _v0_from_velocity_squared),
    Rule(RuleId.A_FROM_VELOCITY_SQUARED, A, (V0, VF, D),
         _when(_nonzero(D), lambda v: (v[VF] ** 2 - v[V0] ** 2) / (2 * v[D]))),
    Rule(RuleId.D_FROM_VELOCITY_SQUARED, D, (V0, VF, A),
         _when(_nonzero(A), lambda v: (v[VF] ** 2 - v[V0] ** 2) / (2 * v[A]))),
)


def apply_catalogue(values: np.ndarray,
                    known: np.ndarray,
                    catalogue: Sequence[Rule] = CATALOGUE) -> List[RuleId]:
    """
    Sweep the catalogue once over an axis tuple.

    Later rules see the results of earlier rules in the same sweep. Known
    entries are never reassigned and known flags are never cleared.

    Args:
        values: Length-7 float array in Quantity order (modified in place)
        known: Length-7 bool array in Quantity order (modified in place)
        catalogue: Rules to evaluate, in order

    Returns:
        RuleIds that fired, in firing order
    """
    fired = []
    # Overflowing or undefined results are rejected by Rule.apply
    with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
        for rule in catalogue:
            if rule.apply(values, known):
                log.debug("%s -> %s = %g", rule.rule_id.label, rule.output.label, values[rule.output])
                fired.append(rule.rule_id)
    return fired
