"""
Coupling reconciler: relationships that cross the X and Y axes.

The two axes are independent 1-D problems except for:
    - launch speed and angle, which fix both initial velocity components
    - final speed, which ties the two final velocity components together
    - time, which is the same physical interval on both axes

Sign conventions for the final-speed decomposition assume a descending
trajectory moving in +X: a Y component derived from final speed is taken
negative, an X component positive. Ascending-only segments and motion in -X
are not modelled correctly by this rule.
"""

import logging

import numpy as np

from projectile_sim.constants import DEG_TO_RAD, RAD_TO_DEG
from projectile_sim.core.equations import RuleId
from projectile_sim.core.variable import Quantity, Scalar
from projectile_sim.core.variable_set import AxisState, VariableSet

log = logging.getLogger(__name__)


class CouplingReconciler:
    """
    Injects cross-axis knowledge before solving and back-derives the
    coupling scalars afterwards. All methods act on an explicit VariableSet.
    """

    def seed_launch_velocity(self, variables: VariableSet) -> bool:
        """
        Split a user-set launch speed and angle into v0 components.

        Returns:
            True if either component was derived
        """
        speed = variables.scalar(Scalar.LAUNCH_SPEED)
        angle = variables.scalar(Scalar.LAUNCH_ANGLE)
        if not (speed.user_set and angle.user_set):
            return False

        theta = angle.value * DEG_TO_RAD
        components = (
            (variables.x, speed.value * np.cos(theta), RuleId.V0_FROM_LAUNCH_COS),
            (variables.y, speed.value * np.sin(theta), RuleId.V0_FROM_LAUNCH_SIN),
        )

        changed = False
        for axis, component, rule_id in components:
            v0 = axis[Quantity.V0]
            if v0.user_set:
                continue
            v0.derive(component)
            axis.record(rule_id)
            changed = True
        return changed

    def seed_final_velocity(self, variables: VariableSet) -> bool:
        """
        Recover the missing final velocity component from a user-set final speed.

        Applies only when exactly one axis knows vf. Skipped if the final
        speed is smaller than the known component.

        Returns:
            True if a component was derived
        """
        final_speed = variables.scalar(Scalar.FINAL_SPEED)
        if not final_speed.user_set:
            return False

        x_vf = variables.x[Quantity.VF]
        y_vf = variables.y[Quantity.VF]
        if x_vf.known == y_vf.known:
            return False

        if x_vf.known:
            known, target, sign, rule_id = x_vf, variables.y, -1.0, RuleId.VF_FROM_FINAL_SPEED_NEG
        else:
            known, target, sign, rule_id = y_vf, variables.x, 1.0, RuleId.VF_FROM_FINAL_SPEED_POS

        if target[Quantity.VF].user_set:
            return False

        speed = np.abs(np.float64(final_speed.value))
        component = np.abs(np.float64(known.value))
        if speed < component:
            log.debug("final speed %g smaller than known component %g; skipped",
                      final_speed.value, known.value)
            return False

        # sqrt(s² - c²) factored so large finite speeds do not overflow
        with np.errstate(over='ignore'):
            magnitude = np.sqrt(speed - component) * np.sqrt(speed + component)
        if not np.isfinite(magnitude):
            log.debug("final speed %g too large to decompose; skipped", final_speed.value)
            return False

        target[Quantity.VF].derive(sign * magnitude)
        target.record(rule_id)
        return True

    def seed_shared_time(self, variables: VariableSet) -> bool:
        """Copy a time that is user-set on exactly one axis to the other."""
        x_t = variables.x[Quantity.T]
        y_t = variables.y[Quantity.T]
        if x_t.user_set and not y_t.user_set:
            return self.share_time(variables.x, variables.y)
        if y_t.user_set and not x_t.user_set:
            return self.share_time(variables.y, variables.x)
        return False

    def share_time(self, source: AxisState, target: AxisState) -> bool:
        """
        Copy a known source time into an unknown target time.

        Returns:
            True if target time was written
        """
        src = source[Quantity.T]
        dst = target[Quantity.T]
        if not src.known or dst.known:
            return False

        dst.derive(src.value)
        target.record(RuleId.T_SHARED)
        return True

    def back_derive_scalars(self, variables: VariableSet) -> None:
        """Fill non-user-set coupling scalars from the solved velocity vectors."""
        x, y = variables.x, variables.y

        if x.is_known(Quantity.V0) and y.is_known(Quantity.V0):
            vx0, vy0 = x.value(Quantity.V0), y.value(Quantity.V0)
            variables.scalar(Scalar.LAUNCH_SPEED).derive(np.hypot(vx0, vy0))
            variables.scalar(Scalar.LAUNCH_ANGLE).derive(np.arctan2(vy0, vx0) * RAD_TO_DEG)

        if x.is_known(Quantity.VF) and y.is_known(Quantity.VF):
            vxf, vyf = x.value(Quantity.VF), y.value(Quantity.VF)
            variables.scalar(Scalar.FINAL_SPEED).derive(np.hypot(vxf, vyf))
