"""Debug script to trace rule firings for one scenario."""

import logging

from projectile_sim.core.engine import ProjectileEngine
from projectile_sim.core.variable import Axis, Quantity, Scalar

logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

engine = ProjectileEngine()
engine.set_user_value('scalar', Scalar.LAUNCH_SPEED, 20.0)
engine.set_user_value('scalar', Scalar.LAUNCH_ANGLE, 30.0)

print("\n=== Landing at launch height ===")
report = engine.set_user_value(Axis.Y, Quantity.PF, 0.0)

print(f"\nPasses run: {report.passes_run}")
print(f"Rounds per pass (x, y): {report.rounds}")
for i, (x_known, y_known) in enumerate(report.known_after_pass):
    print(f"  after pass {i}: x={sorted(q.label for q in x_known)} y={sorted(q.label for q in y_known)}")

print(f"\nX rules: {engine.provenance_text(Axis.X)}")
print(f"Y rules: {engine.provenance_text(Axis.Y)}")
print(f"\n{engine!r}")
