"""
Horizontal launch from a cliff, solved incrementally.

Shows how each edit triggers a full re-solve and how clearing a value
un-derives everything that depended on it.

Expected result: 20 m drop at 10 m/s horizontal lands ≈ 20.2 m out after ≈ 2.02 s
"""

from projectile_sim.core.engine import ProjectileEngine
from projectile_sim.core.variable import Axis, Quantity, Scalar


def summarize(engine, title):
    x, y = engine.x, engine.y
    print(f"\n{title}")
    for label, axis in (('X', x), ('Y', y)):
        known = ', '.join(
            f"{q.label}={axis.value(q):.3f}" for q in Quantity if axis.is_known(q)
        )
        print(f"  {label}: {known}")
    unresolved = engine.last_report.unresolved
    missing = [f"{axis.value}.{q.label}" for axis, qs in unresolved.items() for q in qs]
    print(f"  unknown: {', '.join(missing) if missing else 'none'}")


def main():
    engine = ProjectileEngine()

    engine.set_user_value('scalar', Scalar.LAUNCH_SPEED, 10.0)
    engine.set_user_value('scalar', Scalar.LAUNCH_ANGLE, 0.0)
    summarize(engine, "Launched horizontally at 10 m/s:")

    engine.set_user_value(Axis.Y, Quantity.PF, -20.0)
    summarize(engine, "Landing 20 m below the launch point:")

    final_speed = engine.scalar(Scalar.FINAL_SPEED)
    print(f"  impact speed: {final_speed.value:.2f} m/s")

    engine.clear(Axis.Y, Quantity.PF)
    summarize(engine, "Landing height cleared:")

    return 0 if not engine.x.is_known(Quantity.PF) else 1


if __name__ == '__main__':
    exit(main())
