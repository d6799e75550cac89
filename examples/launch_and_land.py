"""
Launch-and-land demonstration.

A ball is kicked at 20 m/s, 30° above the horizontal, and lands at the
height it was kicked from:
    launch speed + angle → v0 components
    Y: p0 = pf = 0 → quadratic for flight time
    X: shared flight time → range

Expected result: flight time ≈ 2.04 s, range ≈ 35.3 m, apex ≈ 5.10 m
"""

from projectile_sim.core.engine import ProjectileEngine
from projectile_sim.core.variable import Axis, Quantity, Scalar
from projectile_sim.analysis.trajectory import max_height, time_of_flight, sample_trajectory, plot_bounds


def print_table(engine):
    print(f"  {'':4}{'X':>12}{'Y':>12}")
    for q in Quantity:
        cells = []
        for axis in (engine.x, engine.y):
            var = axis[q]
            if not var.known:
                cells.append(f"{'?':>12}")
            else:
                marker = '' if var.user_set else '*'
                cells.append(f"{var.value:>11.3f}{marker or ' '}")
        print(f"  {q.label:4}{''.join(cells)}")
    for s in Scalar:
        var = engine.scalar(s)
        shown = f"{var.value:.3f} {s.units}" if var.known else '?'
        print(f"  {s.label}: {shown}")
    print("  (* = derived)")


def main():
    engine = ProjectileEngine()

    engine.set_user_value('scalar', Scalar.LAUNCH_SPEED, 20.0)
    engine.set_user_value('scalar', Scalar.LAUNCH_ANGLE, 30.0)
    report = engine.set_user_value(Axis.Y, Quantity.PF, 0.0)

    print("Launch and land at the same height:")
    print_table(engine)
    print(f"\nRules fired:")
    print(f"  X: {engine.provenance_text(Axis.X)}")
    print(f"  Y: {engine.provenance_text(Axis.Y)}")
    print(f"Solved in {report.passes_run} pass(es)")

    tof = time_of_flight(engine)
    apex = max_height(engine)
    if tof is None or apex is None:
        print("✗ Flight time or apex could not be determined")
        return 1

    print(f"\nResults:")
    print(f"  Time of flight: {tof:.3f} s")
    print(f"  Range: {engine.x.value(Quantity.PF):.2f} m")
    print(f"  Max height: {apex:.2f} m")

    t, x, y = sample_trajectory(engine, samples=11)
    x_min, x_max, y_min, y_max = plot_bounds(x, y)
    print(f"\nPlot window: x ∈ [{x_min:.1f}, {x_max:.1f}] m, y ∈ [{y_min:.1f}, {y_max:.1f}] m")
    for ti, xi, yi in zip(t, x, y):
        print(f"  t={ti:5.2f} s  x={xi:6.2f} m  y={yi:5.2f} m")

    return 0


if __name__ == '__main__':
    exit(main())
