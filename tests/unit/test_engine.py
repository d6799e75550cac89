"""Unit tests for the engine's public interface."""

import math
import warnings

import numpy as np
import pytest
from projectile_sim.core.engine import ProjectileEngine, SolveReport
from projectile_sim.core.variable import Axis, Quantity, Scalar, VariableView


@pytest.fixture
def engine():
    return ProjectileEngine()


class TestEngineCreation:

    def test_defaults(self, engine):
        snap = engine.snapshot()

        assert snap['x']['p0'] == VariableView(0.0, True, True)
        assert snap['x']['a'] == VariableView(0.0, True, True)
        assert snap['y']['a'] == VariableView(-9.81, True, True)
        assert not snap['y']['t'].known
        assert all(not view.known for view in snap['scalar'].values())

    def test_custom_gravity(self):
        engine = ProjectileEngine(gravity=1.62)
        assert engine.y.value(Quantity.A) == -1.62

    def test_invalid_parameters(self):
        with pytest.raises(ValueError, match="Gravity must be positive"):
            ProjectileEngine(gravity=-9.81)
        with pytest.raises(ValueError, match="outer_passes"):
            ProjectileEngine(outer_passes=0)
        with pytest.raises(ValueError, match="max_rounds"):
            ProjectileEngine(max_rounds=0)

    def test_initial_report(self, engine):
        assert isinstance(engine.last_report, SolveReport)
        assert not engine.last_report.fully_determined


class TestAddressing:
    """Test (target, index) resolution"""

    def test_enum_and_string_targets_agree(self, engine):
        assert engine.variable(Axis.X, Quantity.V0) is engine.variable('x', 'v0')
        assert engine.variable('Y', 2) is engine.y[Quantity.V0]

    def test_scalar_target(self, engine):
        assert engine.variable('scalar', Scalar.FINAL_SPEED) is engine.scalar('final_speed')
        assert engine.variable('scalar', 1) is engine.scalar(Scalar.LAUNCH_ANGLE)

    def test_unknown_target(self, engine):
        with pytest.raises(ValueError, match="Unknown target"):
            engine.set_user_value('z', Quantity.T, 1.0)

    def test_index_out_of_range(self, engine):
        with pytest.raises(ValueError, match="out of range"):
            engine.set_user_value(Axis.X, 7, 1.0)
        with pytest.raises(ValueError, match="out of range"):
            engine.set_user_value('scalar', 3, 1.0)

    def test_unknown_label(self, engine):
        with pytest.raises(ValueError, match="Unknown Quantity"):
            engine.clear('x', 'speed')

    def test_wrong_enum_kind(self, engine):
        with pytest.raises(ValueError, match="does not address"):
            engine.set_user_value(Axis.X, Scalar.LAUNCH_SPEED, 1.0)

    def test_non_finite_value(self, engine):
        with pytest.raises(ValueError, match="must be finite"):
            engine.set_user_value(Axis.X, Quantity.T, math.nan)
        with pytest.raises(ValueError, match="must be finite"):
            engine.set_user_value('scalar', Scalar.LAUNCH_SPEED, math.inf)

    def test_non_numeric_value(self, engine):
        with pytest.raises(ValueError, match="must be a number"):
            engine.set_user_value(Axis.X, Quantity.T, None)
        with pytest.raises(ValueError, match="must be a number"):
            engine.set_user_value(Axis.X, Quantity.T, 'fast')
        assert not engine.x.is_known(Quantity.T)

    def test_numpy_index_and_value(self, engine):
        engine.set_user_value(Axis.X, np.int64(2), np.float64(5.0))

        assert engine.variable('x', np.int64(2)) is engine.x[Quantity.V0]
        assert engine.scalar(np.int32(1)) is engine.scalar(Scalar.LAUNCH_ANGLE)
        assert engine.view(Axis.X, Quantity.V0) == VariableView(5.0, True, True)

    def test_bool_index_rejected(self, engine):
        with pytest.raises(ValueError, match="out of range"):
            engine.clear(Axis.X, True)


class TestExtremeValues:
    """Test that finite but huge inputs solve quietly"""

    def test_overflowing_rules_skipped_without_warnings(self, engine):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            engine.set_user_value(Axis.X, Quantity.V0, 1e200)
            engine.set_user_value(Axis.X, Quantity.T, 1e200)

        assert engine.x.value(Quantity.VF) == 1e200
        assert not engine.x.is_known(Quantity.D)
        assert not engine.x.is_known(Quantity.PF)


class TestEditing:
    """Test edit / clear / reset lifecycle"""

    def test_edit_marks_user_set_and_solves(self, engine):
        engine.set_user_value(Axis.X, Quantity.V0, 5.0)
        engine.set_user_value(Axis.X, Quantity.T, 3.0)

        assert engine.view(Axis.X, Quantity.T) == VariableView(3.0, True, True)
        assert engine.view(Axis.X, Quantity.PF) == VariableView(15.0, True, False)

    def test_clear_undoes_derivations(self, engine):
        engine.set_user_value(Axis.X, Quantity.V0, 5.0)
        engine.set_user_value(Axis.X, Quantity.T, 3.0)

        engine.clear(Axis.X, Quantity.T)

        assert engine.view(Axis.X, Quantity.T) == VariableView(0.0, False, False)
        assert not engine.x.is_known(Quantity.PF)
        assert not engine.y.is_known(Quantity.T)
        # a = 0 still gives vf = v0
        assert engine.x.value(Quantity.VF) == 5.0

    def test_clear_default_acceleration(self, engine):
        engine.clear(Axis.Y, Quantity.A)
        assert not engine.y.is_known(Quantity.A)

    def test_reset_all(self, engine):
        engine.set_user_value(Axis.X, Quantity.V0, 5.0)
        engine.set_user_value('scalar', Scalar.LAUNCH_ANGLE, 45.0)
        engine.clear(Axis.Y, Quantity.A)

        engine.reset_all()

        assert engine.snapshot() == ProjectileEngine().snapshot()

    def test_provenance_text(self, engine):
        engine.set_user_value(Axis.X, Quantity.V0, 5.0)
        engine.set_user_value(Axis.X, Quantity.T, 3.0)

        assert engine.provenance_text('x') == 'vf=v0+at, d=v0t+.5at2, pf=p0+d'
        assert engine.provenance_text(Axis.Y) == 't:shared'
        assert engine.provenance_text('x', separator=' | ').count(' | ') == 2


class TestSolveReport:

    def test_passes_stop_once_nothing_changes(self, engine):
        report = engine.set_user_value(Axis.X, Quantity.V0, 5.0)

        # First pass derives vf, second pass confirms nothing new
        assert report.passes_run == 2
        assert len(report.rounds) == 2
        assert len(report.known_after_pass) == 3

    def test_unresolved(self, engine):
        report = engine.set_user_value(Axis.X, Quantity.V0, 5.0)

        assert Quantity.T in report.unresolved[Axis.X]
        assert Quantity.V0 not in report.unresolved[Axis.X]
        assert not report.fully_determined

    def test_fully_determined(self, engine):
        engine.set_user_value(Axis.X, Quantity.V0, 5.0)
        engine.set_user_value(Axis.Y, Quantity.V0, 10.0)
        report = engine.set_user_value(Axis.X, Quantity.T, 2.0)

        assert report.fully_determined
        assert engine.last_report is report
