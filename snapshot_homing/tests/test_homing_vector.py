"""Tests for the homing vector computer."""

import math

import numpy as np
import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from snapshot_homing.navigation.config import HomingConfig
from snapshot_homing.navigation.errors import ConfigurationError, DegenerateGeometryError
from snapshot_homing.navigation.geometry import Point, bearing, normalize_angle
from snapshot_homing.navigation.homing_vector import (
    HomingVector,
    HomingVectorComputer,
    Scene,
)
from snapshot_homing.navigation.landmarks import LandmarkModel

THREE_LANDMARKS = [
    (3.5, 2.0, 0.5),
    (3.5, -2.0, 0.5),
    (0.0, -4.0, 0.5),
]


def make_computer(landmarks, goal=(0.0, 0.0), **config_kwargs) -> HomingVectorComputer:
    """Build a computer for a scene from (x, y, r) tuples."""
    scene = Scene.build(
        LandmarkModel.from_tuples(landmarks),
        Point(*goal),
        HomingConfig(**config_kwargs),
    )
    return HomingVectorComputer(scene)


class TestHomingVectorValue:
    """Tests for the HomingVector value type."""

    def test_magnitude_and_angle(self):
        vec = HomingVector(3.0, 4.0)
        assert vec.magnitude == 5.0
        assert vec.angle == pytest.approx(math.atan2(4.0, 3.0))

    def test_normalized(self):
        vec = HomingVector(3.0, 4.0).normalized()
        assert vec.dx == pytest.approx(0.6)
        assert vec.dy == pytest.approx(0.8)

    def test_zero_stays_zero(self):
        assert HomingVector.zero().normalized().is_zero


class TestScene:
    """Tests for scene construction."""

    def test_build(self):
        scene = Scene.build(LandmarkModel.from_tuples(THREE_LANDMARKS), Point(0.0, 0.0))

        assert len(scene.landmarks) == 3
        assert scene.goal == Point(0.0, 0.0)
        assert len(scene.snapshot) == 3

    def test_accepts_tuples(self):
        from snapshot_homing.navigation.landmarks import Landmark

        scene = Scene.build([Landmark((1.0, 0.0), 0.5)], (0.0, 0.0))
        assert isinstance(scene.landmarks, LandmarkModel)
        assert scene.goal == Point(0.0, 0.0)

    def test_goal_on_landmark(self):
        with pytest.raises(DegenerateGeometryError):
            Scene.build(LandmarkModel.from_tuples(THREE_LANDMARKS), Point(3.5, 2.0))

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            Scene.build(
                LandmarkModel.from_tuples(THREE_LANDMARKS),
                Point(0.0, 0.0),
                HomingConfig(radial_weight=-1.0),
            )

    @pytest.mark.parametrize("goal", [Point(math.nan, 0.0), Point(0.0, math.inf)])
    def test_non_finite_goal(self, goal):
        with pytest.raises(ConfigurationError):
            Scene.build(LandmarkModel.from_tuples(THREE_LANDMARKS), goal)

    def test_infinite_weight_rejected(self):
        """An infinite weight is refused before any vector is computed."""
        with pytest.raises(ConfigurationError):
            Scene.build(
                LandmarkModel.from_tuples(THREE_LANDMARKS),
                Point(0.0, 0.0),
                HomingConfig(radial_weight=math.inf),
            )

    def test_empty_allowed_by_default(self):
        scene = Scene.build(LandmarkModel(), Point(0.0, 0.0))
        assert len(scene.snapshot) == 0

    def test_empty_rejected_when_required(self):
        with pytest.raises(ConfigurationError):
            Scene.build(
                LandmarkModel(), Point(0.0, 0.0), HomingConfig(require_landmarks=True)
            )


class TestHomingVectorComputer:
    """Test suite for the homing vector computation."""

    def test_zero_at_goal(self):
        """The current view equals the snapshot at the goal."""
        computer = make_computer(THREE_LANDMARKS, goal=(0.5, -0.25))
        vec = computer.compute(Point(0.5, -0.25))

        assert vec.is_zero

    def test_zero_landmarks(self):
        computer = make_computer([])

        assert computer.compute(Point(3.0, -2.0)).is_zero
        assert computer.landmark_corrections(Point(3.0, -2.0)).shape == (0, 2)

    def test_closer_than_goal_pushes_away(self):
        """Landmark looks bigger than remembered, so move away from it."""
        computer = make_computer([(10.0, 0.0, 1.0)])
        view = computer.view_from(Point(5.0, 0.0))
        size_error = computer.scene.snapshot[0].apparent_size - view[0].apparent_size

        assert size_error < 0

        vec = computer.compute(Point(5.0, 0.0))
        assert vec.dx < 0
        assert vec.dy == pytest.approx(0.0, abs=1e-12)

    def test_farther_than_goal_pulls_towards(self):
        computer = make_computer([(10.0, 0.0, 1.0)])
        vec = computer.compute(Point(-5.0, 0.0))

        assert vec.dx > 0
        assert vec.dy == pytest.approx(0.0, abs=1e-12)

    def test_bearing_error_quarter_turn(self):
        """Landmark seen 90 degrees off its remembered bearing."""
        computer = make_computer([(10.0, 0.0, 1.0)])
        observer = Point(10.0, -10.0)

        # Same distance as from the goal, so only the bearing differs
        vec = computer.compute(observer)
        assert vec.dx == pytest.approx(-math.pi / 2)
        assert vec.dy == pytest.approx(0.0, abs=1e-12)

        # A small step along the vector reduces the bearing error
        step = 0.1 * vec.normalized().as_array()
        moved = observer.as_array() + step
        before = abs(normalize_angle(0.0 - bearing(10.0 - observer.x, 0.0 - observer.y)))
        after = abs(normalize_angle(0.0 - bearing(10.0 - moved[0], 0.0 - moved[1])))
        assert after < before

    def test_bearing_error_across_pi_boundary(self):
        """Remembered and current bearings either side of +-pi."""
        computer = make_computer([(-10.0, 0.0, 1.0)], goal=(0.0, 0.5), radial_weight=0.0)
        snapshot_bearing = computer.scene.snapshot[0].bearing
        current_bearing = computer.view_from(Point(0.0, -0.5))[0].bearing

        assert snapshot_bearing < -3.0
        assert current_bearing > 3.0

        vec = computer.compute(Point(0.0, -0.5))

        # Short rotation: small vector heading back up towards the goal
        assert vec.dy > 0
        assert vec.magnitude < 0.2

    def test_reflection_symmetry(self):
        """Reflecting scene and observer across the x-axis reflects the vector."""
        reflected = [(x, -y, r) for x, y, r in THREE_LANDMARKS]

        vec = make_computer(THREE_LANDMARKS).compute(Point(5.0, -5.0))
        vec_reflected = make_computer(reflected).compute(Point(5.0, 5.0))

        assert vec_reflected.dx == pytest.approx(vec.dx, abs=1e-12)
        assert vec_reflected.dy == pytest.approx(-vec.dy, abs=1e-12)

    def test_average_over_landmarks(self):
        """Result is the mean of the single-landmark vectors."""
        observer = Point(4.0, 3.0)
        a = make_computer([THREE_LANDMARKS[0]]).compute(observer)
        b = make_computer([THREE_LANDMARKS[2]]).compute(observer)
        both = make_computer([THREE_LANDMARKS[0], THREE_LANDMARKS[2]]).compute(observer)

        assert both.dx == pytest.approx((a.dx + b.dx) / 2)
        assert both.dy == pytest.approx((a.dy + b.dy) / 2)

    def test_weights_are_linear(self):
        """Rotational and radial parts add up to the equally weighted vector."""
        observer = Point(-3.0, 6.0)
        rotation_only = make_computer(THREE_LANDMARKS, radial_weight=0.0).compute(observer)
        radial_only = make_computer(THREE_LANDMARKS, rotation_weight=0.0).compute(observer)
        combined = make_computer(THREE_LANDMARKS).compute(observer)

        assert combined.dx == pytest.approx(rotation_only.dx + radial_only.dx)
        assert combined.dy == pytest.approx(rotation_only.dy + radial_only.dy)

        doubled = make_computer(THREE_LANDMARKS, rotation_weight=2.0, radial_weight=0.0)
        assert doubled.compute(observer).dx == pytest.approx(2 * rotation_only.dx)

    def test_corrections_shape(self):
        computer = make_computer(THREE_LANDMARKS)
        corrections = computer.landmark_corrections(Point(5.0, 5.0))

        assert corrections.shape == (3, 2)
        assert np.allclose(corrections.mean(axis=0), computer.compute(Point(5.0, 5.0)).as_array())

    @pytest.mark.parametrize("model", ["atan", "small_angle", "asin"])
    def test_finite_next_to_landmark_centre(self, model):
        """A vanishingly small distance still gives a finite vector."""
        computer = make_computer(
            [(0.0, 0.0, 1.0)], goal=(5.0, 0.0), apparent_size_model=model
        )
        vec = computer.compute(Point(1e-310, 0.0))

        assert np.all(np.isfinite(vec.as_array()))
        assert vec.dx > 0

    def test_observer_on_landmark_raises(self):
        computer = make_computer(THREE_LANDMARKS)
        with pytest.raises(DegenerateGeometryError):
            computer.compute(Point(0.0, -4.0))

    def test_try_compute_degenerate(self):
        computer = make_computer(THREE_LANDMARKS)
        sample = computer.try_compute(Point(0.0, -4.0))

        assert not sample.success
        assert sample.vector is None
        assert sample.position == Point(0.0, -4.0)
        assert "landmark 2" in sample.reason

    def test_try_compute_success(self):
        computer = make_computer(THREE_LANDMARKS)
        sample = computer.try_compute((1.0, 1.0))

        assert sample.success
        assert sample.vector == computer.compute(Point(1.0, 1.0))


class TestUnitContributions:
    """Tests for unit-vote mode and normalized output."""

    def test_unit_votes_normalized(self):
        computer = make_computer(
            THREE_LANDMARKS, contribution_mode="unit", normalize_output=True
        )
        vec = computer.compute(Point(-5.0, 5.0))

        assert vec.magnitude == pytest.approx(1.0)

    def test_unit_votes_zero_at_goal(self):
        computer = make_computer(THREE_LANDMARKS, contribution_mode="unit")
        assert computer.compute(Point(0.0, 0.0)).is_zero

    def test_unit_votes_single_landmark(self):
        """Sign votes: pure radial unit vector when only the size differs."""
        computer = make_computer([(10.0, 0.0, 1.0)], contribution_mode="unit")
        vec = computer.compute(Point(5.0, 0.0))

        assert vec.dx == pytest.approx(-1.0)
        assert vec.dy == pytest.approx(0.0, abs=1e-12)

    def test_classic_preset_points_home(self):
        """Far from all landmarks the field points roughly towards the goal."""
        scene = Scene.build(
            LandmarkModel.from_tuples(THREE_LANDMARKS),
            Point(0.0, 0.0),
            HomingConfig.classic_weighting(),
        )
        vec = HomingVectorComputer(scene).compute(Point(-6.0, 0.0))

        assert vec.magnitude == pytest.approx(1.0)
        assert vec.dx > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
