"""Homing vector computation from snapshot and current view."""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import numpy as np

from .config import HomingConfig, default_config
from .errors import ConfigurationError, DegenerateGeometryError
from .geometry import Point, normalize_angle, unit_vector
from .landmarks import Landmark, LandmarkModel
from .snapshot import RetinalView, Snapshot, sample_view, take_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HomingVector:
    """Combined pull towards the goal from one position."""

    dx: float
    dy: float

    @classmethod
    def zero(cls) -> "HomingVector":
        return cls(0.0, 0.0)

    @classmethod
    def from_array(cls, vec: np.ndarray) -> "HomingVector":
        return cls(float(vec[0]), float(vec[1]))

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def angle(self) -> float:
        """Direction of the vector in radians from the +x axis."""
        return math.atan2(self.dy, self.dx)

    @property
    def is_zero(self) -> bool:
        return self.dx == 0.0 and self.dy == 0.0

    def normalized(self) -> "HomingVector":
        """Unit-length copy; the zero vector stays zero."""
        length = self.magnitude
        if length == 0.0:
            return self
        return HomingVector(self.dx / length, self.dy / length)

    def as_array(self) -> np.ndarray:
        return np.array([self.dx, self.dy], dtype=float)


@dataclass(frozen=True)
class FieldSample:
    """Result of evaluating the homing vector at one position."""

    position: Point  # Sampled position
    vector: Optional[HomingVector]  # None when the geometry was degenerate
    success: bool  # Whether a vector could be computed
    reason: str = ""  # Why the sample failed


@dataclass(frozen=True)
class Scene:
    """Immutable bundle of landmarks, goal, and the snapshot taken there."""

    landmarks: LandmarkModel
    goal: Point
    snapshot: Snapshot
    config: HomingConfig

    @classmethod
    def build(
        cls,
        landmarks: Union[LandmarkModel, Iterable[Landmark]],
        goal: Point,
        config: Optional[HomingConfig] = None,
    ) -> "Scene":
        """
        Validate inputs and take the goal snapshot.

        Args:
            landmarks: Landmark model or landmarks in snapshot order.
            goal: Goal position.
            config: Homing configuration.

        Raises:
            ConfigurationError: Invalid configuration or landmarks.
            DegenerateGeometryError: If the goal sits on a landmark.
        """
        config = config or default_config
        config.validate()

        if not isinstance(landmarks, LandmarkModel):
            landmarks = LandmarkModel(landmarks)
        if not isinstance(goal, Point):
            goal = Point(*goal)
        if not (math.isfinite(goal.x) and math.isfinite(goal.y)):
            raise ConfigurationError(f"Goal position must be finite, got {goal}")

        if config.require_landmarks and len(landmarks) == 0:
            raise ConfigurationError("Scene requires at least one landmark")

        snapshot = take_snapshot(landmarks, goal, config)

        logger.info(
            f"Scene built: {len(landmarks)} landmarks, goal ({goal.x:g}, {goal.y:g})"
        )
        return cls(landmarks=landmarks, goal=goal, snapshot=snapshot, config=config)


class HomingVectorComputer:
    """
    Compares the current view with the snapshot and returns a homing vector.

    For each landmark the bearing error produces a correction perpendicular
    to the current landmark direction, and the size error produces a
    correction along it. Per-landmark corrections are weighted, summed, and
    averaged across landmarks.
    """

    def __init__(self, scene: Scene):
        """
        Initialize homing vector computer.

        Args:
            scene: Static scene to home in.
        """
        self.scene = scene
        self.config = scene.config

        self._snapshot_bearings = scene.snapshot.bearings
        self._snapshot_sizes = scene.snapshot.sizes

    def view_from(self, position: Point) -> RetinalView:
        """Current retinal view from a position."""
        return sample_view(self.scene.landmarks, position, self.config)

    def landmark_corrections(self, position: Point) -> np.ndarray:
        """
        Per-landmark correction vectors.

        Args:
            position: Observer position.

        Returns:
            (N, 2) array, row i is the weighted correction for landmark i.

        Raises:
            DegenerateGeometryError: If the position sits on a landmark.
        """
        view = self.view_from(position)
        if len(view) == 0:
            return np.zeros((0, 2), dtype=float)

        current_bearings = view.bearings
        bearing_error = normalize_angle(self._snapshot_bearings - current_bearings)
        size_error = self._snapshot_sizes - view.sizes

        if self.config.contribution_mode == "unit":
            bearing_error = np.sign(bearing_error)
            size_error = np.sign(size_error)

        towards = unit_vector(current_bearings)
        # Moving along (sin, -cos) turns the landmark counter-clockwise on the retina
        sideways = np.stack([towards[:, 1], -towards[:, 0]], axis=-1)

        rotational = bearing_error[:, None] * sideways
        radial = size_error[:, None] * towards

        return self.config.rotation_weight * rotational + self.config.radial_weight * radial

    def compute(self, position: Point) -> HomingVector:
        """
        Homing vector at a position.

        Raises:
            DegenerateGeometryError: If the position sits on a landmark.
        """
        if not isinstance(position, Point):
            position = Point(*position)

        corrections = self.landmark_corrections(position)
        if corrections.shape[0] == 0:
            return HomingVector.zero()

        vector = HomingVector.from_array(corrections.mean(axis=0))
        if self.config.normalize_output:
            vector = vector.normalized()
        return vector

    def try_compute(self, position: Point) -> FieldSample:
        """Homing vector at a position, with degeneracy reported as a value."""
        if not isinstance(position, Point):
            position = Point(*position)

        try:
            vector = self.compute(position)
        except DegenerateGeometryError as e:
            logger.debug(f"Degenerate sample at ({position.x:g}, {position.y:g}): {e}")
            return FieldSample(position=position, vector=None, success=False, reason=str(e))

        return FieldSample(position=position, vector=vector, success=True)
