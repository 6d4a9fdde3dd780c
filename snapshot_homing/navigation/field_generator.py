"""Homing vector field generation over a rectangular grid."""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np

from .errors import ConfigurationError
from .geometry import Point, angle_between
from .homing_vector import FieldSample, HomingVector, HomingVectorComputer, Scene

logger = logging.getLogger(__name__)

# Relative tolerance for including the max bound on a step lattice
_STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class SampleRegion:
    """Axis-aligned rectangle to sample."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self):
        bounds = (self.x_min, self.x_max, self.y_min, self.y_max)
        if not all(math.isfinite(v) for v in bounds):
            raise ConfigurationError(f"Sample region bounds must be finite, got {bounds}")
        if self.x_max < self.x_min or self.y_max < self.y_min:
            raise ConfigurationError(f"Sample region bounds are inverted: {bounds}")


@dataclass(frozen=True)
class Grid:
    """Sample positions along each axis of a region."""

    xs: Tuple[float, ...]
    ys: Tuple[float, ...]

    @classmethod
    def from_step(cls, region: SampleRegion, step: float) -> "Grid":
        """
        Lattice from the region minimum in increments of step.

        The maximum bound is included when it lies on the lattice.
        """
        if not math.isfinite(step) or step <= 0:
            raise ConfigurationError(f"Grid step must be positive, got {step}")

        def axis(lo: float, hi: float) -> Tuple[float, ...]:
            count = int(math.floor((hi - lo) / step * (1 + _STEP_TOLERANCE) + _STEP_TOLERANCE)) + 1
            return tuple(lo + i * step for i in range(count))

        return cls(
            xs=axis(region.x_min, region.x_max),
            ys=axis(region.y_min, region.y_max),
        )

    @classmethod
    def from_counts(cls, region: SampleRegion, nx: int, ny: int) -> "Grid":
        """Evenly spaced points including both bounds (a single point sits at the minimum)."""
        if nx < 1 or ny < 1:
            raise ConfigurationError(f"Grid counts must be >= 1, got ({nx}, {ny})")

        def axis(lo: float, hi: float, n: int) -> Tuple[float, ...]:
            if n == 1:
                return (float(lo),)
            return tuple(float(v) for v in np.linspace(lo, hi, n))

        return cls(
            xs=axis(region.x_min, region.x_max, nx),
            ys=axis(region.y_min, region.y_max, ny),
        )

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, columns), i.e. (len(ys), len(xs))."""
        return (len(self.ys), len(self.xs))

    @property
    def size(self) -> int:
        return len(self.xs) * len(self.ys)

    def points(self) -> Iterator[Point]:
        """Row-major: y ascending outer, x ascending inner."""
        for y in self.ys:
            for x in self.xs:
                yield Point(x, y)


@dataclass
class VectorField:
    """Homing vectors sampled over a grid."""

    goal: Point
    grid: Grid
    samples: List[FieldSample] = field(default_factory=list)  # Successful samples only
    skipped: List[Point] = field(default_factory=list)  # Degenerate positions

    def pairs(self) -> List[Tuple[Point, HomingVector]]:
        """Ordered (position, vector) pairs for a renderer."""
        return [(s.position, s.vector) for s in self.samples]

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Positions and vectors as (N, 2) arrays, e.g. for a quiver plot.

        Returns:
            Tuple of (positions, vectors).
        """
        if not self.samples:
            return np.zeros((0, 2)), np.zeros((0, 2))
        positions = np.array([s.position.as_tuple() for s in self.samples], dtype=float)
        vectors = np.array([(s.vector.dx, s.vector.dy) for s in self.samples], dtype=float)
        return positions, vectors

    def average_angular_error(self) -> float:
        """
        Mean angle (radians) between each homing vector and the true goal direction.

        Samples at the goal and zero vectors are ignored. Returns nan when
        no sample qualifies.
        """
        errors = []
        goal = self.goal.as_array()
        for sample in self.samples:
            angle = angle_between(goal - sample.position.as_array(), sample.vector.as_array())
            if not math.isnan(angle):
                errors.append(angle)

        if not errors:
            return float("nan")
        return float(np.mean(errors))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[FieldSample]:
        return iter(self.samples)


class FieldGenerator:
    """Evaluates the homing vector at every grid point of a scene."""

    def __init__(self, scene: Scene):
        self.scene = scene
        self.computer = HomingVectorComputer(scene)

    def generate(self, grid: Grid) -> VectorField:
        """
        Compute the homing vector field.

        Degenerate grid points (on a landmark centre) are left out of the
        samples and recorded in ``skipped``; they do not abort the field.

        Args:
            grid: Sample positions.

        Returns:
            VectorField with len(samples) == grid.size - len(skipped).
        """
        result = VectorField(goal=self.scene.goal, grid=grid)

        for point in grid.points():
            sample = self.computer.try_compute(point)
            if sample.success:
                result.samples.append(sample)
                continue

            result.skipped.append(point)
            if self.scene.config.log_skipped_points:
                logger.warning(f"Skipping grid point ({point.x:g}, {point.y:g}): {sample.reason}")

        logger.info(
            f"Generated field: {len(result.samples)}/{grid.size} points, "
            f"{len(result.skipped)} skipped"
        )
        return result
