"""Landmark model: the static circular landmarks of a scene."""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError
from .geometry import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Landmark:
    """A circular landmark."""

    position: Point  # Centre of the landmark
    radius: float  # Physical half-width

    def __post_init__(self):
        if not isinstance(self.position, Point):
            object.__setattr__(self, "position", Point(*self.position))
        if not (math.isfinite(self.position.x) and math.isfinite(self.position.y)):
            raise ConfigurationError(
                f"Landmark position must be finite, got {self.position}"
            )
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ConfigurationError(
                f"Landmark radius must be positive, got {self.radius}"
            )

    def distance_to(self, observer: Point) -> float:
        """Distance from an observer to the landmark centre."""
        return self.position.distance_to(observer)


class LandmarkModel:
    """
    Ordered, immutable collection of landmarks.

    The order is the index used to align snapshot entries with the
    current view, so it never changes after construction.
    """

    def __init__(self, landmarks: Iterable[Landmark] = ()):
        """
        Initialize the landmark model.

        Args:
            landmarks: Landmarks in snapshot order.

        Raises:
            ConfigurationError: If two landmarks share a position.
        """
        self._landmarks: Tuple[Landmark, ...] = tuple(landmarks)

        seen = set()
        for index, landmark in enumerate(self._landmarks):
            key = landmark.position.as_tuple()
            if key in seen:
                raise ConfigurationError(
                    f"Duplicate landmark position {key} at index {index}"
                )
            seen.add(key)

        self._positions = np.array(
            [lm.position.as_tuple() for lm in self._landmarks], dtype=float
        ).reshape(-1, 2)
        self._radii = np.array([lm.radius for lm in self._landmarks], dtype=float)
        self._positions.setflags(write=False)
        self._radii.setflags(write=False)

        logger.debug(f"Landmark model with {len(self._landmarks)} landmarks")

    @classmethod
    def from_tuples(cls, values: Sequence[Tuple[float, float, float]]) -> "LandmarkModel":
        """Build a model from (x, y, radius) tuples."""
        return cls(Landmark(Point(x, y), r) for x, y, r in values)

    def positions(self) -> np.ndarray:
        """Landmark centres as an (N, 2) read-only array."""
        return self._positions

    def radii(self) -> np.ndarray:
        """Landmark radii as an (N,) read-only array."""
        return self._radii

    def distances_to(self, observer: Point) -> np.ndarray:
        """Distances from an observer to every landmark centre."""
        offsets = self._positions - observer.as_array()
        return np.hypot(offsets[:, 0], offsets[:, 1])

    def __len__(self) -> int:
        return len(self._landmarks)

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self._landmarks)

    def __getitem__(self, idx: int) -> Landmark:
        return self._landmarks[idx]
