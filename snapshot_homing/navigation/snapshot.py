"""Retinal views: landmark bearings and apparent sizes seen from a position."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .config import HomingConfig, default_config
from .errors import DegenerateGeometryError
from .geometry import Point, apparent_size, bearing
from .landmarks import LandmarkModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotEntry:
    """How one landmark appears from an observer."""

    bearing: float  # Direction to the landmark centre, (-pi, pi]
    apparent_size: float  # Angular extent in radians


@dataclass(frozen=True)
class RetinalView:
    """
    Landmark appearance from a single observer position.

    Entries are index-aligned with the LandmarkModel they were sampled from.
    """

    observer: Point
    entries: Tuple[SnapshotEntry, ...]

    @property
    def bearings(self) -> np.ndarray:
        return np.array([e.bearing for e in self.entries], dtype=float)

    @property
    def sizes(self) -> np.ndarray:
        return np.array([e.apparent_size for e in self.entries], dtype=float)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SnapshotEntry]:
        return iter(self.entries)

    def __getitem__(self, idx: int) -> SnapshotEntry:
        return self.entries[idx]


@dataclass(frozen=True)
class Snapshot(RetinalView):
    """The remembered view from the goal."""

    @property
    def goal(self) -> Point:
        return self.observer


def _compute_entries(
    model: LandmarkModel,
    observer: Point,
    config: HomingConfig,
) -> Tuple[SnapshotEntry, ...]:
    if len(model) == 0:
        return ()

    offsets = model.positions() - observer.as_array()
    distances = np.hypot(offsets[:, 0], offsets[:, 1])

    coincident = np.flatnonzero(distances == 0.0)
    if coincident.size > 0:
        raise DegenerateGeometryError(observer.as_tuple(), int(coincident[0]))

    bearings = bearing(offsets[:, 0], offsets[:, 1])
    sizes = apparent_size(model.radii(), distances, config.apparent_size_model)

    return tuple(
        SnapshotEntry(bearing=float(b), apparent_size=float(s))
        for b, s in zip(bearings, sizes)
    )


def sample_view(
    model: LandmarkModel,
    observer: Point,
    config: Optional[HomingConfig] = None,
) -> RetinalView:
    """
    Sample the retinal view of every landmark from an observer position.

    Args:
        model: Landmarks to view.
        observer: Observer position.
        config: Configuration (apparent size model).

    Returns:
        RetinalView index-aligned with the model.

    Raises:
        DegenerateGeometryError: If the observer sits on a landmark centre.
    """
    config = config or default_config
    return RetinalView(observer=observer, entries=_compute_entries(model, observer, config))


def take_snapshot(
    model: LandmarkModel,
    goal: Point,
    config: Optional[HomingConfig] = None,
) -> Snapshot:
    """
    Record the view from the goal.

    Raises:
        DegenerateGeometryError: If the goal sits on a landmark centre.
    """
    config = config or default_config
    snapshot = Snapshot(observer=goal, entries=_compute_entries(model, goal, config))
    logger.info(
        f"Snapshot taken at goal ({goal.x:g}, {goal.y:g}) "
        f"with {len(snapshot)} landmarks"
    )
    return snapshot
