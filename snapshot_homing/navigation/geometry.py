"""Planar geometry helpers: points, bearings, and apparent angular sizes."""

import math
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

TWO_PI = 2.0 * math.pi

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class Point:
    """A position in the plane."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __sub__(self, other: "Point") -> np.ndarray:
        return np.array([self.x - other.x, self.y - other.y], dtype=float)


def normalize_angle(angle: ArrayLike) -> ArrayLike:
    """
    Wrap an angle (or array of angles) into (-pi, pi].

    This is the single wraparound rule used for stored bearings and for
    bearing differences, so the shorter rotational direction is always
    chosen.

    Args:
        angle: Angle(s) in radians.

    Returns:
        Wrapped angle(s), float for scalar input, ndarray otherwise.
    """
    wrapped = np.fmod(np.asarray(angle, dtype=float) + math.pi, TWO_PI)
    # fmod keeps the sign of the dividend; shift (-2pi, 0] up into (0, 2pi]
    wrapped = np.where(wrapped <= 0.0, wrapped + TWO_PI, wrapped) - math.pi
    if wrapped.ndim == 0:
        return float(wrapped)
    return wrapped


def bearing(dx: ArrayLike, dy: ArrayLike) -> ArrayLike:
    """
    Bearing of the offset (dx, dy) measured from the +x axis.

    Args:
        dx: Offset(s) along x from observer to target.
        dy: Offset(s) along y from observer to target.

    Returns:
        Normalized bearing(s) in (-pi, pi].
    """
    return normalize_angle(np.arctan2(dy, dx))


def apparent_size(
    radius: ArrayLike,
    distance: ArrayLike,
    model: str = "atan",
) -> ArrayLike:
    """
    Angle subtended by a circular landmark of the given radius.

    Models:
        atan:        2 * atan(r / d)
        small_angle: 2 * r / d, capped at pi for observers very close to
                     the centre
        asin:        2 * asin(r / d), the exact tangent-line cone. Observers
                     inside the disc (d < r) see the landmark fill pi.

    Args:
        radius: Landmark radius (or radii).
        distance: Observer-to-centre distance(s). Must be > 0.
        model: One of "atan", "small_angle", "asin".

    Returns:
        Apparent size(s) in radians.
    """
    radius = np.asarray(radius, dtype=float)
    distance = np.asarray(distance, dtype=float)

    if np.any(distance <= 0.0):
        raise ValueError("Distance to landmark must be positive")

    # r / d may overflow to inf for tiny distances; every model maps that to a finite angle
    with np.errstate(over="ignore"):
        ratio = radius / distance

    if model == "atan":
        size = 2.0 * np.arctan(ratio)
    elif model == "small_angle":
        size = np.minimum(2.0 * ratio, math.pi)
    elif model == "asin":
        size = np.where(
            ratio >= 1.0, math.pi, 2.0 * np.arcsin(np.minimum(ratio, 1.0))
        )
    else:
        raise ValueError(f"Unknown apparent size model: {model!r}")

    if size.ndim == 0:
        return float(size)
    return size


def unit_vector(angle: ArrayLike) -> np.ndarray:
    """Unit vector(s) (cos a, sin a); shape (2,) or (N, 2)."""
    angle = np.asarray(angle, dtype=float)
    return np.stack([np.cos(angle), np.sin(angle)], axis=-1)


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Unsigned angle between two 2-D vectors in [0, pi].

    Returns nan if either vector has zero length.
    """
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0.0:
        return float("nan")
    cos_angle = np.clip(np.dot(a, b) / norm, -1.0, 1.0)
    return float(np.arccos(cos_angle))
