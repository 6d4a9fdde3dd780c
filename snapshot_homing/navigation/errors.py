"""Exceptions raised by the snapshot homing model."""

from typing import Optional


class HomingError(Exception):
    """Base class for all snapshot homing errors."""


class ConfigurationError(HomingError, ValueError):
    """Invalid static input (landmarks, grid, or configuration values)."""


class DegenerateGeometryError(HomingError, ArithmeticError):
    """
    Observer coincides with a landmark, so bearing and size are undefined.

    Attributes:
        observer: The observer position as an (x, y) tuple.
        landmark_index: Index of the offending landmark, if known.
    """

    def __init__(self, observer, landmark_index: Optional[int] = None):
        self.observer = tuple(observer)
        self.landmark_index = landmark_index
        super().__init__(
            f"Observer at ({self.observer[0]:g}, {self.observer[1]:g}) "
            f"coincides with landmark {landmark_index}"
        )
