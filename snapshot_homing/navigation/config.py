"""Configuration constants for the snapshot homing model."""

import math
from dataclasses import dataclass

from .errors import ConfigurationError

APPARENT_SIZE_MODELS = ("atan", "small_angle", "asin")
CONTRIBUTION_MODES = ("proportional", "unit")


@dataclass
class HomingConfig:
    """Configuration for homing vector computation."""

    # Correction Weights
    rotation_weight: float = 1.0  # Scale of the bearing (tangential) correction
    radial_weight: float = 1.0  # Scale of the size (radial) correction

    # Retina Settings
    apparent_size_model: str = "atan"  # 2*atan(r/d), 2*r/d, or 2*asin(r/d)

    # Vector Settings
    contribution_mode: str = "proportional"  # Scale by error, or unit votes
    normalize_output: bool = False  # Return unit-length homing vectors

    # Scene Settings
    require_landmarks: bool = False  # Reject scenes without landmarks

    # Field Settings
    log_skipped_points: bool = True  # Warn for each degenerate grid point

    @classmethod
    def classic_weighting(cls) -> "HomingConfig":
        """Unit votes with radial corrections weighted 3:1, normalized output."""
        return cls(
            rotation_weight=1.0,
            radial_weight=3.0,
            apparent_size_model="asin",
            contribution_mode="unit",
            normalize_output=True,
        )

    def validate(self) -> None:
        """
        Check configuration values.

        Raises:
            ConfigurationError: If a weight is negative or non-finite, both weights are zero,
                or a model/mode name is unknown.
        """
        if not (math.isfinite(self.rotation_weight) and math.isfinite(self.radial_weight)):
            raise ConfigurationError(
                f"Weights must be finite, got rotation={self.rotation_weight}, "
                f"radial={self.radial_weight}"
            )
        if self.rotation_weight < 0 or self.radial_weight < 0:
            raise ConfigurationError(
                f"Weights must be non-negative, got rotation={self.rotation_weight}, "
                f"radial={self.radial_weight}"
            )
        if self.rotation_weight == 0 and self.radial_weight == 0:
            raise ConfigurationError("At least one correction weight must be positive")
        if self.apparent_size_model not in APPARENT_SIZE_MODELS:
            raise ConfigurationError(
                f"Unknown apparent size model: {self.apparent_size_model!r}"
            )
        if self.contribution_mode not in CONTRIBUTION_MODES:
            raise ConfigurationError(
                f"Unknown contribution mode: {self.contribution_mode!r}"
            )


# Default configuration instance
default_config = HomingConfig()
