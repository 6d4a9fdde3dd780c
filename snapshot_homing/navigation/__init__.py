"""Snapshot homing model components."""

from .config import HomingConfig, default_config
from .errors import ConfigurationError, DegenerateGeometryError, HomingError
from .geometry import Point, apparent_size, bearing, normalize_angle
from .landmarks import Landmark, LandmarkModel
from .snapshot import RetinalView, Snapshot, SnapshotEntry, sample_view, take_snapshot
from .homing_vector import FieldSample, HomingVector, HomingVectorComputer, Scene
from .field_generator import FieldGenerator, Grid, SampleRegion, VectorField

__all__ = [
    "HomingConfig",
    "default_config",
    "HomingError",
    "ConfigurationError",
    "DegenerateGeometryError",
    "Point",
    "normalize_angle",
    "bearing",
    "apparent_size",
    "Landmark",
    "LandmarkModel",
    "SnapshotEntry",
    "RetinalView",
    "Snapshot",
    "sample_view",
    "take_snapshot",
    "HomingVector",
    "FieldSample",
    "Scene",
    "HomingVectorComputer",
    "SampleRegion",
    "Grid",
    "VectorField",
    "FieldGenerator",
]
