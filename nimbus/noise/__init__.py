"""Procedural cellular noise volumes."""

from .cellular import NEIGHBOR_OFFSETS, density_at, density_field
from .errors import BakeCancelledError, InvalidParameterError, NoiseVolumeError
from .feature_points import generate_feature_points
from .params import GenerationParameters
from .volume import NoiseVolume, bake_volume

__all__ = [
    "NEIGHBOR_OFFSETS",
    "BakeCancelledError",
    "GenerationParameters",
    "InvalidParameterError",
    "NoiseVolume",
    "NoiseVolumeError",
    "bake_volume",
    "density_at",
    "density_field",
    "generate_feature_points",
]
