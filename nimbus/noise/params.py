"""Immutable generation parameters consumed by a single bake."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from nimbus import config

from .errors import InvalidParameterError


@dataclass(frozen=True, slots=True)
class GenerationParameters:
    """Snapshot of everything that determines the contents of a noise volume.

    Attributes:
        seed: Unsigned 32-bit seed for the feature point stream.
        frequency: Scale applied to sample and feature point positions. Higher
            values shrink the cells. Must be positive.
        feature_point_count: Number of feature points scattered in the unit
            cube. Zero is allowed and produces an empty (all-zero) volume.
        resolution: Edge length of the cubic voxel grid.
    """

    seed: int = config.DEFAULT_SEED
    frequency: float = config.DEFAULT_FREQUENCY
    feature_point_count: int = config.DEFAULT_FEATURE_POINT_COUNT
    resolution: int = config.VOLUME_RESOLUTION

    def validate(self) -> None:
        """Raise ``InvalidParameterError`` if these parameters cannot be baked."""
        if not 0 <= self.seed <= config.MAX_SEED:
            raise InvalidParameterError(
                f"seed must be an unsigned 32-bit integer, got {self.seed}"
            )
        if not (math.isfinite(self.frequency) and self.frequency > 0):
            raise InvalidParameterError(
                f"frequency must be positive and finite, got {self.frequency}"
            )
        if self.feature_point_count < 0:
            raise InvalidParameterError(
                f"feature_point_count must not be negative, "
                f"got {self.feature_point_count}"
            )
        if self.resolution <= 0:
            raise InvalidParameterError(
                f"resolution must be positive, got {self.resolution}"
            )

    def with_changes(self, **changes: int | float) -> GenerationParameters:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]
