"""Deterministic feature point sampling for cellular noise."""

from __future__ import annotations

import numpy as np

from nimbus.types import FeaturePointSet

from .errors import InvalidParameterError


def generate_feature_points(seed: int, count: int) -> FeaturePointSet:
    """Scatter ``count`` points uniformly in the unit cube ``[0, 1)^3``.

    The points come from a PCG64 stream seeded with ``seed``, so the same
    ``(seed, count)`` always yields a bit-identical array on every platform.
    Coordinates are drawn point by point in x, y, z order, which makes the
    result for a smaller count a prefix of the result for a larger one.

    Returns:
        A ``(count, 3)`` float64 array. Empty (shape ``(0, 3)``) when
        ``count`` is zero.
    """
    if count < 0:
        raise InvalidParameterError(f"count must not be negative, got {count}")
    rng = np.random.default_rng(seed)
    return rng.random((count, 3), dtype=np.float64)
