"""Tiled cellular (Worley) distance field.

The field value at a sample is driven by the distance to the nearest feature
point. To make the field repeat seamlessly, every feature point is also
considered in the 26 neighboring copies of the unit cube, so a sample near one
face "sees" points that sit just across the opposite face.

All distances are measured in frequency-scaled space: the sample becomes
``p * frequency`` and each point copy becomes ``(point + offset) * frequency``.
A distance of 1 or more contributes no density.
"""

from __future__ import annotations

import itertools
import math

import numpy as np
from numpy.typing import ArrayLike

from nimbus import config
from nimbus.types import FeaturePointSet, TileOffset

from .errors import InvalidParameterError

# The 3x3x3 block of unit cube copies around (and including) the home cell,
# ordered with x varying fastest.
NEIGHBOR_OFFSETS: np.ndarray = np.array(
    [
        (ox, oy, oz)
        for oz, oy, ox in itertools.product((-1, 0, 1), repeat=3)
    ],
    dtype=np.float64,
)


def neighbor_offsets() -> list[TileOffset]:
    """Return the 27 tiling offsets as integer tuples."""
    return [(int(ox), int(oy), int(oz)) for ox, oy, oz in NEIGHBOR_OFFSETS]


def _check_frequency(frequency: float) -> None:
    if not (math.isfinite(frequency) and frequency > 0):
        raise InvalidParameterError(
            f"frequency must be positive and finite, got {frequency}"
        )


def _as_points(points: ArrayLike) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        return pts.reshape(0, 3)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"feature points must have shape (n, 3), got {pts.shape}")
    return pts


def nearest_distance(
    samples: ArrayLike,
    points: FeaturePointSet,
    frequency: float,
) -> np.ndarray:
    """Distance from each sample to the nearest tiled feature point.

    Args:
        samples: ``(m, 3)`` positions in the unit cube. Positions outside it
            are wrapped back in first.
        points: ``(n, 3)`` feature points. Must not be empty.
        frequency: Positive scale factor.

    Returns:
        ``(m,)`` float64 array of minimum distances in scaled space.
    """
    pts = _as_points(points)
    if len(pts) == 0:
        raise ValueError("nearest_distance needs at least one feature point")

    wrapped = np.mod(np.asarray(samples, dtype=np.float64).reshape(-1, 3), 1.0)
    scaled_samples = wrapped * frequency

    # Every point copy, scaled once: shape (27, n, 3).
    tiled_points = (pts[None, :, :] + NEIGHBOR_OFFSETS[:, None, :]) * frequency

    result = np.empty(len(scaled_samples), dtype=np.float64)
    chunk = max(1, config.FIELD_CHUNK_PAIRS // len(pts))
    for start in range(0, len(scaled_samples), chunk):
        block = scaled_samples[start : start + chunk, None, :]
        best_sq = np.full((len(block), len(pts)), np.inf)
        for copy in tiled_points:
            delta = block - copy[None, :, :]
            dist_sq = delta[..., 0] ** 2 + delta[..., 1] ** 2 + delta[..., 2] ** 2
            np.minimum(best_sq, dist_sq, out=best_sq)
        result[start : start + chunk] = np.sqrt(best_sq.min(axis=1))
    return result


def density_from_distance(distance: np.ndarray) -> np.ndarray:
    """Map nearest distances to density: ``1 - min(d, 1)`` clamped to [0, 1]."""
    return np.clip(1.0 - np.minimum(distance, 1.0), 0.0, 1.0)


def density_field(
    samples: ArrayLike,
    points: FeaturePointSet,
    frequency: float,
) -> np.ndarray:
    """Evaluate the tiled cellular density for many samples at once.

    Returns a ``(m,)`` float64 array with values in [0, 1]. With no feature
    points the field is zero everywhere.
    """
    _check_frequency(frequency)
    sample_array = np.asarray(samples, dtype=np.float64).reshape(-1, 3)
    pts = _as_points(points)
    if len(pts) == 0:
        return np.zeros(len(sample_array), dtype=np.float64)
    return density_from_distance(nearest_distance(sample_array, pts, frequency))


def density_at(p: ArrayLike, points: FeaturePointSet, frequency: float) -> float:
    """Evaluate the tiled cellular density at a single position."""
    return float(density_field(np.reshape(p, (1, 3)), points, frequency)[0])
