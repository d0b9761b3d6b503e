"""Baking the cellular density field into a dense 8-bit voxel volume."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter

import numpy as np

from .cellular import density_field
from .errors import BakeCancelledError
from .feature_points import generate_feature_points
from .params import GenerationParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class NoiseVolume:
    """An immutable cube of 8-bit density samples.

    ``data`` is indexed ``[z, y, x]``, so the flat byte order is x fastest,
    then y, then z. The array is marked read-only; a new bake always produces
    a new ``NoiseVolume`` instead of editing an existing one.

    Attributes:
        data: ``(resolution, resolution, resolution)`` uint8 array.
        params: The parameters that produced this volume, or ``None`` for the
            startup sentinel.
    """

    data: np.ndarray
    params: GenerationParameters | None = None

    def __post_init__(self) -> None:
        if self.data.dtype != np.uint8 or self.data.ndim != 3:
            raise ValueError(
                f"volume data must be a 3D uint8 array, got "
                f"{self.data.ndim}D {self.data.dtype}"
            )
        if len(set(self.data.shape)) != 1:
            raise ValueError(f"volume must be cubic, got shape {self.data.shape}")
        self.data.flags.writeable = False

    @classmethod
    def sentinel(cls, resolution: int) -> NoiseVolume:
        """An all-zero volume used before the first bake completes."""
        return cls(np.zeros((resolution,) * 3, dtype=np.uint8))

    @property
    def resolution(self) -> int:
        return self.data.shape[0]

    @property
    def nbytes(self) -> int:
        return self.data.nbytes

    @property
    def is_sentinel(self) -> bool:
        return self.params is None

    def tobytes(self) -> bytes:
        """The raw voxel bytes in x-fastest order, ready for texture upload."""
        return self.data.tobytes(order="C")

    def voxel(self, x: int, y: int, z: int) -> int:
        return int(self.data[z, y, x])


def voxel_centers(resolution: int, z: int) -> np.ndarray:
    """Normalized sample positions for one z-slab, x varying fastest.

    Grid index ``i`` maps to ``i / resolution`` on each axis.
    """
    coords = np.arange(resolution, dtype=np.float64) / resolution
    yy, xx = np.meshgrid(coords, coords, indexing="ij")
    zz = np.full_like(xx, z / resolution)
    return np.stack((xx.ravel(), yy.ravel(), zz.ravel()), axis=-1)


def quantize_density(density: np.ndarray) -> np.ndarray:
    """Map densities in [0, 1] to bytes with round-half-up."""
    return np.floor(np.clip(density, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def bake_volume(
    params: GenerationParameters,
    should_cancel: Callable[[], bool] | None = None,
) -> NoiseVolume:
    """Produce a fully populated noise volume from ``params``.

    One feature point set is generated for the whole bake and shared by every
    voxel. The grid is evaluated one z-slab at a time; ``should_cancel`` (if
    given) is polled between slabs.

    Raises:
        InvalidParameterError: If ``params`` fail validation. Nothing is
            computed in that case.
        BakeCancelledError: If ``should_cancel`` returned true mid-bake.
    """
    params.validate()
    start = perf_counter()

    res = params.resolution
    points = generate_feature_points(params.seed, params.feature_point_count)
    data = np.empty((res, res, res), dtype=np.uint8)

    for z in range(res):
        if should_cancel is not None and should_cancel():
            raise BakeCancelledError(f"bake cancelled at slab {z}/{res}")
        slab = density_field(voxel_centers(res, z), points, params.frequency)
        data[z] = quantize_density(slab).reshape(res, res)

    elapsed_ms = (perf_counter() - start) * 1000
    logger.debug(
        "Baked %d^3 volume (seed=%d, frequency=%.3f, points=%d) in %.1f ms",
        res,
        params.seed,
        params.frequency,
        params.feature_point_count,
        elapsed_ms,
    )
    return NoiseVolume(data, params)
