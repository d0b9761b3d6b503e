from __future__ import annotations

from typing import NewType, TypeAlias

import numpy as np

# =============================================================================
# SPATIAL TYPES
# =============================================================================

# Integer lattice offset used to visit a neighboring tile of the unit cube.
TileOffset: TypeAlias = tuple[int, int, int]

# Feature points as a (count, 3) float64 array, one row per point.
FeaturePointSet: TypeAlias = np.ndarray

# =============================================================================
# TIME-RELATED TYPES
# =============================================================================

# Represents the real-world time elapsed between two ticks of the loop.
DeltaTime = NewType("DeltaTime", float)

# =============================================================================
# RENDERING-RELATED TYPES
# =============================================================================

# Float RGB color in 0.0-1.0 space.
ColorRGBf: TypeAlias = tuple[float, float, float]

# Float RGBA color in 0.0-1.0 space (GPU-facing).
ColorRGBAf: TypeAlias = tuple[float, float, float, float]

# Four packed shader scalars.
Vec4: TypeAlias = tuple[float, float, float, float]

# =============================================================================
# UTILITY TYPES
# =============================================================================

# Generic min/max float range (slider limits, clamping bounds)
FloatRange: TypeAlias = tuple[float, float]
