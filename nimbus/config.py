"""
Configuration constants.

Centralizes the documented defaults, editing ranges and tuning values used by
the cloud noise subsystem. Organized by functional area for easy maintenance.
"""

from nimbus import colors
from nimbus.types import ColorRGBf, FloatRange

# =============================================================================
# NOISE GENERATION DEFAULTS
# =============================================================================

DEFAULT_SEED = 1
DEFAULT_FREQUENCY = 4.0
DEFAULT_FEATURE_POINT_COUNT = 16

# Edge length of the cubic noise volume. Bake cost grows with the cube of this
# value, so it stays small for interactive rebuilds.
VOLUME_RESOLUTION = 32

# Largest seed value accepted (seeds are unsigned 32-bit integers).
MAX_SEED = 2**32 - 1

# =============================================================================
# DISPLAY DEFAULTS
# =============================================================================

DEFAULT_CLOUD_COLOR: ColorRGBf = colors.CLOUD_WHITE
DEFAULT_DENSITY_MULTIPLIER = 2.0
DEFAULT_THRESHOLD = 0.2
DEFAULT_ABSORPTION = 3.0
DEFAULT_STEPS = 16

# =============================================================================
# EDITING RANGES
# =============================================================================

# Values coming from the editing panel are clamped to these ranges.
SEED_SLIDER_RANGE: FloatRange = (0, 100)
FREQUENCY_RANGE: FloatRange = (1.0, 10.0)
FEATURE_POINT_COUNT_RANGE: FloatRange = (4, 64)
DENSITY_MULTIPLIER_RANGE: FloatRange = (0.0, 10.0)
THRESHOLD_RANGE: FloatRange = (0.0, 1.0)
ABSORPTION_RANGE: FloatRange = (0.0, 10.0)
STEPS_RANGE: FloatRange = (4, 64)
COLOR_COMPONENT_RANGE: FloatRange = (0.0, 1.0)

# =============================================================================
# PERFORMANCE CONFIGURATION
# =============================================================================

# Maximum number of (sample, feature point) distance pairs evaluated in one
# vectorized step. Bounds the temporary arrays the field allocates.
FIELD_CHUNK_PAIRS = 1 << 20

# Loop rate used when running the headless app. None means uncapped.
TARGET_FPS: float | None = 60.0

# Number of frame time samples tracked by the clock.
FPS_SAMPLE_SIZE = 256

# Ticks the CLI spends waiting for a background bake to land before it gives up.
MAX_SETTLE_TICKS = 32
