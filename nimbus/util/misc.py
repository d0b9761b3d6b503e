from __future__ import annotations

from nimbus.types import FloatRange


def clamp(value: float, value_range: FloatRange) -> float:
    """Clamp ``value`` into the inclusive ``(low, high)`` range."""
    low, high = value_range
    return max(low, min(high, value))


def clamp_int(value: float, value_range: FloatRange) -> int:
    """Clamp ``value`` into ``value_range`` and truncate toward zero.

    Matches how a float slider position is turned into an integer setting.
    """
    return int(clamp(float(value), value_range))
