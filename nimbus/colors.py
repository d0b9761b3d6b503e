"""Color constants and color space helpers for the cloud material."""

from __future__ import annotations

from nimbus.types import ColorRGBAf, ColorRGBf

# Near-white with a slight blue tint, in sRGB space.
CLOUD_WHITE: ColorRGBf = (0.9, 0.9, 1.0)


def srgb_to_linear_component(c: float) -> float:
    """Convert one sRGB-encoded channel in [0, 1] to linear light."""
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def srgb_to_linear_rgba(color: ColorRGBf, alpha: float = 1.0) -> ColorRGBAf:
    """Convert an sRGB triple to the linear RGBA a shader uniform expects.

    Alpha is already linear and passes through unchanged.
    """
    r, g, b = color
    return (
        srgb_to_linear_component(r),
        srgb_to_linear_component(g),
        srgb_to_linear_component(b),
        alpha,
    )
