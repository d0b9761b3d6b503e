"""Render-facing cloud material parameters.

The ray-marching shader reads a small uniform block:

    struct CloudMaterial {
        color: vec4<f32>,     // linear RGBA
        settings: vec4<f32>,  // x: density, y: threshold, z: absorption, w: steps
    }

``RenderParameterSync`` refreshes that block from the display parameters on
every tick, whether or not a rebuild is pending.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from nimbus import colors
from nimbus.types import ColorRGBAf, Vec4

from .settings import CloudSnapshot, DisplayParameters

# Two vec4<f32>, 16 bytes each.
UNIFORM_FORMAT = "8f"
UNIFORM_SIZE = struct.calcsize(UNIFORM_FORMAT)


@dataclass
class CloudMaterialUniforms:
    """The values the cloud shader consumes each frame."""

    color: ColorRGBAf = (1.0, 1.0, 1.0, 1.0)
    settings: Vec4 = (0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_display(cls, display: DisplayParameters) -> CloudMaterialUniforms:
        return cls(
            color=colors.srgb_to_linear_rgba(display.color),
            settings=(
                float(display.density_multiplier),
                float(display.threshold),
                float(display.absorption),
                float(display.steps),
            ),
        )

    @property
    def density_multiplier(self) -> float:
        return self.settings[0]

    @property
    def threshold(self) -> float:
        return self.settings[1]

    @property
    def absorption(self) -> float:
        return self.settings[2]

    @property
    def steps(self) -> float:
        return self.settings[3]

    def update_from(self, display: DisplayParameters) -> None:
        """Overwrite every field in place from ``display``."""
        fresh = self.from_display(display)
        self.color = fresh.color
        self.settings = fresh.settings

    def pack(self) -> bytes:
        """Pack for upload into a uniform buffer.

        Uses vec4 packing for reliable alignment across backends.
        """
        return struct.pack(UNIFORM_FORMAT, *self.color, *self.settings)


class RenderParameterSync:
    """Copies display parameters into the material uniforms every tick."""

    def __init__(self, display: DisplayParameters | None = None) -> None:
        self.uniforms = CloudMaterialUniforms.from_display(
            display or DisplayParameters()
        )
        self.sync_count = 0

    def tick(self, snapshot: CloudSnapshot) -> CloudMaterialUniforms:
        """Refresh the uniforms from ``snapshot``. Never skipped.

        The same ``CloudMaterialUniforms`` object is updated in place, so a
        renderer may hold on to it across ticks.
        """
        self.uniforms.update_from(snapshot.display)
        self.sync_count += 1
        return self.uniforms
