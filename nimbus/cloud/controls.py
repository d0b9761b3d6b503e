"""Expose cloud settings to the parameter-editing panel as live variables.

The panel renders every writable, ranged live variable as a slider. Setters go
through ``CloudSettings`` so the usual clamping and dirty tracking apply no
matter which widget made the edit.
"""

from __future__ import annotations

from nimbus import config
from nimbus.util.live_vars import LiveVariableRegistry, live_variable_registry

from .settings import CloudSettings

CLOUD_CONTROL_NAMES = (
    "cloud.density",
    "cloud.threshold",
    "cloud.absorption",
    "cloud.steps",
    "cloud.color.r",
    "cloud.color.g",
    "cloud.color.b",
    "cloud.noise.seed",
    "cloud.noise.frequency",
    "cloud.noise.cells",
    "cloud.noise.needs_rebuild",
)


def _color_channel_setter(settings: CloudSettings, index: int):
    def setter(value: float) -> None:
        channels = list(settings.color)
        channels[index] = value
        settings.color = (channels[0], channels[1], channels[2])

    return setter


def register_cloud_controls(
    settings: CloudSettings,
    registry: LiveVariableRegistry = live_variable_registry,
) -> None:
    """Register a live variable for every editable cloud setting."""
    registry.register(
        "cloud.density",
        getter=lambda: settings.density_multiplier,
        setter=lambda v: setattr(settings, "density_multiplier", v),
        description="Density multiplier applied while ray marching",
        display_decimals=2,
        value_range=config.DENSITY_MULTIPLIER_RANGE,
    )
    registry.register(
        "cloud.threshold",
        getter=lambda: settings.threshold,
        setter=lambda v: setattr(settings, "threshold", v),
        description="Noise values below this are treated as empty air",
        display_decimals=2,
        value_range=config.THRESHOLD_RANGE,
    )
    registry.register(
        "cloud.absorption",
        getter=lambda: settings.absorption,
        setter=lambda v: setattr(settings, "absorption", v),
        description="Light absorption coefficient",
        display_decimals=2,
        value_range=config.ABSORPTION_RANGE,
    )
    registry.register(
        "cloud.steps",
        getter=lambda: settings.steps,
        setter=lambda v: setattr(settings, "steps", v),
        description="Ray march step count",
        value_range=config.STEPS_RANGE,
    )
    for index, channel in enumerate("rgb"):
        registry.register(
            f"cloud.color.{channel}",
            getter=lambda i=index: settings.color[i],
            setter=_color_channel_setter(settings, index),
            description=f"Cloud color, sRGB {channel.upper()} channel",
            display_decimals=2,
            value_range=config.COLOR_COMPONENT_RANGE,
        )

    # Noise generation (CPU bake). Editing any of these schedules a rebuild.
    registry.register(
        "cloud.noise.seed",
        getter=lambda: settings.seed,
        setter=lambda v: setattr(settings, "seed", v),
        description="Feature point seed",
        value_range=config.SEED_SLIDER_RANGE,
    )
    registry.register(
        "cloud.noise.frequency",
        getter=lambda: settings.frequency,
        setter=lambda v: setattr(settings, "frequency", v),
        description="Cell frequency; higher values give smaller billows",
        display_decimals=2,
        value_range=config.FREQUENCY_RANGE,
    )
    registry.register(
        "cloud.noise.cells",
        getter=lambda: settings.feature_point_count,
        setter=lambda v: setattr(settings, "feature_point_count", v),
        description="Number of feature points (cells)",
        value_range=config.FEATURE_POINT_COUNT_RANGE,
    )
    registry.register(
        "cloud.noise.needs_rebuild",
        getter=lambda: settings.needs_rebuild,
        description="True while the live volume is stale",
    )


def unregister_cloud_controls(
    registry: LiveVariableRegistry = live_variable_registry,
) -> None:
    """Remove every variable added by ``register_cloud_controls``."""
    for name in CLOUD_CONTROL_NAMES:
        registry.unregister(name)
