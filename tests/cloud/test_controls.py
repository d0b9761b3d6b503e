from __future__ import annotations

from nimbus.cloud import (
    CloudSettings,
    register_cloud_controls,
    unregister_cloud_controls,
)
from nimbus.cloud.controls import CLOUD_CONTROL_NAMES
from nimbus.util.live_vars import live_variable_registry


def test_registers_every_control() -> None:
    register_cloud_controls(CloudSettings())
    for name in CLOUD_CONTROL_NAMES:
        assert live_variable_registry.get_variable(name) is not None


def test_sliders_exclude_read_only_flag() -> None:
    register_cloud_controls(CloudSettings())
    sliders = {v.name for v in live_variable_registry.get_slider_variables()}
    assert "cloud.noise.seed" in sliders
    assert "cloud.density" in sliders
    assert "cloud.noise.needs_rebuild" not in sliders


def test_slider_edit_routes_through_settings() -> None:
    settings = CloudSettings()
    settings.mark_clean(settings.revision)
    register_cloud_controls(settings)

    assert live_variable_registry.set_value("cloud.noise.frequency", 99.0)
    assert settings.frequency == 10.0
    assert settings.needs_rebuild


def test_display_slider_does_not_dirty() -> None:
    settings = CloudSettings()
    settings.mark_clean(settings.revision)
    register_cloud_controls(settings)

    live_variable_registry.set_value("cloud.threshold", 0.6)
    live_variable_registry.set_value("cloud.color.g", 0.25)
    assert settings.threshold == 0.6
    assert settings.color == (0.9, 0.25, 1.0)
    assert not settings.needs_rebuild


def test_needs_rebuild_is_read_only() -> None:
    settings = CloudSettings()
    register_cloud_controls(settings)
    assert not live_variable_registry.set_value("cloud.noise.needs_rebuild", False)
    assert settings.needs_rebuild


def test_reads_follow_reset() -> None:
    settings = CloudSettings()
    register_cloud_controls(settings)
    settings.steps = 60
    settings.reset()
    var = live_variable_registry.get_variable("cloud.steps")
    assert var is not None
    assert var.get_value() == 16


def test_unregister_removes_controls() -> None:
    register_cloud_controls(CloudSettings())
    unregister_cloud_controls()
    assert live_variable_registry.get_variable("cloud.density") is None
    # Registering again after removal works.
    register_cloud_controls(CloudSettings())
