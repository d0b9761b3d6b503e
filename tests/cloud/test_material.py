"""Tests for the render-facing material uniforms."""

from __future__ import annotations

import struct

import pytest

from nimbus import colors
from nimbus.cloud import CloudMaterialUniforms, CloudSettings, RenderParameterSync
from nimbus.cloud.material import UNIFORM_SIZE


def test_uniforms_from_defaults() -> None:
    settings = CloudSettings()
    uniforms = CloudMaterialUniforms.from_display(settings.display)
    assert uniforms.settings == (2.0, 0.2, 3.0, 16.0)
    assert uniforms.color[3] == 1.0
    assert uniforms.color[2] == pytest.approx(1.0)
    # sRGB 0.9 is about 0.787 in linear light.
    assert uniforms.color[0] == pytest.approx(0.7874, abs=1e-4)


def test_pack_is_two_vec4() -> None:
    uniforms = CloudMaterialUniforms(
        color=(0.1, 0.2, 0.3, 1.0), settings=(2.0, 0.5, 3.0, 16.0)
    )
    packed = uniforms.pack()
    assert len(packed) == UNIFORM_SIZE == 32
    assert struct.unpack("8f", packed) == pytest.approx(
        (0.1, 0.2, 0.3, 1.0, 2.0, 0.5, 3.0, 16.0)
    )


def test_sync_runs_every_tick_without_rebuild() -> None:
    settings = CloudSettings()
    sync = RenderParameterSync(settings.display)
    for threshold in (0.1, 0.4, 0.9):
        settings.threshold = threshold
        sync.tick(settings.snapshot())
        assert sync.uniforms.threshold == pytest.approx(threshold)
    assert sync.sync_count == 3


def test_sync_updates_uniforms_in_place() -> None:
    settings = CloudSettings()
    sync = RenderParameterSync(settings.display)
    held = sync.uniforms
    settings.density_multiplier = 7.0
    settings.steps = 40
    sync.tick(settings.snapshot())
    assert held.density_multiplier == 7.0
    assert held.steps == 40.0


def test_sync_ignores_dirty_state() -> None:
    settings = CloudSettings()
    settings.seed = 50
    settings.absorption = 6.0
    sync = RenderParameterSync()
    sync.tick(settings.snapshot())
    assert settings.needs_rebuild
    assert sync.uniforms.absorption == 6.0


@pytest.mark.parametrize(
    ("srgb", "linear"),
    [(0.0, 0.0), (1.0, 1.0), (0.04045, 0.04045 / 12.92), (0.5, 0.21404)],
)
def test_srgb_to_linear(srgb: float, linear: float) -> None:
    assert colors.srgb_to_linear_component(srgb) == pytest.approx(linear, abs=1e-5)
