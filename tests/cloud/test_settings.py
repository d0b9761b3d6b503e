"""Tests for CloudSettings clamping, dirty tracking and reset."""

from __future__ import annotations

import pytest

from nimbus import config
from nimbus.cloud import CloudSettings, DisplayParameters
from nimbus.events import SettingsResetEvent, subscribe_to_event
from nimbus.noise import GenerationParameters, InvalidParameterError


def clean_settings() -> CloudSettings:
    settings = CloudSettings()
    settings.mark_clean(settings.revision)
    return settings


class TestDefaults:
    def test_documented_defaults(self) -> None:
        settings = CloudSettings()
        assert settings.generation == GenerationParameters(
            seed=1, frequency=4.0, feature_point_count=16, resolution=32
        )
        assert settings.display == DisplayParameters(
            color=(0.9, 0.9, 1.0),
            density_multiplier=2.0,
            threshold=0.2,
            absorption=3.0,
            steps=16,
        )

    def test_starts_dirty(self) -> None:
        assert CloudSettings().needs_rebuild

    def test_invalid_initial_generation_rejected(self) -> None:
        with pytest.raises(InvalidParameterError):
            CloudSettings(GenerationParameters(frequency=0.0))


class TestDirtyFlag:
    @pytest.mark.parametrize(
        ("name", "value"),
        [("seed", 5), ("frequency", 7.5), ("feature_point_count", 32)],
    )
    def test_generation_edit_marks_dirty(self, name: str, value: float) -> None:
        settings = clean_settings()
        setattr(settings, name, value)
        assert settings.needs_rebuild
        assert getattr(settings, name) == value

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("density_multiplier", 5.0),
            ("threshold", 0.7),
            ("absorption", 1.0),
            ("steps", 32),
            ("color", (0.2, 0.3, 0.4)),
        ],
    )
    def test_display_edit_does_not_mark_dirty(self, name: str, value: object) -> None:
        settings = clean_settings()
        setattr(settings, name, value)
        assert not settings.needs_rebuild
        assert getattr(settings, name) == value

    def test_unchanged_value_keeps_clean(self) -> None:
        settings = clean_settings()
        settings.seed = settings.seed
        settings.frequency = settings.frequency
        assert not settings.needs_rebuild

    def test_mark_dirty_is_idempotent(self) -> None:
        settings = clean_settings()
        settings.seed = 3
        settings.seed = 4
        assert settings.needs_rebuild

    def test_mark_clean_ignores_stale_revision(self) -> None:
        settings = CloudSettings()
        snapshot = settings.snapshot()
        settings.seed = 9
        assert not settings.mark_clean(snapshot.revision)
        assert settings.needs_rebuild
        assert settings.mark_clean(settings.revision)
        assert not settings.needs_rebuild


class TestClamping:
    def test_frequency_clamped(self) -> None:
        settings = CloudSettings()
        settings.frequency = 50.0
        assert settings.frequency == config.FREQUENCY_RANGE[1]
        settings.frequency = 0.0
        assert settings.frequency == config.FREQUENCY_RANGE[0]

    def test_feature_point_count_clamped_and_truncated(self) -> None:
        settings = CloudSettings()
        settings.feature_point_count = 1000
        assert settings.feature_point_count == 64
        settings.feature_point_count = 0
        assert settings.feature_point_count == 4
        settings.feature_point_count = 12.9
        assert settings.feature_point_count == 12

    def test_seed_clamped_to_u32(self) -> None:
        settings = CloudSettings()
        settings.seed = -5
        assert settings.seed == 0
        settings.seed = 2**40
        assert settings.seed == config.MAX_SEED

    def test_steps_truncated_like_a_slider(self) -> None:
        settings = CloudSettings()
        settings.steps = 20.9
        assert settings.steps == 20
        settings.steps = 1
        assert settings.steps == 4
        settings.steps = 200
        assert settings.steps == 64

    def test_display_ranges(self) -> None:
        settings = CloudSettings()
        settings.density_multiplier = 11.0
        settings.threshold = -0.5
        settings.absorption = 99.0
        settings.color = (1.5, -0.1, 0.5)
        assert settings.density_multiplier == 10.0
        assert settings.threshold == 0.0
        assert settings.absorption == 10.0
        assert settings.color == (1.0, 0.0, 0.5)


class TestSnapshot:
    def test_snapshot_is_isolated_from_later_edits(self) -> None:
        settings = CloudSettings()
        snapshot = settings.snapshot()
        settings.threshold = 0.9
        settings.seed = 42
        assert snapshot.display.threshold == pytest.approx(0.2)
        assert snapshot.generation.seed == 1
        assert snapshot.needs_rebuild

    def test_snapshot_carries_revision(self) -> None:
        settings = CloudSettings()
        settings.seed = 2
        assert settings.snapshot().revision == settings.revision


class TestReset:
    def test_reset_restores_defaults_and_marks_dirty(self) -> None:
        settings = clean_settings()
        settings.seed = 77
        settings.frequency = 9.0
        settings.feature_point_count = 40
        settings.threshold = 0.9
        settings.steps = 50
        settings.mark_clean(settings.revision)

        settings.reset()

        assert settings.generation == GenerationParameters()
        assert settings.display == DisplayParameters()
        assert settings.needs_rebuild

    def test_reset_replaces_display_object(self) -> None:
        settings = CloudSettings()
        before = settings.display
        settings.reset()
        assert settings.display is not before

    def test_reset_keeps_resolution(self) -> None:
        settings = CloudSettings(GenerationParameters(resolution=8))
        settings.reset()
        assert settings.resolution == 8

    def test_reset_publishes_event(self) -> None:
        seen: list[SettingsResetEvent] = []
        subscribe_to_event(SettingsResetEvent, seen.append)
        CloudSettings().reset()
        assert len(seen) == 1
