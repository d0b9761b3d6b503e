"""Editable cloud settings and the dirty flag that tracks stale volumes.

``CloudSettings`` is the single object the parameter-editing panel writes to.
It owns two groups of values:

- generation parameters (seed, frequency, feature point count), which change
  the contents of the noise volume and therefore mark it dirty;
- display parameters (color, density, threshold, absorption, steps), which
  only change how the renderer uses the volume and never mark it dirty.

Every value coming in through a setter is clamped to its editing range, so
nothing out of range ever reaches the baker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from nimbus import config
from nimbus.events import SettingsResetEvent, publish_event
from nimbus.noise.params import GenerationParameters
from nimbus.types import ColorRGBf
from nimbus.util.misc import clamp, clamp_int

logger = logging.getLogger(__name__)


@dataclass
class DisplayParameters:
    """Live render parameters. Mutated in place by the editing panel."""

    color: ColorRGBf = config.DEFAULT_CLOUD_COLOR
    density_multiplier: float = config.DEFAULT_DENSITY_MULTIPLIER
    threshold: float = config.DEFAULT_THRESHOLD
    absorption: float = config.DEFAULT_ABSORPTION
    steps: int = config.DEFAULT_STEPS

    def copy(self) -> DisplayParameters:
        return replace(self)


@dataclass(frozen=True)
class CloudSnapshot:
    """The settings as seen at the start of one tick.

    Attributes:
        generation: Generation parameters to bake with, if a bake is due.
        display: A private copy of the display parameters.
        needs_rebuild: The dirty flag at snapshot time.
        revision: Generation revision at snapshot time. Used to tell whether
            an edit landed while the snapshot was being acted on.
    """

    generation: GenerationParameters
    display: DisplayParameters = field(default_factory=DisplayParameters)
    needs_rebuild: bool = False
    revision: int = 0


class CloudSettings:
    """Generation and display parameters plus the rebuild dirty flag.

    The dirty flag starts out set so the first tick bakes a real volume over
    the startup sentinel.
    """

    def __init__(
        self,
        generation: GenerationParameters | None = None,
        display: DisplayParameters | None = None,
    ) -> None:
        self._generation = generation or GenerationParameters()
        self._generation.validate()
        self.display = display or DisplayParameters()
        self._needs_rebuild = True
        # Bumped on every change to the generation parameters.
        self._revision = 0

    # ------------------------------------------------------------------
    # Dirty Tracking
    # ------------------------------------------------------------------
    @property
    def needs_rebuild(self) -> bool:
        return self._needs_rebuild

    @property
    def revision(self) -> int:
        return self._revision

    def mark_dirty(self) -> None:
        """Flag the live volume as stale."""
        self._needs_rebuild = True
        self._revision += 1

    def mark_clean(self, revision: int) -> bool:
        """Clear the dirty flag after a bake made from ``revision`` completed.

        The flag stays set if the generation parameters changed since that
        revision was snapshotted. Returns whether the flag was cleared.
        """
        if revision != self._revision:
            return False
        self._needs_rebuild = False
        return True

    def snapshot(self) -> CloudSnapshot:
        """Capture the current values for one tick."""
        return CloudSnapshot(
            generation=self._generation,
            display=self.display.copy(),
            needs_rebuild=self._needs_rebuild,
            revision=self._revision,
        )

    # ------------------------------------------------------------------
    # Generation Parameters
    # ------------------------------------------------------------------
    @property
    def generation(self) -> GenerationParameters:
        return self._generation

    def _set_generation(self, **changes: int | float) -> None:
        updated = self._generation.with_changes(**changes)
        if updated == self._generation:
            return
        updated.validate()
        self._generation = updated
        self.mark_dirty()

    @property
    def seed(self) -> int:
        return self._generation.seed

    @seed.setter
    def seed(self, value: float) -> None:
        self._set_generation(seed=clamp_int(value, (0, config.MAX_SEED)))

    @property
    def frequency(self) -> float:
        return self._generation.frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._set_generation(frequency=float(clamp(value, config.FREQUENCY_RANGE)))

    @property
    def feature_point_count(self) -> int:
        return self._generation.feature_point_count

    @feature_point_count.setter
    def feature_point_count(self, value: float) -> None:
        self._set_generation(
            feature_point_count=clamp_int(value, config.FEATURE_POINT_COUNT_RANGE)
        )

    @property
    def resolution(self) -> int:
        return self._generation.resolution

    # ------------------------------------------------------------------
    # Display Parameters
    # ------------------------------------------------------------------
    @property
    def color(self) -> ColorRGBf:
        return self.display.color

    @color.setter
    def color(self, value: ColorRGBf) -> None:
        r, g, b = (float(clamp(c, config.COLOR_COMPONENT_RANGE)) for c in value)
        self.display.color = (r, g, b)

    @property
    def density_multiplier(self) -> float:
        return self.display.density_multiplier

    @density_multiplier.setter
    def density_multiplier(self, value: float) -> None:
        self.display.density_multiplier = float(
            clamp(value, config.DENSITY_MULTIPLIER_RANGE)
        )

    @property
    def threshold(self) -> float:
        return self.display.threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self.display.threshold = float(clamp(value, config.THRESHOLD_RANGE))

    @property
    def absorption(self) -> float:
        return self.display.absorption

    @absorption.setter
    def absorption(self, value: float) -> None:
        self.display.absorption = float(clamp(value, config.ABSORPTION_RANGE))

    @property
    def steps(self) -> int:
        return self.display.steps

    @steps.setter
    def steps(self, value: float) -> None:
        self.display.steps = clamp_int(value, config.STEPS_RANGE)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Restore every documented default and schedule a rebuild.

        The volume resolution is not an editable setting and is kept.
        """
        self._generation = GenerationParameters(resolution=self._generation.resolution)
        self.display = DisplayParameters()
        self.mark_dirty()
        logger.info("Cloud settings reset to defaults")
        publish_event(SettingsResetEvent())
