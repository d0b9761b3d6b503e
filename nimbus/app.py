from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from nimbus import config
from nimbus.cloud.material import CloudMaterialUniforms, RenderParameterSync
from nimbus.cloud.rebuild import (
    BackgroundRebuildCoordinator,
    RebuildCoordinator,
    VolumeSlot,
)
from nimbus.cloud.settings import CloudSettings
from nimbus.noise.volume import NoiseVolume
from nimbus.types import DeltaTime
from nimbus.util.clock import Clock
from nimbus.util.live_vars import (
    MetricSpec,
    live_variable_registry,
    record_time_live_variable,
)

logger = logging.getLogger(__name__)

TICK_METRIC = "time.cloud.tick_ms"
FRAME_METRIC = "time.cloud.frame_ms"

CLOUD_APP_METRICS = [
    MetricSpec(TICK_METRIC, "Wall-clock duration of one cloud tick"),
    MetricSpec(FRAME_METRIC, "Time between frames, including pacing sleeps"),
]


@dataclass
class AppConfig:
    """Configuration for a CloudApp."""

    fps: float | None = config.TARGET_FPS
    background_bakes: bool = False


class CloudRenderer(Protocol):
    """
    The rendering consumer of the cloud subsystem.

    A renderer owns the GPU side: the 3D texture holding the noise volume and
    the material uniforms the ray-marching shader reads. The app calls it once
    per tick, after the rebuild and the parameter sync ran.

    ``upload_volume`` is only called when a new volume was published since the
    previous call. ``draw`` is called every tick.
    """

    def upload_volume(self, volume: NoiseVolume) -> None:
        """Replace the texture contents with ``volume``."""
        ...

    def draw(self, uniforms: CloudMaterialUniforms) -> None:
        """Render one frame with the current material uniforms."""
        ...


class CloudApp:
    """Owns the cloud settings and drives one tick per frame.

    Each tick takes a single snapshot of the settings, lets the rebuild
    coordinator act on it, then pushes the display parameters to the
    material uniforms. Both steps see the same snapshot.
    """

    def __init__(
        self,
        settings: CloudSettings | None = None,
        app_config: AppConfig | None = None,
        renderer: CloudRenderer | None = None,
    ) -> None:
        self.config = app_config or AppConfig()
        self.settings = settings or CloudSettings()
        self.slot = VolumeSlot(self.settings.resolution)
        coordinator_class = (
            BackgroundRebuildCoordinator
            if self.config.background_bakes
            else RebuildCoordinator
        )
        self.coordinator: RebuildCoordinator = coordinator_class(
            self.settings, self.slot
        )
        self.parameter_sync = RenderParameterSync(self.settings.display)
        self.renderer = renderer
        self.clock = Clock()
        self._uploaded_version = -1

        live_variable_registry.register_metrics(CLOUD_APP_METRICS)

    @property
    def volume(self) -> NoiseVolume:
        """The live noise volume (the sentinel until the first bake lands)."""
        return self.slot.volume

    @property
    def uniforms(self) -> CloudMaterialUniforms:
        return self.parameter_sync.uniforms

    def update(self) -> bool:
        """Run the cloud systems for one tick. Returns whether a volume landed."""
        with record_time_live_variable(TICK_METRIC):
            snapshot = self.settings.snapshot()
            rebuilt = self.coordinator.tick(snapshot)
            self.parameter_sync.tick(snapshot)

            if self.renderer is not None:
                if self.slot.version != self._uploaded_version:
                    self.renderer.upload_volume(self.slot.volume)
                    self._uploaded_version = self.slot.version
                self.renderer.draw(self.parameter_sync.uniforms)
        return rebuilt

    def tick(self) -> DeltaTime:
        """Wait for the next frame, then update. Returns the frame delta."""
        delta_time = self.clock.sync(self.config.fps)
        live_variable_registry.record_metric(FRAME_METRIC, delta_time * 1000)
        self.update()
        return delta_time

    def run(self, frames: int) -> None:
        """Run ``frames`` ticks at the configured rate."""
        logger.info(
            "Running %d frames (fps=%s, background bakes=%s)",
            frames,
            self.config.fps,
            self.config.background_bakes,
        )
        for _ in range(frames):
            self.tick()
        logger.info(
            "Ran %d frames, %.1f fps mean", self.clock.tick_count, self.clock.mean_fps
        )

    def close(self) -> None:
        """Stop any background work."""
        self.coordinator.shutdown()

    def __enter__(self) -> CloudApp:
        return self

    def __exit__(self, exc_type, value, traceback) -> None:
        self.close()
