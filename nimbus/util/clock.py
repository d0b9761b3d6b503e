"""Frame pacing for the cloud app loop."""

import time

from nimbus import config
from nimbus.types import DeltaTime

from .metrics import SampleWindow


class Clock:
    """Paces the app loop and keeps a window of recent frame times."""

    def __init__(self, sample_size: int = config.FPS_SAMPLE_SIZE) -> None:
        self.last_time = time.perf_counter()
        self.frame_times = SampleWindow(sample_size)
        self.tick_count = 0
        self._drift = 0.0

    def tick(self) -> DeltaTime:
        """Close the current frame and return its duration in seconds."""
        now = time.perf_counter()
        delta_time = DeltaTime(max(0.0, now - self.last_time))
        self.last_time = now
        self.frame_times.record(delta_time)
        self.tick_count += 1
        return delta_time

    def sync(self, fps: float | None = None) -> DeltaTime:
        """
        Sleep until the next frame is due at ``fps``, then close the frame.

        With ``fps`` of ``None`` or zero the loop runs uncapped. Oversleeping
        on one frame shortens the wait for the next, up to one frame.
        """
        if fps is not None and fps > 0:
            frame_time = 1 / fps
            target_time = self.last_time + frame_time - self._drift
            remaining = target_time - time.perf_counter()
            if remaining > 0:
                time.sleep(remaining)
            overshoot = time.perf_counter() - target_time
            self._drift = min(max(0.0, overshoot), frame_time)
        return self.tick()

    @property
    def mean_fps(self) -> float:
        """Frame rate over the sampled frames, zero before the first tick."""
        mean = self.frame_times.mean
        return 1 / mean if mean > 0 else 0.0
