"""Deciding when the noise volume is rebuilt, and publishing the result.

Each tick the coordinator looks at one ``CloudSnapshot``. If the snapshot is
dirty, the volume is baked from the snapshot's generation parameters and the
result replaces the live volume in the ``VolumeSlot``. Several edits between
two ticks therefore cost a single bake with the final values.

Two coordinators share that contract:

- ``RebuildCoordinator`` bakes synchronously inside the tick. Fine for the
  small default resolution.
- ``BackgroundRebuildCoordinator`` hands the bake to a worker thread and polls
  for the finished volume on later ticks, so the tick never blocks. A bake
  made stale by a newer edit is cancelled.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from time import perf_counter

from nimbus.events import VolumeRebuiltEvent, publish_event
from nimbus.noise import BakeCancelledError, NoiseVolume, bake_volume
from nimbus.noise.params import GenerationParameters
from nimbus.util.live_vars import MetricSpec, live_variable_registry

from .settings import CloudSettings, CloudSnapshot

logger = logging.getLogger(__name__)

BAKE_METRIC = "time.cloud.bake_ms"

CLOUD_REBUILD_METRICS = [
    MetricSpec(BAKE_METRIC, "Wall-clock duration of one noise volume bake"),
]


class VolumeSlot:
    """Holds the live noise volume. One writer, any number of readers.

    Publishing swaps the whole reference; a reader holding the previous
    volume keeps a complete, unchanging buffer.
    """

    def __init__(self, resolution: int) -> None:
        self._volume = NoiseVolume.sentinel(resolution)
        self._version = 0
        self._lock = threading.Lock()

    @property
    def volume(self) -> NoiseVolume:
        return self._volume

    @property
    def version(self) -> int:
        """Number of volumes published so far. Zero means sentinel only."""
        return self._version

    def publish(self, volume: NoiseVolume) -> int:
        """Replace the live volume and return the new version."""
        with self._lock:
            self._volume = volume
            self._version += 1
            return self._version


class RebuildCoordinator:
    """Synchronous tick-driven rebuilds."""

    def __init__(self, settings: CloudSettings, slot: VolumeSlot) -> None:
        self.settings = settings
        self.slot = slot
        self.bake_count = 0
        live_variable_registry.register_metrics(CLOUD_REBUILD_METRICS)

    def tick(self, snapshot: CloudSnapshot) -> bool:
        """Bake and publish if ``snapshot`` is dirty. Returns whether it baked."""
        if not snapshot.needs_rebuild:
            return False

        start = perf_counter()
        volume = bake_volume(snapshot.generation)
        elapsed_ms = (perf_counter() - start) * 1000

        self._publish(volume, snapshot.revision, elapsed_ms)
        return True

    def _publish(self, volume: NoiseVolume, revision: int, elapsed_ms: float) -> None:
        live_variable_registry.record_metric(BAKE_METRIC, elapsed_ms)
        version = self.slot.publish(volume)
        self.bake_count += 1
        if not self.settings.mark_clean(revision):
            logger.debug("Settings changed during bake; volume is already stale")
        publish_event(VolumeRebuiltEvent(volume, elapsed_ms, version))

    def shutdown(self) -> None:
        """Nothing to release for synchronous rebuilds."""


class _PendingBake:
    """A bake running on the worker thread."""

    def __init__(self, generation: GenerationParameters, revision: int) -> None:
        self.generation = generation
        self.revision = revision
        self.cancel_event = threading.Event()
        self.started_at = perf_counter()
        self.future: Future[NoiseVolume] | None = None

    def cancel(self) -> None:
        self.cancel_event.set()
        if self.future is not None:
            self.future.cancel()


class BackgroundRebuildCoordinator(RebuildCoordinator):
    """Rebuilds on a worker thread; the tick only starts and collects bakes.

    At most one bake is in flight. When the generation parameters change
    while a bake runs, that bake is cancelled at its next slab boundary and a
    new one starts once the worker is free.
    """

    def __init__(self, settings: CloudSettings, slot: VolumeSlot) -> None:
        super().__init__(settings, slot)
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="nimbus-bake"
        )
        self._pending: _PendingBake | None = None
        self.cancelled_count = 0

    @property
    def is_baking(self) -> bool:
        return self._pending is not None

    def tick(self, snapshot: CloudSnapshot) -> bool:
        """Collect a finished bake, then start a new one if still dirty.

        Returns whether a volume was published this tick.
        """
        published = self._collect()

        pending = self._pending
        if pending is not None and pending.revision != snapshot.revision:
            if not pending.cancel_event.is_set():
                logger.debug(
                    "Cancelling stale bake (revision %d, now %d)",
                    pending.revision,
                    snapshot.revision,
                )
                pending.cancel()
            return published

        if pending is None and snapshot.needs_rebuild and not published:
            self._start(snapshot)
        return published

    def _start(self, snapshot: CloudSnapshot) -> None:
        pending = _PendingBake(snapshot.generation, snapshot.revision)
        pending.future = self._executor.submit(
            bake_volume, snapshot.generation, pending.cancel_event.is_set
        )
        self._pending = pending

    def _collect(self) -> bool:
        pending = self._pending
        if pending is None or pending.future is None or not pending.future.done():
            return False
        self._pending = None

        if pending.future.cancelled():
            self.cancelled_count += 1
            return False

        try:
            volume = pending.future.result()
        except BakeCancelledError:
            self.cancelled_count += 1
            logger.debug("Bake for revision %d was cancelled", pending.revision)
            return False
        except Exception:
            logger.exception("Background bake failed; retrying")
            return False

        if pending.cancel_event.is_set():
            # Finished before it noticed the cancellation; the result is stale.
            self.cancelled_count += 1
            return False

        elapsed_ms = (perf_counter() - pending.started_at) * 1000
        self._publish(volume, pending.revision, elapsed_ms)
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the in-flight bake finishes. For tools and tests.

        Returns ``False`` if a bake is still running after ``timeout``.
        """
        pending = self._pending
        if pending is None or pending.future is None:
            return True
        try:
            pending.future.exception(timeout=timeout)
        except TimeoutError:
            return False
        except CancelledError:
            pass
        return True

    def shutdown(self) -> None:
        """Cancel any in-flight bake and stop the worker thread."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._executor.shutdown(wait=True)
