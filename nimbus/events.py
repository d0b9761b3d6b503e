"""Global event system for cross-system notifications.

The bus carries notifications such as "a new noise volume was published" to
anything that cares (texture uploaders, debug overlays, logging). It is
fire-and-forget: handlers run synchronously and their failures are logged,
never propagated to the publisher.

Do not use it for the rebuild decision itself or for anything that needs a
return value; call the owning object directly instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nimbus.noise.volume import NoiseVolume

logger = logging.getLogger(__name__)


@dataclass
class CloudEvent:
    """Base class for all cloud events."""

    pass


@dataclass
class VolumeRebuiltEvent(CloudEvent):
    """A freshly baked noise volume replaced the live one.

    Attributes:
        volume: The newly published volume.
        elapsed_ms: Wall-clock duration of the bake.
        version: Slot version after publishing.
    """

    volume: NoiseVolume
    elapsed_ms: float
    version: int


@dataclass
class SettingsResetEvent(CloudEvent):
    """All cloud settings were reset to their documented defaults."""

    pass


class EventBus:
    """Simple event bus for publish/subscribe pattern."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = {}

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers:
            with suppress(ValueError):
                self._handlers[event_type].remove(handler)

    def publish(self, event: CloudEvent) -> None:
        """Publish an event to all subscribed handlers."""
        event_type = type(event)
        if event_type in self._handlers:
            # Copy the handler list to allow safe subscribe/unsubscribe during dispatch
            for handler in list(self._handlers[event_type]):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error handling event {event_type.__name__}")


# Global event bus instance
_global_event_bus = EventBus()


def subscribe_to_event(event_type: type, handler: Callable) -> None:
    """Subscribe to an event type globally."""
    _global_event_bus.subscribe(event_type, handler)


def unsubscribe_from_event(event_type: type, handler: Callable) -> None:
    """Unsubscribe from an event type globally."""
    _global_event_bus.unsubscribe(event_type, handler)


def publish_event(event: CloudEvent) -> None:
    """Publish an event globally."""
    _global_event_bus.publish(event)


def reset_event_bus_for_testing() -> None:
    """Reset the global event bus. Use only in tests."""
    global _global_event_bus
    _global_event_bus = EventBus()
