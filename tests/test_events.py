"""Tests for the event bus system."""

import logging

import pytest

from nimbus.events import (
    CloudEvent,
    EventBus,
    SettingsResetEvent,
    publish_event,
    reset_event_bus_for_testing,
    subscribe_to_event,
    unsubscribe_from_event,
)


class TestEventBus:
    def test_handler_exception_does_not_crash_event_bus(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing handler is logged and later handlers still run."""
        bus = EventBus()
        handler_calls: list[str] = []

        def failing_handler(event: CloudEvent) -> None:
            handler_calls.append("failing")
            raise ValueError("Handler failed!")

        def succeeding_handler(event: CloudEvent) -> None:
            handler_calls.append("succeeding")

        bus.subscribe(SettingsResetEvent, failing_handler)
        bus.subscribe(SettingsResetEvent, succeeding_handler)

        with caplog.at_level(logging.ERROR):
            bus.publish(SettingsResetEvent())

        assert handler_calls == ["failing", "succeeding"]
        assert "Error handling event SettingsResetEvent" in caplog.text

    def test_unsubscribe_unknown_handler_is_ignored(self) -> None:
        bus = EventBus()
        bus.unsubscribe(SettingsResetEvent, lambda e: None)

    def test_events_dispatch_by_exact_type(self) -> None:
        bus = EventBus()
        seen: list[CloudEvent] = []
        bus.subscribe(CloudEvent, seen.append)
        bus.publish(SettingsResetEvent())
        assert seen == []


class TestGlobalBus:
    def test_subscribe_publish_unsubscribe(self) -> None:
        seen: list[CloudEvent] = []
        subscribe_to_event(SettingsResetEvent, seen.append)
        publish_event(SettingsResetEvent())
        unsubscribe_from_event(SettingsResetEvent, seen.append)
        publish_event(SettingsResetEvent())
        assert len(seen) == 1

    def test_reset_drops_handlers(self) -> None:
        seen: list[CloudEvent] = []
        subscribe_to_event(SettingsResetEvent, seen.append)
        reset_event_bus_for_testing()
        publish_event(SettingsResetEvent())
        assert seen == []
