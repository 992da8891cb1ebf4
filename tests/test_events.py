"""Tests for EventBus."""

import logging

from config_schemes import EventBus
from config_schemes import EventType


class TestEventBus:
    """Test EventBus class."""

    def test_publish_delivers_payload(self):
        """Test subscribers receive the payload as keyword arguments."""
        bus = EventBus()
        received = []
        bus.subscribe(EventType.ENVIRONMENT_CHANGE, "test", lambda environment: received.append(environment))

        bus.publish(EventType.ENVIRONMENT_CHANGE, "host", {"environment": "dev"})

        assert received == ["dev"]

    def test_publish_only_to_matching_type(self):
        """Test subscribers only get events of their type."""
        bus = EventBus()
        received = []
        bus.subscribe(EventType.CONFIGURATION_ERROR, "test", lambda **payload: received.append(payload))

        bus.publish(EventType.ENVIRONMENT_CHANGE, "host", {"environment": "dev"})

        assert received == []

    def test_subscribe_replaces_same_id(self):
        """Test subscribing twice with one id keeps a single callback."""
        bus = EventBus()
        received = []
        bus.subscribe(EventType.CORE_CONFIGURE, "test", lambda **payload: received.append("first"))
        bus.subscribe(EventType.CORE_CONFIGURE, "test", lambda **payload: received.append("second"))

        bus.publish(EventType.CORE_CONFIGURE, "host")

        assert received == ["second"]

    def test_unsubscribe(self):
        """Test unsubscribed callbacks are not called."""
        bus = EventBus()
        received = []
        bus.subscribe(EventType.CORE_CONFIGURE, "test", lambda **payload: received.append(payload))

        assert bus.unsubscribe(EventType.CORE_CONFIGURE, "test") is True
        assert bus.unsubscribe(EventType.CORE_CONFIGURE, "test") is False

        bus.publish(EventType.CORE_CONFIGURE, "host")
        assert received == []

    def test_failing_subscriber_does_not_stop_delivery(self, caplog):
        """Test an exception in one subscriber is logged and others still run."""
        bus = EventBus()
        received = []

        def fail(**payload):
            raise RuntimeError("subscriber broke")

        bus.subscribe(EventType.MODULE_CONFIGURE, "failing", fail)
        bus.subscribe(EventType.MODULE_CONFIGURE, "working", lambda **payload: received.append(payload))

        with caplog.at_level(logging.WARNING):
            bus.publish(EventType.MODULE_CONFIGURE, "host", {"obj": None})

        assert received == [{"obj": None}]
        assert "subscriber broke" in caplog.text

    def test_history(self):
        """Test published events are kept, newest last, up to the limit."""
        bus = EventBus(history_size=2)
        bus.publish(EventType.CORE_CONFIGURE, "host")
        bus.publish(EventType.ENVIRONMENT_CHANGE, "host", {"environment": "dev"})
        bus.publish(EventType.ENVIRONMENT_CHANGE, "host", {"environment": "deploy"})

        events = bus.history()
        assert [event.payload for event in events] == [{"environment": "dev"}, {"environment": "deploy"}]
        assert bus.history(EventType.CORE_CONFIGURE) == []
        assert events[0].source == "host"
