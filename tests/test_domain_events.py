"""Tests for domain events and event handling."""
from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import Mock

from inventory_api.domain.events import (
    DomainEvent, ModelCreated, ModelPurchased, UserRegistered,
    DomainEventPublisher, event_publisher
)
from inventory_api.application.event_handlers import register_event_handlers


class TestDomainEvent:
    """Test base domain event functionality."""

    def test_defaults_are_filled(self):
        """Empty id and timestamp are generated."""
        event = DomainEvent(event_id="", timestamp=None, aggregate_id="model-1")

        assert event.event_id
        assert isinstance(event.timestamp, datetime)
        assert event.aggregate_id == "model-1"

    def test_custom_values_are_kept(self):
        """Explicit id and timestamp are not overwritten."""
        stamp = datetime(2024, 1, 1, 12, 0, 0)
        event = DomainEvent(event_id="evt-1", timestamp=stamp, aggregate_id="model-1")

        assert event.event_id == "evt-1"
        assert event.timestamp == stamp


class TestDomainEventPublisher:
    """Test publisher subscription and dispatch."""

    def test_singleton(self):
        """Every construction returns the shared publisher."""
        assert DomainEventPublisher() is event_publisher

    def test_publish_to_subscribers_of_type(self):
        """Only handlers of the published type are called."""
        purchased_handler = Mock()
        registered_handler = Mock()
        event_publisher.subscribe(ModelPurchased, purchased_handler)
        event_publisher.subscribe(UserRegistered, registered_handler)

        event = ModelPurchased(
            event_id="", timestamp=None, aggregate_id="m1",
            model_id="m1", purchase_id="p1", purchased_by="a@x.com",
        )
        event_publisher.publish(event)

        purchased_handler.assert_called_once_with(event)
        registered_handler.assert_not_called()

    def test_handler_failure_does_not_propagate(self, caplog):
        """A failing handler is logged and the next handler still runs."""
        failing = Mock(side_effect=RuntimeError("boom"))
        following = Mock()
        event_publisher.subscribe(UserRegistered, failing)
        event_publisher.subscribe(UserRegistered, following)

        with caplog.at_level(logging.ERROR):
            event_publisher.publish(UserRegistered(event_id="", timestamp=None, aggregate_id="u1", email="a@x.com"))

        following.assert_called_once()
        assert "Event handler error" in caplog.text

    def test_clear_subscribers(self):
        """Cleared handlers are no longer called."""
        handler = Mock()
        event_publisher.subscribe(UserRegistered, handler)
        event_publisher.clear_subscribers()

        event_publisher.publish(UserRegistered(event_id="", timestamp=None, aggregate_id="u1", email="a@x.com"))

        handler.assert_not_called()


class TestEventHandlers:
    """Test the registered audit and notification handlers."""

    def test_audit_log_written(self, caplog):
        """Registered handlers write an audit line per event."""
        register_event_handlers()

        with caplog.at_level(logging.INFO):
            event_publisher.publish(ModelCreated(
                event_id="", timestamp=None, aggregate_id="m1",
                name="BERT", framework="PyTorch", created_by="a@x.com",
            ))

        assert "[AUDIT] Model created: m1 - BERT (PyTorch) by a@x.com" in caplog.text

    def test_register_twice_does_not_duplicate(self, caplog):
        """Re-registration replaces earlier subscriptions."""
        register_event_handlers()
        register_event_handlers()

        with caplog.at_level(logging.INFO):
            event_publisher.publish(UserRegistered(event_id="", timestamp=None, aggregate_id="u1", email="a@x.com"))

        assert caplog.text.count("[AUDIT] User registered: a@x.com") == 1
