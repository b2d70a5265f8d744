"""Domain events for decoupled side effects and integrations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            self.event_id = str(uuid4())
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc)


@dataclass
class ModelCreated(DomainEvent):
    """Raised when a model record is listed."""
    name: str
    framework: str
    created_by: str


@dataclass
class ModelUpdated(DomainEvent):
    """Raised when the owner changes a model record."""
    updated_by: str
    fields: List[str]


@dataclass
class ModelDeleted(DomainEvent):
    """Raised when a model record is removed."""
    deleted_by: str


@dataclass
class ModelPurchased(DomainEvent):
    """Raised when an identity acquires a model."""
    model_id: str
    purchase_id: str
    purchased_by: str


@dataclass
class UserRegistered(DomainEvent):
    """Raised when a new user record is stored."""
    email: str


class DomainEventPublisher:
    """Singleton publisher for domain events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[Any], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[Any], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        event_type = type(event)
        if event_type in self._subscribers:
            for handler in self._subscribers[event_type]:
                try:
                    handler(event)
                except Exception:
                    # Handlers must not fail the operation that raised the event
                    logger.exception(f"Event handler error for {event_type.__name__}")

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
