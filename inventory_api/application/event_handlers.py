"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inventory_api.domain.events import (
        ModelCreated,
        ModelUpdated,
        ModelDeleted,
        ModelPurchased,
        UserRegistered,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs all domain events for audit trail."""

    def handle_model_created(self, event: ModelCreated) -> None:
        logger.info(f"[AUDIT] Model created: {event.aggregate_id} - {event.name} ({event.framework}) by {event.created_by}")

    def handle_model_updated(self, event: ModelUpdated) -> None:
        logger.info(f"[AUDIT] Model updated: {event.aggregate_id} by {event.updated_by} fields={event.fields}")

    def handle_model_deleted(self, event: ModelDeleted) -> None:
        logger.info(f"[AUDIT] Model deleted: {event.aggregate_id} by {event.deleted_by}")

    def handle_model_purchased(self, event: ModelPurchased) -> None:
        logger.info(f"[AUDIT] Model purchased: {event.model_id} by {event.purchased_by} (ledger {event.purchase_id})")

    def handle_user_registered(self, event: UserRegistered) -> None:
        logger.info(f"[AUDIT] User registered: {event.email}")


class NotificationHandler:
    """Sends notifications for important events."""

    def handle_model_purchased(self, event: ModelPurchased) -> None:
        # TODO: email the model owner once a mail provider is configured
        logger.info(f"[NOTIFICATION] Model {event.model_id} purchased by {event.purchased_by}")

    def handle_user_registered(self, event: UserRegistered) -> None:
        logger.info(f"[NOTIFICATION] Welcome {event.email}")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from inventory_api.domain.events import (
        event_publisher,
        ModelCreated,
        ModelUpdated,
        ModelDeleted,
        ModelPurchased,
        UserRegistered,
    )

    # Startup may run more than once per process (tests, reloads)
    event_publisher.clear_subscribers()

    audit = AuditLogHandler()
    notification = NotificationHandler()

    # Audit handlers (all events)
    event_publisher.subscribe(ModelCreated, audit.handle_model_created)
    event_publisher.subscribe(ModelUpdated, audit.handle_model_updated)
    event_publisher.subscribe(ModelDeleted, audit.handle_model_deleted)
    event_publisher.subscribe(ModelPurchased, audit.handle_model_purchased)
    event_publisher.subscribe(UserRegistered, audit.handle_user_registered)

    # Notifications
    event_publisher.subscribe(ModelPurchased, notification.handle_model_purchased)
    event_publisher.subscribe(UserRegistered, notification.handle_user_registered)
