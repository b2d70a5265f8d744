"""Service for the purchase workflow and the purchase ledger."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from inventory_api.application.authorization import AuthenticatedUser
from inventory_api.db.repositories import ModelsRepository, PurchasesRepository
from inventory_api.domain.entities import ModelEntity, PurchaseEntity, PurchaseResult
from inventory_api.domain.errors import ConflictError, NotFoundError
from inventory_api.domain.events import ModelPurchased, event_publisher

logger = logging.getLogger(__name__)


class PurchaseService:
    """Moves a (model, identity) pair from not purchased to purchased."""

    def __init__(self, models: ModelsRepository, purchases: PurchasesRepository) -> None:
        self._models = models
        self._purchases = purchases

    def purchase(self, model_id: str, caller: AuthenticatedUser) -> PurchaseResult:
        """
        Purchase a model for the caller.

        The purchaser set and counter change in one conditional update; the
        ledger entry is written afterwards and the first write is undone if
        it fails.

        Raises:
            InvalidIdentifierError: If the model ID is malformed
            NotFoundError: If the model does not exist
            ConflictError: If the caller already purchased the model
        """
        if not self._models.add_purchaser(model_id, caller.email):
            model = self._models.get(model_id)
            if not model:
                raise NotFoundError(f"Model not found: {model_id}")
            raise ConflictError("Model already purchased")

        model = self._models.get(model_id)
        if not model:
            # Deleted right after the purchaser was added
            raise NotFoundError(f"Model not found: {model_id}")

        try:
            purchase_id = self._purchases.insert(self._ledger_entry(model, caller))
        except PyMongoError:
            logger.error(f"Ledger write failed for model {model_id}, reverting purchase by {caller.email}")
            self._models.remove_purchaser(model_id, caller.email)
            raise

        event_publisher.publish(ModelPurchased(
            event_id="",
            timestamp=None,
            aggregate_id=model_id,
            model_id=model_id,
            purchase_id=purchase_id,
            purchased_by=caller.email,
        ))
        return PurchaseResult(model_id=model_id, purchase_id=purchase_id, purchased_by=caller.email)

    def record(self, model_id: str, caller: AuthenticatedUser) -> str:
        """Write a standalone ledger entry without touching the purchaser set."""
        model = self._models.get(model_id)
        if not model:
            raise NotFoundError(f"Model not found: {model_id}")
        return self._purchases.insert(self._ledger_entry(model, caller))

    def list_for(self, caller: AuthenticatedUser) -> List[PurchaseEntity]:
        return self._purchases.list_for(caller.email)

    @staticmethod
    def _ledger_entry(model: ModelEntity, caller: AuthenticatedUser) -> Dict[str, Any]:
        return {
            "modelId": model["_id"],
            "modelName": model.get("name"),
            "framework": model.get("framework"),
            "dataset": model.get("dataset"),
            "createdBy": model.get("createdBy"),
            "purchasedBy": caller.email,
            "purchasedAt": datetime.now(timezone.utc),
        }
