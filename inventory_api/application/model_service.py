"""Service for model record listing, search and owner-managed changes."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from inventory_api.application.authorization import (
    AuthenticatedUser,
    require_owner,
    strip_protected_fields,
)
from inventory_api.db.repositories import ModelsRepository
from inventory_api.domain.entities import ModelEntity
from inventory_api.domain.errors import NotFoundError
from inventory_api.domain.events import (
    ModelCreated,
    ModelDeleted,
    ModelUpdated,
    event_publisher,
)
from inventory_api.domain.specifications import (
    DASHBOARD_PROJECTION,
    NAME_SEARCH_FIELDS,
    RECENT_SORT,
    OwnedBy,
    PurchasedBy,
    build_model_query,
)


class ModelService:
    """Application service for the models collection."""

    def __init__(self, models: ModelsRepository, recent_limit: int = 6) -> None:
        self._models = models
        self._recent_limit = recent_limit

    def list_models(self) -> List[ModelEntity]:
        return self._models.find()

    def recent_models(self) -> List[ModelEntity]:
        """Most recently created models, newest first."""
        return self._models.find(sort=RECENT_SORT, limit=self._recent_limit)

    def find_models(self, search: Optional[str] = None, framework: Optional[str] = None) -> List[ModelEntity]:
        """Search across name/framework/dataset and filter by a framework list."""
        return self._models.find(build_model_query(search=search, framework=framework))

    def search_by_name(self, search: Optional[str]) -> List[ModelEntity]:
        return self._models.find(build_model_query(search=search, search_fields=NAME_SEARCH_FIELDS))

    def models_owned_by(self, caller: AuthenticatedUser) -> List[ModelEntity]:
        return self._models.find(OwnedBy(caller.email).to_query())

    def models_purchased_by(self, caller: AuthenticatedUser) -> List[ModelEntity]:
        return self._models.find(PurchasedBy(caller.email).to_query())

    def dashboard_models(self) -> List[Dict[str, Any]]:
        """Projected listing with a download count derived from the purchaser list."""
        rows = []
        for model in self._models.find(projection=DASHBOARD_PROJECTION, sort=RECENT_SORT):
            purchasers = model.get("purchasedBy") or []
            rows.append({**model, "purchasedBy": purchasers, "downloads": len(purchasers)})
        return rows

    def get_model(self, model_id: str) -> ModelEntity:
        model = self._models.get(model_id)
        if not model:
            raise NotFoundError(f"Model not found: {model_id}")
        return model

    def create_model(self, data: Dict[str, Any], caller: AuthenticatedUser) -> str:
        """Store a new model owned by the caller, with no purchasers."""
        document = {
            **data,
            "createdAt": datetime.now(timezone.utc),
            "createdBy": caller.email,
            "purchasedBy": [],
            "purchased": 0,
        }
        model_id = self._models.insert(document)

        event_publisher.publish(ModelCreated(
            event_id="",
            timestamp=None,
            aggregate_id=model_id,
            name=document.get("name", ""),
            framework=document.get("framework", ""),
            created_by=caller.email,
        ))
        return model_id

    def update_model(self, model_id: str, changes: Dict[str, Any], caller: AuthenticatedUser) -> Dict[str, int]:
        """
        Apply a partial update on behalf of the model owner.

        Protected fields in ``changes`` are ignored; ``updatedAt`` is set.
        """
        model = self.get_model(model_id)
        require_owner(model, caller)

        allowed = strip_protected_fields(changes)
        allowed["updatedAt"] = datetime.now(timezone.utc)
        result = self._models.update_owned(model_id, caller.email, allowed)
        if not result["matched"]:
            # Deleted or re-owned between the check and the write
            raise NotFoundError(f"Model not found: {model_id}")

        event_publisher.publish(ModelUpdated(
            event_id="",
            timestamp=None,
            aggregate_id=model_id,
            updated_by=caller.email,
            fields=sorted(allowed),
        ))
        return result

    def delete_model(self, model_id: str, caller: AuthenticatedUser) -> int:
        model = self.get_model(model_id)
        require_owner(model, caller)

        deleted = self._models.delete_owned(model_id, caller.email)
        if not deleted:
            raise NotFoundError(f"Model not found: {model_id}")

        event_publisher.publish(ModelDeleted(
            event_id="",
            timestamp=None,
            aggregate_id=model_id,
            deleted_by=caller.email,
        ))
        return deleted
