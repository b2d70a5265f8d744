from typing import Any, Dict, List, Optional

from pymongo.collection import Collection

from inventory_api.db.database import serialize_document, to_object_id
from inventory_api.domain.entities import ModelEntity


class ModelsRepository:
    """Repository for model records."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def find(
        self,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[ModelEntity]:
        """
        Find models matching a filter.

        Args:
            query: MongoDB filter document, match-all when omitted
            sort: List of (field, direction) pairs
            limit: Maximum number of results, 0 for no limit
            projection: Fields to return

        Returns:
            List of serialized model documents
        """
        cursor = self.collection.find(query or {}, projection)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return [serialize_document(doc) for doc in cursor]

    def get(self, model_id: str) -> Optional[ModelEntity]:
        """
        Get a model by ID.

        Raises:
            InvalidIdentifierError: If the ID is malformed
        """
        document = self.collection.find_one({"_id": to_object_id(model_id)})
        return serialize_document(document) if document else None

    def insert(self, model: Dict[str, Any]) -> str:
        """Insert a model document and return its new ID."""
        result = self.collection.insert_one(dict(model))
        return str(result.inserted_id)

    def update_owned(self, model_id: str, owner: str, changes: Dict[str, Any]) -> Dict[str, int]:
        """
        Set fields on a model, only if it is still owned by ``owner``.

        Returns:
            Matched and modified counts
        """
        result = self.collection.update_one(
            {"_id": to_object_id(model_id), "createdBy": owner},
            {"$set": changes},
        )
        return {"matched": result.matched_count, "modified": result.modified_count}

    def delete_owned(self, model_id: str, owner: str) -> int:
        """Delete a model owned by ``owner`` and return the deleted count."""
        result = self.collection.delete_one({"_id": to_object_id(model_id), "createdBy": owner})
        return result.deleted_count

    def add_purchaser(self, model_id: str, email: str) -> bool:
        """
        Atomically add ``email`` to the purchaser set and bump the counter.

        The ``$ne`` guard and ``$addToSet`` make the write a no-op when the
        email is already present, so concurrent duplicates cannot double count.

        Returns:
            True if the purchaser was added, False if the model is missing
            or already purchased by ``email``
        """
        result = self.collection.update_one(
            {"_id": to_object_id(model_id), "purchasedBy": {"$ne": email}},
            {"$addToSet": {"purchasedBy": email}, "$inc": {"purchased": 1}},
        )
        return result.modified_count == 1

    def remove_purchaser(self, model_id: str, email: str) -> bool:
        """Undo ``add_purchaser`` for a single email."""
        result = self.collection.update_one(
            {"_id": to_object_id(model_id), "purchasedBy": email},
            {"$pull": {"purchasedBy": email}, "$inc": {"purchased": -1}},
        )
        return result.modified_count == 1

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    def total_purchases(self) -> int:
        """Sum of purchaser-list lengths across all models."""
        pipeline = [
            {"$group": {"_id": None, "total": {"$sum": {"$size": {"$ifNull": ["$purchasedBy", []]}}}}},
        ]
        for row in self.collection.aggregate(pipeline):
            return row["total"]
        return 0
