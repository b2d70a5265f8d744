from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.collection import Collection

from inventory_api.db.database import serialize_document
from inventory_api.domain.entities import PurchaseEntity


class PurchasesRepository:
    """Repository for the append-only purchase ledger."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def insert(self, purchase: Dict[str, Any]) -> str:
        """Record a ledger entry and return its ID."""
        result = self.collection.insert_one(dict(purchase))
        return str(result.inserted_id)

    def list_for(self, email: str) -> List[PurchaseEntity]:
        """Ledger entries for a purchaser, newest first."""
        cursor = self.collection.find({"purchasedBy": email}).sort([("purchasedAt", DESCENDING)])
        return [serialize_document(doc) for doc in cursor]
