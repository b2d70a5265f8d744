from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pymongo.collection import Collection

from inventory_api.db.database import serialize_document
from inventory_api.domain.entities import RegistrationResult, UserEntity


class UsersRepository:
    """Repository for user records, keyed by email."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def register(self, user: Dict[str, Any]) -> RegistrationResult:
        """
        Store a user unless one with the same email exists.

        Uses an upsert with ``$setOnInsert`` so concurrent registrations of
        the same email still produce a single record.
        """
        fields = {key: value for key, value in user.items() if key != "email"}
        fields.setdefault("createdAt", datetime.now(timezone.utc))
        result = self.collection.update_one(
            {"email": user["email"]},
            {"$setOnInsert": fields},
            upsert=True,
        )
        if result.upserted_id is None:
            return RegistrationResult(created=False, inserted_id=None)
        return RegistrationResult(created=True, inserted_id=str(result.upserted_id))

    def get_by_email(self, email: str) -> Optional[UserEntity]:
        document = self.collection.find_one({"email": email})
        return serialize_document(document) if document else None

    def count(self) -> int:
        return self.collection.count_documents({})
