import logging
from typing import Any, Dict

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.server_api import ServerApi

from inventory_api.config import Settings, get_mongo_uri
from inventory_api.domain.errors import InvalidIdentifierError

logger = logging.getLogger(__name__)

MODELS_COLLECTION = "models"
USERS_COLLECTION = "users"
PURCHASES_COLLECTION = "purchases"


class MongoStore:
    """Process-wide handle on the inventory database and its collections."""

    def __init__(self, client: MongoClient, db_name: str):
        self.client = client
        self.db = client[db_name]

    @property
    def models(self) -> Collection:
        return self.db[MODELS_COLLECTION]

    @property
    def users(self) -> Collection:
        return self.db[USERS_COLLECTION]

    @property
    def purchases(self) -> Collection:
        return self.db[PURCHASES_COLLECTION]

    def ping(self) -> bool:
        """Round-trip to the server; raises PyMongoError when unreachable."""
        self.client.admin.command("ping")
        return True

    def ensure_indexes(self) -> None:
        """Create the indexes the API relies on (idempotent)."""
        self.users.create_index([("email", ASCENDING)], unique=True)
        self.models.create_index([("createdAt", DESCENDING)])
        self.models.create_index([("createdBy", ASCENDING)])
        self.purchases.create_index([("purchasedBy", ASCENDING)])
        logger.info("MongoDB indexes ensured")

    def get_storage_stats(self) -> Dict[str, Any]:
        return {
            "database": self.db.name,
            "models": self.models.count_documents({}),
            "users": self.users.count_documents({}),
            "purchases": self.purchases.count_documents({}),
        }

    def close(self) -> None:
        self.client.close()


def create_store(config: Settings) -> MongoStore:
    """Create the store from settings. The client connects lazily."""
    client = MongoClient(
        get_mongo_uri(config),
        server_api=ServerApi("1"),
        serverSelectionTimeoutMS=config.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        tz_aware=True,
    )
    logger.info(f"MongoDB client created for database '{config.MONGO_DB_NAME}'")
    return MongoStore(client, config.MONGO_DB_NAME)


def to_object_id(value: str) -> ObjectId:
    """Parse a record id, raising InvalidIdentifierError when malformed."""
    if not ObjectId.is_valid(value):
        raise InvalidIdentifierError(f"Invalid id: {value}")
    return ObjectId(value)


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a stored document with its ObjectId rendered as a string."""
    result = dict(document)
    if isinstance(result.get("_id"), ObjectId):
        result["_id"] = str(result["_id"])
    return result
