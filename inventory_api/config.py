import base64
import binascii
import json
from pathlib import Path
from typing import List
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings

# Get the repository root directory (parent of inventory_api directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

GOOGLE_SECURETOKEN_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
)


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    API_RELOAD: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # MongoDB settings
    MONGO_URI: str = ""
    MONGO_USER: str = ""
    MONGO_PASS: str = ""
    MONGO_HOST: str = ""
    MONGO_DB_NAME: str = "ai_model_inventory_manager"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Firebase identity settings
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_SERVICE_KEY: str = ""  # base64 encoded service account JSON
    FIREBASE_JWKS_URL: str = GOOGLE_SECURETOKEN_JWKS_URL
    JWKS_CACHE_TTL_HOURS: int = 6
    JWKS_MIN_REFRESH_SECONDS: int = 300

    # Listing settings
    RECENT_MODELS_LIMIT: int = 6

    class Config:
        env_file = ".env"


def get_mongo_uri(config: Settings) -> str:
    """Resolve the MongoDB connection string.

    An explicit MONGO_URI wins. Otherwise an Atlas SRV URI is assembled from
    MONGO_USER/MONGO_PASS/MONGO_HOST, falling back to a local server.
    """
    if config.MONGO_URI:
        return config.MONGO_URI
    if config.MONGO_USER and config.MONGO_PASS and config.MONGO_HOST:
        user = quote_plus(config.MONGO_USER)
        password = quote_plus(config.MONGO_PASS)
        return f"mongodb+srv://{user}:{password}@{config.MONGO_HOST}/?retryWrites=true&w=majority"
    return "mongodb://localhost:27017"


def get_firebase_project_id(config: Settings) -> str:
    """Resolve the Firebase project id used as token audience.

    Reads FIREBASE_PROJECT_ID, or the ``project_id`` of the base64 encoded
    service account in FIREBASE_SERVICE_KEY.

    Raises:
        ValueError: If neither setting yields a project id
    """
    if config.FIREBASE_PROJECT_ID:
        return config.FIREBASE_PROJECT_ID
    if config.FIREBASE_SERVICE_KEY:
        try:
            decoded = base64.b64decode(config.FIREBASE_SERVICE_KEY).decode("utf-8")
            service_account = json.loads(decoded)
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError("FIREBASE_SERVICE_KEY is not base64 encoded JSON") from exc
        project_id = service_account.get("project_id")
        if project_id:
            return project_id
    raise ValueError("Firebase project id is not configured")


settings = Settings()
