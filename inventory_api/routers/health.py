"""
Health check endpoints for the API.
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError
from typing import Dict, Any
from datetime import datetime, timezone

from inventory_api.config import settings
from inventory_api.db.database import MongoStore
from inventory_api.dependencies import get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness text."""
    return "AI Inventory Project Server Running"


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


@router.get("/health/storage")
def storage_health(store: MongoStore = Depends(get_store)) -> Dict[str, Any]:
    """
    Check MongoDB connectivity and report collection sizes.
    """
    try:
        store.ping()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **store.get_storage_stats(),
        }
    except PyMongoError as e:
        logger.warning(f"Storage health check failed: {e}")
        return {
            "status": "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": "Database unreachable",
        }
