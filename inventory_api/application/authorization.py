"""Ownership and field-protection rules for model records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from inventory_api.domain.errors import AuthorizationError, ValidationError

# Set only by the server or the purchase workflow, never by an update payload
PROTECTED_MODEL_FIELDS = frozenset({
    "_id",
    "id",
    "createdBy",
    "purchasedBy",
    "purchased",
    "createdAt",
    "updatedAt",
})


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity established from a verified bearer token."""
    email: str


def require_owner(model: Mapping[str, Any], caller: AuthenticatedUser) -> None:
    """Raise AuthorizationError unless ``caller`` created ``model``."""
    if model.get("createdBy") != caller.email:
        raise AuthorizationError("Forbidden: you are not the owner of this model")


def strip_protected_fields(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop protected keys from an update payload.

    Raises:
        ValidationError: If a key is not a plain field name, or no updatable
            field remains
    """
    for key in changes:
        if key.startswith("$") or "." in key:
            raise ValidationError(f"Invalid field name: {key}")
    allowed = {key: value for key, value in changes.items() if key not in PROTECTED_MODEL_FIELDS}
    if not allowed:
        raise ValidationError("No updatable fields supplied")
    return allowed
