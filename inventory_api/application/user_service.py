"""Service for user registration and public profiles."""
from __future__ import annotations

from typing import Any, Dict

from inventory_api.db.repositories import ModelsRepository, UsersRepository
from inventory_api.domain.entities import RegistrationResult
from inventory_api.domain.errors import NotFoundError, ValidationError
from inventory_api.domain.events import UserRegistered, event_publisher
from inventory_api.domain.specifications import OwnedBy


class UserService:
    """Encapsulates user domain logic."""

    def __init__(self, users: UsersRepository, models: ModelsRepository) -> None:
        self._users = users
        self._models = models

    def register(self, user: Dict[str, Any]) -> RegistrationResult:
        """Store a user once per email; repeats are a no-op."""
        email = (user.get("email") or "").strip().lower()
        if not email:
            raise ValidationError("Email is required")

        result = self._users.register({**user, "email": email})
        if result["created"]:
            event_publisher.publish(UserRegistered(
                event_id="",
                timestamp=None,
                aggregate_id=result["inserted_id"],
                email=email,
            ))
        return result

    def profile(self, email: str) -> Dict[str, Any]:
        """Public view of a user plus the number of models they listed."""
        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise NotFoundError(f"User not found: {email}")
        return {
            "email": user["email"],
            "name": user.get("name"),
            "photoURL": user.get("photoURL"),
            "role": user.get("role", "user"),
            "modelCount": self._models.count(OwnedBy(user["email"]).to_query()),
        }
