"""Service for dashboard aggregates."""
from __future__ import annotations

from inventory_api.db.repositories import ModelsRepository, UsersRepository
from inventory_api.domain.entities import DashboardStats


class DashboardService:
    """Recomputes inventory totals from the store on every call."""

    def __init__(self, models: ModelsRepository, users: UsersRepository) -> None:
        self._models = models
        self._users = users

    def stats(self) -> DashboardStats:
        return DashboardStats(
            total_models=self._models.count(),
            total_users=self._users.count(),
            total_downloads=self._models.total_purchases(),
        )
