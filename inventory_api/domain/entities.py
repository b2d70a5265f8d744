"""Internal domain entities as TypedDicts for type safety at boundaries."""
from __future__ import annotations

from datetime import datetime
from typing import TypedDict


class ModelEntity(TypedDict, total=False):
    _id: str
    name: str
    framework: str
    dataset: str
    description: str
    useCase: str
    image: str
    createdAt: datetime
    createdBy: str
    purchasedBy: list[str]
    purchased: int
    updatedAt: datetime


class UserEntity(TypedDict, total=False):
    _id: str
    email: str
    name: str
    photoURL: str
    role: str
    createdAt: datetime


class PurchaseEntity(TypedDict, total=False):
    _id: str
    modelId: str
    modelName: str
    framework: str
    dataset: str
    createdBy: str
    purchasedBy: str
    purchasedAt: datetime


class RegistrationResult(TypedDict):
    created: bool
    inserted_id: str | None


class PurchaseResult(TypedDict):
    model_id: str
    purchase_id: str
    purchased_by: str


class DashboardStats(TypedDict):
    total_models: int
    total_users: int
    total_downloads: int
