from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory_api.config import settings, get_firebase_project_id
from inventory_api.db.database import MongoStore
from inventory_api.db.repositories import ModelsRepository, PurchasesRepository, UsersRepository
from inventory_api.domain.errors import AuthenticationInvalidError, AuthenticationMissingError
from inventory_api.domain.ports import TokenVerifierPort
from inventory_api.infrastructure.token_verifier import FirebaseTokenVerifier
from inventory_api.application.authorization import AuthenticatedUser
from inventory_api.application.model_service import ModelService
from inventory_api.application.purchase_service import PurchaseService
from inventory_api.application.user_service import UserService
from inventory_api.application.dashboard_service import DashboardService

bearer_scheme = HTTPBearer(auto_error=False, description="Firebase ID token")


def get_store(request: Request) -> MongoStore:
    """The store created once at startup."""
    return request.app.state.store


def get_token_verifier(request: Request) -> TokenVerifierPort:
    verifier = getattr(request.app.state, "token_verifier", None)
    if verifier is None:
        verifier = FirebaseTokenVerifier(
            project_id=get_firebase_project_id(settings),
            jwks_url=settings.FIREBASE_JWKS_URL,
            cache_ttl_hours=settings.JWKS_CACHE_TTL_HOURS,
            min_refresh_seconds=settings.JWKS_MIN_REFRESH_SECONDS,
        )
        # Keep one instance so the JWKS cache survives across requests
        request.app.state.token_verifier = verifier
    return verifier


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifierPort = Depends(get_token_verifier),
) -> AuthenticatedUser:
    """Identity of the caller, taken only from a verified bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationMissingError("Token not found!")
    if credentials.scheme.lower() != "bearer":
        raise AuthenticationInvalidError("Unauthorized access!")
    email = verifier.verify(credentials.credentials)
    return AuthenticatedUser(email=email.strip().lower())


def get_models_repository(store: MongoStore = Depends(get_store)) -> ModelsRepository:
    return ModelsRepository(store.models)


def get_users_repository(store: MongoStore = Depends(get_store)) -> UsersRepository:
    return UsersRepository(store.users)


def get_purchases_repository(store: MongoStore = Depends(get_store)) -> PurchasesRepository:
    return PurchasesRepository(store.purchases)


def get_model_service(models: ModelsRepository = Depends(get_models_repository)) -> ModelService:
    return ModelService(models=models, recent_limit=settings.RECENT_MODELS_LIMIT)


def get_purchase_service(
    models: ModelsRepository = Depends(get_models_repository),
    purchases: PurchasesRepository = Depends(get_purchases_repository),
) -> PurchaseService:
    return PurchaseService(models=models, purchases=purchases)


def get_user_service(
    users: UsersRepository = Depends(get_users_repository),
    models: ModelsRepository = Depends(get_models_repository),
) -> UserService:
    return UserService(users=users, models=models)


def get_dashboard_service(
    models: ModelsRepository = Depends(get_models_repository),
    users: UsersRepository = Depends(get_users_repository),
) -> DashboardService:
    return DashboardService(models=models, users=users)
