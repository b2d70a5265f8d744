"""
Test configuration and fixtures for inventory-api tests.
"""
import pytest
import mongomock
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from inventory_api.main import app
from inventory_api.db.database import MongoStore
from inventory_api.db.repositories import ModelsRepository, UsersRepository, PurchasesRepository
from inventory_api.dependencies import get_store, get_token_verifier
from inventory_api.domain.errors import AuthenticationInvalidError
from inventory_api.domain.events import event_publisher

OWNER_EMAIL = "e1@x.com"
OTHER_EMAIL = "e2@x.com"

TOKENS = {
    "token-e1": OWNER_EMAIL,
    "token-e2": OTHER_EMAIL,
}


class FakeTokenVerifier:
    """Token verifier that knows a fixed set of tokens."""

    def __init__(self, tokens):
        self.tokens = dict(tokens)
        self.calls = []

    def verify(self, token: str) -> str:
        self.calls.append(token)
        if token not in self.tokens:
            raise AuthenticationInvalidError("Unauthorized access!")
        return self.tokens[token]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def clean_event_subscribers():
    """Keep domain event subscriptions from leaking between tests."""
    event_publisher.clear_subscribers()
    yield
    event_publisher.clear_subscribers()


@pytest.fixture
def store():
    """In-memory MongoDB store."""
    return MongoStore(mongomock.MongoClient(), "test_inventory")


@pytest.fixture
def models_repo(store):
    return ModelsRepository(store.models)


@pytest.fixture
def users_repo(store):
    return UsersRepository(store.users)


@pytest.fixture
def purchases_repo(store):
    return PurchasesRepository(store.purchases)


@pytest.fixture
def token_verifier():
    return FakeTokenVerifier(TOKENS)


@pytest.fixture
def client(store, token_verifier):
    """Create test client wired to the in-memory store and fake verifier."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_token_verifier] = lambda: token_verifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return bearer("token-e1")


@pytest.fixture
def other_headers():
    return bearer("token-e2")


@pytest.fixture
def sample_model(models_repo):
    """A model owned by OWNER_EMAIL with no purchasers."""
    model_id = models_repo.insert({
        "name": "ResNet Classifier",
        "framework": "TensorFlow",
        "dataset": "ImageNet",
        "description": "Image classifier",
        "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "createdBy": OWNER_EMAIL,
        "purchasedBy": [],
        "purchased": 0,
    })
    return models_repo.get(model_id)


@pytest.fixture
def framework_models(models_repo):
    """Three models whose frameworks differ only in spelling and case."""
    ids = {}
    for day, (key, framework) in enumerate(
        [("A", "TensorFlow"), ("B", "PyTorch"), ("C", "Tensorflow")], start=1
    ):
        ids[key] = models_repo.insert({
            "name": f"Model {key}",
            "framework": framework,
            "dataset": f"Dataset {key}",
            "createdAt": datetime(2024, 1, day, tzinfo=timezone.utc),
            "createdBy": OWNER_EMAIL,
            "purchasedBy": [],
            "purchased": 0,
        })
    return ids
