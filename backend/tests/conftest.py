"""
Pytest configuration and fixtures for the Element Variants backend.

API tests run against the real FastAPI app with the repository
dependencies swapped for in-memory fakes, so no PostgreSQL is needed.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from fastapi.testclient import TestClient

from api.dependencies import (
    get_condition_repository,
    get_element_repository,
    get_variant_repository,
    get_website_repository,
)
from middleware.jwt_session import create_access_token
from fakes import (
    OTHER_USER_ID,
    OWNER_ID,
    FakeConditionRepository,
    FakeElementRepository,
    FakeVariantRepository,
    FakeWebsiteRepository,
    InMemoryStore,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def app(store):
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_website_repository] = lambda: FakeWebsiteRepository(store)
    fastapi_app.dependency_overrides[get_element_repository] = lambda: FakeElementRepository(store)
    fastapi_app.dependency_overrides[get_variant_repository] = lambda: FakeVariantRepository(store)
    fastapi_app.dependency_overrides[get_condition_repository] = lambda: FakeConditionRepository(store)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def make_token(user_id: str) -> str:
    user = SimpleNamespace(user_id=user_id, email=f"{user_id[:8]}@example.com", name="Owner")
    return create_access_token(user)


@pytest.fixture
def owner_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(OWNER_ID)}"}


@pytest.fixture
def other_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(OTHER_USER_ID)}"}
