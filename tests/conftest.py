"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from authorflow.auth.memory import InMemoryIdentityGateway
from authorflow.config import Backend, Settings, UserTier
from authorflow.main import create_app
from authorflow.models.user import User
from authorflow.services.container import Services
from authorflow.storage.memory import InMemoryProjectStore


def seed_user(
    gateway: InMemoryIdentityGateway,
    email: str,
    tier: UserTier = UserTier.FREE,
    password: str = "pw123456",
) -> tuple[User, dict[str, str]]:
    """Register a user and return it with bearer headers."""
    username = email.split("@")[0]
    user, token = asyncio.run(gateway.register(email, password, username, tier))
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    """Settings for the in-memory backend."""
    return Settings(
        backend=Backend.MEMORY,
        node_env="test",
        api_prefix="/api",
        _env_file=None,
    )


@pytest.fixture
def services() -> Services:
    """Fresh in-memory services for each test."""
    return Services.in_memory()


@pytest.fixture
def gateway(services) -> InMemoryIdentityGateway:
    return services.identity


@pytest.fixture
def store(services) -> InMemoryProjectStore:
    return services.store


@pytest.fixture
def app(settings, services):
    """Create FastAPI app for testing."""
    return create_app(settings, services)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create test client."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# Seeded users for each tier
@pytest.fixture
def free_user(gateway):
    """Free tier user and their headers."""
    return seed_user(gateway, "free@test.com", UserTier.FREE)


@pytest.fixture
def pro_user(gateway):
    """Pro tier user and their headers."""
    return seed_user(gateway, "pro@test.com", UserTier.PRO)


@pytest.fixture
def plus_user(gateway):
    """Plus tier user and their headers."""
    return seed_user(gateway, "plus@test.com", UserTier.PLUS)


@pytest.fixture
def other_user(gateway):
    """A second free tier user."""
    return seed_user(gateway, "other@test.com", UserTier.FREE)


@pytest.fixture
def free_user_headers(free_user):
    return free_user[1]


@pytest.fixture
def invalid_user_headers():
    """Headers with a token the gateway never issued."""
    return {"Authorization": "Bearer not-a-real-token"}


# Sample data fixtures
@pytest.fixture
def sample_project_request():
    """Sample project creation request."""
    return {
        "title": "The Long Winter",
        "type": "novel",
        "description": "A family survives a hard season",
        "genre": "historical",
        "target_audience": "adult",
        "tags": ["family", "survival"],
    }
