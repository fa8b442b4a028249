"""
pytest configuration and fixtures.

Author: PMIS Team
Version: 1.0.0
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pmis.config import Settings
from pmis.api.auth import create_access_token
from pmis.api.main import create_app
from pmis.validation.registry import InMemoryReferenceRegistry
from tests.fixtures import JOHN_DOE


@pytest.fixture
def test_settings():
    """Settings backed by a private in-memory database."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-secret-key-with-enough-length-for-hs256",
        reference_lookup_latency_seconds=0.0,
        log_json=False,
        log_level="WARNING",
    )


@pytest.fixture
def registry():
    """Government registry with the sample records and no delay."""
    return InMemoryReferenceRegistry(latency_seconds=0.0)


@pytest.fixture
async def app(test_settings, registry):
    """Application with an initialized service container."""
    application = create_app(settings=test_settings, reference_lookup=registry)
    container = application.state.container
    await container.initialize()
    yield application
    await container.shutdown()


@pytest.fixture
async def client(app):
    """HTTP client bound to the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


@pytest.fixture
def auth_headers(test_settings):
    """Build bearer headers for a role."""
    def _headers(role: str = "admin", user_id: str = None):
        token = create_access_token(
            user_id or f"{role}-1",
            test_settings,
            role=role,
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers("admin")


@pytest.fixture
def staff_headers(auth_headers):
    return auth_headers("staff")


@pytest.fixture
def visitor_headers(auth_headers):
    return auth_headers("visitor")


@pytest.fixture
async def prisoner(client, admin_headers):
    """A prisoner created through the API."""
    response = await client.post(
        "/api/prisoners", json=JOHN_DOE, headers=admin_headers
    )
    assert response.status_code == 201
    return response.json()
