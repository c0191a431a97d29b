"""Pytest configuration for builder tests."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

TEST_API_KEY = "test-key"


@pytest.fixture
def sample_parameters():
    return {
        "properties": {
            "to": {"type": "string"},
            "subject": {"type": "string"},
            "priority": {"type": "number", "enum": [1, 2, 3]},
        },
        "required": ["to", "subject"],
    }


@pytest_asyncio.fixture
async def app(tmp_path, monkeypatch):
    """Fresh app (and registry) per test with an initialized audit db."""
    monkeypatch.setenv("API_KEY", TEST_API_KEY)
    monkeypatch.setenv("BUILDER_AUDIT_DB_PATH", str(tmp_path / "audit.db"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://builder.example.com")

    from shared.actions import init_audit_db
    from builder.main import create_app

    await init_audit_db()
    return create_app()


@pytest_asyncio.fixture
async def client(app):
    """Authenticated test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"x-api-key": TEST_API_KEY},
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"x-api-key": TEST_API_KEY}
