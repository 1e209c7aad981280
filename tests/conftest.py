"""Configuration pytest / pytest configuration.

Base SQLite temporaire et rate limiting desactive avant l'import de l'application.
Temporary SQLite database and disabled rate limiting before the app is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="fuellog-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "true"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from fuellog.database import drop_db, engine, init_db  # noqa: E402
from fuellog.main import app  # noqa: E402


@pytest.fixture
async def client():
    await init_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await drop_db()
    await engine.dispose()


@pytest.fixture
def make_user(client):
    """Inscrire un utilisateur, renvoie ses headers / Register a user, return auth headers."""

    async def _make(email="driver@example.com", password="secret-pass"):
        resp = await client.post("/api/auth/register", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['accessToken']}"}

    return _make


@pytest.fixture
async def auth_headers(make_user):
    return await make_user()


@pytest.fixture
async def vehicle_id(client, auth_headers):
    resp = await client.post(
        "/api/vehicles/",
        json={"name": "Civic", "make": "Honda", "year": 2018, "expectedMpg": 30},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]
