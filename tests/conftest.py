"""
Shared pytest fixtures for Trapline tests.

Provides a fresh SQLite database per test, HTTP clients signed in as two
different trappers, and helpers to create records through the API.
"""

import os
import tempfile

import pytest

# Set test environment variables before importing app
_TMP_DIR = tempfile.mkdtemp(prefix="trapline-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["TRAPLINE_CONFIG_PATH"] = os.path.join(_TMP_DIR, "config.json")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")

from fastapi.testclient import TestClient  # noqa: E402

from database import Base, engine  # noqa: E402
from main import app  # noqa: E402

PASSWORD = "beaver-dam-42"


@pytest.fixture(autouse=True)
def fresh_db():
    """Recreate all tables around every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def signup(client: TestClient, email: str, password: str = PASSWORD):
    response = client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest.fixture
def client():
    """Client without a session."""
    return TestClient(app)


@pytest.fixture
def trapper():
    """Client signed in as the first trapper."""
    c = TestClient(app)
    c.user = signup(c, "trapper@example.com")
    return c


@pytest.fixture
def other_trapper():
    """Client signed in as a second, unrelated trapper."""
    c = TestClient(app)
    c.user = signup(c, "neighbour@example.com")
    return c


def create_area(c: TestClient, name: str = "Mud Lake Line", **fields):
    payload = {
        "name": name,
        "district": "Algonquin",
        "area_type": "Registered Line",
        "license_number": "T-123456",
    }
    payload.update(fields)
    response = c.post("/api/areas", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["area"]


def create_gear(c: TestClient, model: str = "Belisle 330", quantity=12, **fields):
    payload = {
        "category": "Body Grip (e.g., 110, 220, 330)",
        "model": model,
        "total_quantity": quantity,
    }
    payload.update(fields)
    response = c.post("/api/inventory", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["item"]


def deploy(c: TestClient, area_id: str, gear_id: str, latitude=45.3, longitude=-75.4):
    response = c.post(
        "/api/deployments",
        json={
            "operating_area_id": area_id,
            "trap_inventory_id": gear_id,
            "clicked": {"latitude": latitude, "longitude": longitude},
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["deployment"]
