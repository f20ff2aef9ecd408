"""
Shared fixtures: an application bound to a temporary cars file.
"""
import os

TEST_SECRET = "test-secret-key-for-the-car-api-suite"

# Importing car_api.main builds the module-level app, which needs a secret.
os.environ.setdefault("JWT_SECRET", TEST_SECRET)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from car_api.config import Settings  # noqa: E402
from car_api.main import create_app  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret=TEST_SECRET,
        cars_file=str(tmp_path / "cars.json"),
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login(client):
    """Register (if needed) and log in; returns the Authorization header."""

    def _login(username="alice", password="pw1"):
        body = {"username": username, "password": password}
        client.post("/auth/register", json=body)
        token = client.post("/auth/login", json=body).json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
def auth_headers(login):
    return login()
