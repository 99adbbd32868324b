import os

# Settings are read at import time, so the environment has to be in place
# before anything from shortlist_api is imported.
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["AUTH_RATE_LIMIT"] = "1000/minute"
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from shortlist_api.main import app


@pytest.fixture
def client():
    """
    Test client with a fresh in-memory database.

    Entering the client runs the app lifespan, which creates the tables;
    leaving it disposes the engine, which drops the in-memory database.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register an account and return the response JSON."""
    def _register(email="ada@example.com", password="correct horse", name="Ada"):
        response = client.post(
            "/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    """Authorization header for a freshly registered user."""
    def _auth_headers(email="ada@example.com"):
        token = register(email=email)["token"]["access_token"]
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def create_post(client):
    """Create a post and return the response JSON."""
    def _create_post(title="A", body="B"):
        response = client.post("/v1/posts", json={"title": title, "body": body})
        assert response.status_code == 201, response.text
        return response.json()
    return _create_post
