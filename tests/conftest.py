import pytest
from fastapi.testclient import TestClient

from backend.app.core.config import Settings
from backend.main import create_app
from tests.fakes import (
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    FakeDatabase,
    FakeGridFSBucket,
    FakeMongoClient,
    make_settings,
)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mongo_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest.fixture
def fake_db(mongo_client) -> FakeDatabase:
    return mongo_client["portfolio_test"]


@pytest.fixture
def app(settings, mongo_client):
    return create_app(
        settings,
        client_factory=lambda *args, **kwargs: mongo_client,
        bucket_factory=FakeGridFSBucket,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client) -> dict:
    response = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
