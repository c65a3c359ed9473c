import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storage_api.app.core.db import MongoStore
from storage_api.app.main import create_app


@pytest.fixture
def store():
    return MongoStore("mongodb://localhost:27017", "storage_api_test", client=AsyncMongoMockClient())


@pytest.fixture
async def connected_store(store):
    await store.connect()
    yield store
    store.close()


@pytest.fixture
def client(store):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    def _make_user(uid="u1", email="u1@example.com", name="User One"):
        response = client.post("/api/users", json={"uid": uid, "email": email, "name": name})
        assert response.status_code in (200, 201)
        return response.json()["user"]

    return _make_user


@pytest.fixture
def payment_payload():
    return {"userId": "u1", "gb": 5, "totalPrice": 100, "upiLink": "upi://x"}
