import pytest
from bson.errors import InvalidDocument
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from storage_api.app.core.db import MongoStore
from storage_api.app.core.exceptions import PersistenceError
from storage_api.app.main import create_app
from storage_api.app.services.user_service import UserService


class FailingUsers:
    """Collection stand‑in whose every call raises ``error``."""

    def __init__(self, error):
        self.error = error

    async def find_one(self, *args, **kwargs):
        raise self.error

    async def insert_one(self, *args, **kwargs):
        raise self.error

    async def find_one_and_update(self, *args, **kwargs):
        raise self.error


class FailingUsersStore(MongoStore):
    def __init__(self, error):
        super().__init__("mongodb://localhost:27017", "storage_api_test", client=AsyncMongoMockClient())
        self.error = error

    @property
    def users(self):
        return FailingUsers(self.error)


@pytest.mark.parametrize(
    "error",
    [
        OverflowError("MongoDB can only handle up to 8-byte ints"),
        InvalidDocument("cannot encode object: <object>"),
    ],
)
async def test_encoding_errors_become_persistence_errors(error):
    store = FailingUsersStore(error)
    await store.connect()
    with pytest.raises(PersistenceError) as excinfo:
        await UserService(store).adjust_storage("u1", 10**20)
    assert excinfo.value.message == str(error)


def test_encoding_error_is_rendered_as_json():
    app = create_app(store=FailingUsersStore(OverflowError("MongoDB can only handle up to 8-byte ints")))
    with TestClient(app) as client:
        response = client.put("/api/users/u1/storage", json={"storageGB": 10**20})
    assert response.status_code == 500
    assert response.json() == {"error": "MongoDB can only handle up to 8-byte ints"}


def test_unexpected_error_is_rendered_as_json():
    app = create_app(store=FailingUsersStore(RuntimeError("store went away")))
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/users/u1")
    assert response.status_code == 500
    assert response.json() == {"error": "store went away"}
