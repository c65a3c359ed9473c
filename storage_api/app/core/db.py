"""
MongoDB integration.

``MongoStore`` wraps a single motor client shared by every request
handler.  It is constructed explicitly and has an explicit lifecycle:
``connect`` is called from the application lifespan on startup and
``close`` on shutdown.  Services receive the store through the
``get_store`` dependency instead of reaching for a module‑level
handle.

On connect the unique indexes for ``users.uid`` and ``users.email``
are created, so uniqueness is enforced by MongoDB itself rather than
by look‑ups in application code.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from bson.errors import InvalidDocument
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from .exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
PAYMENTS_COLLECTION = "payments"


class MongoStore:
    """Owns the MongoDB client and hands out collection handles.

    A pre‑built client may be injected (tests pass an in‑memory one);
    otherwise ``connect`` creates an ``AsyncIOMotorClient`` from
    ``uri``.
    """

    def __init__(self, uri: str, db_name: str, client: Optional[Any] = None) -> None:
        self.uri = uri
        self.db_name = db_name
        self._client = client
        # Only clients created here are closed here.
        self._owns_client = client is None
        self._db = None

    async def connect(self) -> None:
        if self._db is not None:
            return
        try:
            if self._client is None:
                self._client = AsyncIOMotorClient(self.uri)
                self._owns_client = True
            self._db = self._client[self.db_name]
            await self._db[USERS_COLLECTION].create_index([("uid", ASCENDING)], unique=True)
            await self._db[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True)
        except PyMongoError as e:
            logger.error("MongoDB connection failed: %s", e)
            self._db = None
            raise PersistenceError(str(e)) from e
        logger.info("MongoDB connected (database %s)", self.db_name)

    def close(self) -> None:
        if self._db is None:
            return
        self._db = None
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        logger.info("MongoDB connection closed")

    @property
    def connected(self) -> bool:
        return self._db is not None

    def _collection(self, name: str):
        if self._db is None:
            raise RuntimeError("MongoStore.connect() must be called before use")
        return self._db[name]

    @property
    def users(self):
        return self._collection(USERS_COLLECTION)

    @property
    def payments(self):
        return self._collection(PAYMENTS_COLLECTION)


def get_store(request: Request) -> MongoStore:
    """FastAPI dependency returning the store attached at startup."""
    return request.app.state.store


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re‑raise driver and encoding errors as ``PersistenceError`` with their message."""
    try:
        yield
    except DuplicateKeyError as e:
        logger.error("Unique index violation: %s", e)
        raise ConflictError(str(e)) from e
    except PyMongoError as e:
        logger.error("MongoDB operation failed: %s", e)
        raise PersistenceError(str(e)) from e
    except (InvalidDocument, OverflowError) as e:
        # Raised by the BSON encoder before anything reaches the server.
        logger.error("Document could not be encoded: %s", e)
        raise PersistenceError(str(e)) from e
