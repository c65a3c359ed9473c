"""
Business logic for users.

Users are created the first time a client signs in and are looked up
by ``uid`` afterwards.  The only mutation is the storage counter,
which is incremented atomically by MongoDB (``$inc``) so concurrent
adjustments for the same user never lose an update.
"""

import logging
import math
from typing import Any, Tuple

from pymongo import ReturnDocument

from ..core.db import MongoStore, translate_errors
from ..core.exceptions import NotFoundError, ValidationError
from ..schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Operations on the ``users`` collection."""

    def __init__(self, store: MongoStore) -> None:
        self.store = store

    async def create_or_fetch(self, data: UserCreate) -> Tuple[UserRead, bool]:
        """Return the user for ``data.uid``, creating it on first contact.

        The second element of the result tells whether the user was
        created by this call.  An existing user is returned unchanged,
        even if ``name`` or ``email`` differ from the stored values.
        A new user whose ``email`` already belongs to someone else is
        rejected by the unique index and surfaces as ``ConflictError``.
        """
        if not data.uid or not data.email:
            raise ValidationError("UID and email are required")
        with translate_errors():
            existing = await self.store.users.find_one({"uid": data.uid})
            if existing:
                return UserRead.model_validate(existing), False
            doc = {"uid": data.uid, "email": data.email, "storageGB": 0}
            if data.name is not None:
                doc["name"] = data.name
            result = await self.store.users.insert_one(doc)
            doc["_id"] = result.inserted_id
        logger.info("Created user %s", data.uid)
        return UserRead.model_validate(doc), True

    async def get_user(self, uid: str) -> UserRead:
        with translate_errors():
            doc = await self.store.users.find_one({"uid": uid})
        if not doc:
            raise NotFoundError("User not found")
        return UserRead.model_validate(doc)

    async def adjust_storage(self, uid: str, delta: Any) -> UserRead:
        """Add ``delta`` GB to the user's storage counter.

        ``delta`` may be negative and no bounds are applied, so the
        counter can drop below zero.  Booleans, NaN and infinities are
        not accepted as numbers.
        """
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise ValidationError("storageGB must be a number")
        if isinstance(delta, float) and not math.isfinite(delta):
            raise ValidationError("storageGB must be a number")
        with translate_errors():
            doc = await self.store.users.find_one_and_update(
                {"uid": uid},
                {"$inc": {"storageGB": delta}},
                return_document=ReturnDocument.AFTER,
            )
        if not doc:
            raise NotFoundError("User not found")
        logger.info("Adjusted storage for user %s by %s GB (now %s)", uid, delta, doc.get("storageGB"))
        return UserRead.model_validate(doc)
