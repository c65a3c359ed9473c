"""
Business logic for payments.

Payments are purchase intents for additional storage.  The UPI link
is stored as given; nothing here talks to the payment rail, so the
status only changes when a client sets it explicitly.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument

from ..core.db import MongoStore, translate_errors
from ..core.exceptions import NotFoundError, ValidationError
from ..schemas.payment import PaymentCreate, PaymentRead, PaymentStatus

logger = logging.getLogger(__name__)

_KNOWN_STATUSES = {s.value for s in PaymentStatus}


class PaymentService:
    """Operations on the ``payments`` collection."""

    def __init__(self, store: MongoStore) -> None:
        self.store = store

    async def create_payment(self, data: PaymentCreate) -> PaymentRead:
        """Store a new ``PENDING`` payment.

        Every field must be present and truthy, which means ``gb`` or
        ``totalPrice`` of ``0`` is rejected along with missing values.
        """
        if not data.userId or not data.gb or not data.totalPrice or not data.upiLink:
            raise ValidationError("Missing required fields")
        doc = {
            "userId": data.userId,
            "gb": data.gb,
            "totalPrice": data.totalPrice,
            "upiLink": data.upiLink,
            "status": PaymentStatus.PENDING.value,
            "createdAt": datetime.now(timezone.utc),
        }
        with translate_errors():
            result = await self.store.payments.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created payment %s for user %s (%s GB)", result.inserted_id, data.userId, data.gb)
        return PaymentRead.model_validate(doc)

    async def list_payments(self) -> List[PaymentRead]:
        """Return every payment in the collection's natural order."""
        with translate_errors():
            docs = await self.store.payments.find().to_list(length=None)
        return [PaymentRead.model_validate(doc) for doc in docs]

    async def update_status(self, payment_id: str, status: Optional[str]) -> PaymentRead:
        """Set the payment's status to ``status`` as given.

        Values outside ``PaymentStatus`` are accepted and stored (a
        warning is logged).  When ``status`` is omitted the record is
        returned unchanged.  An identifier that is not a valid
        ObjectId cannot match any payment and is reported as not
        found.
        """
        try:
            oid = ObjectId(payment_id)
        except (InvalidId, TypeError):
            raise NotFoundError("Payment not found")
        with translate_errors():
            if status is None:
                doc = await self.store.payments.find_one({"_id": oid})
            else:
                if status not in _KNOWN_STATUSES:
                    logger.warning("Payment %s set to unrecognised status %r", payment_id, status)
                doc = await self.store.payments.find_one_and_update(
                    {"_id": oid},
                    {"$set": {"status": status}},
                    return_document=ReturnDocument.AFTER,
                )
        if not doc:
            raise NotFoundError("Payment not found")
        if status is not None:
            logger.info("Payment %s status set to %s", payment_id, status)
        return PaymentRead.model_validate(doc)
