import asyncio
import logging

import pytest
from bson import ObjectId

from storage_api.app.core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from storage_api.app.schemas.payment import PaymentCreate, PaymentStatus
from storage_api.app.schemas.user import UserCreate
from storage_api.app.services.payment_service import PaymentService
from storage_api.app.services.user_service import UserService


async def test_create_or_fetch_persists_once(connected_store):
    service = UserService(connected_store)
    user, created = await service.create_or_fetch(UserCreate(uid="u1", email="a@example.com"))
    again, created_again = await service.create_or_fetch(UserCreate(uid="u1", email="a@example.com"))
    assert created is True
    assert created_again is False
    assert again == user
    assert await connected_store.users.count_documents({"uid": "u1"}) == 1


async def test_duplicate_email_raises_conflict(connected_store):
    service = UserService(connected_store)
    await service.create_or_fetch(UserCreate(uid="u1", email="a@example.com"))
    with pytest.raises(ConflictError) as excinfo:
        await service.create_or_fetch(UserCreate(uid="u2", email="a@example.com"))
    assert isinstance(excinfo.value, PersistenceError)
    assert excinfo.value.status_code == 500
    assert await connected_store.users.count_documents({}) == 1


async def test_adjust_storage_is_additive(connected_store):
    service = UserService(connected_store)
    await service.create_or_fetch(UserCreate(uid="u1", email="a@example.com"))
    await service.adjust_storage("u1", 5)
    await service.adjust_storage("u1", 5)
    user = await service.adjust_storage("u1", -3)
    assert user.storageGB == 7


@pytest.mark.parametrize("delta", ["5", True, None, [1]])
async def test_adjust_storage_rejects_non_numbers(connected_store, delta):
    with pytest.raises(ValidationError):
        await UserService(connected_store).adjust_storage("u1", delta)


async def test_adjust_storage_does_not_create_user(connected_store):
    service = UserService(connected_store)
    with pytest.raises(NotFoundError):
        await service.adjust_storage("ghost", 5)
    assert await connected_store.users.count_documents({}) == 0


async def test_create_payment_defaults(connected_store):
    payment = await PaymentService(connected_store).create_payment(
        PaymentCreate(userId="u1", gb=5, totalPrice=100, upiLink="upi://x")
    )
    assert payment.status == PaymentStatus.PENDING
    assert ObjectId.is_valid(payment.id)
    assert payment.createdAt.tzinfo is not None


async def test_create_payment_zero_gb_is_rejected(connected_store):
    with pytest.raises(ValidationError):
        await PaymentService(connected_store).create_payment(
            PaymentCreate(userId="u1", gb=0, totalPrice=100, upiLink="upi://x")
        )
    assert await connected_store.payments.count_documents({}) == 0


async def test_unknown_status_is_stored_and_logged(connected_store, caplog):
    service = PaymentService(connected_store)
    payment = await service.create_payment(PaymentCreate(userId="u1", gb=5, totalPrice=100, upiLink="upi://x"))
    with caplog.at_level(logging.WARNING, logger="storage_api.app.services.payment_service"):
        updated = await service.update_status(payment.id, "CHARGEBACK")
    assert updated.status == "CHARGEBACK"
    assert "unrecognised status" in caplog.text
    listed = await service.list_payments()
    assert [p.status for p in listed] == ["CHARGEBACK"]


async def test_update_status_unknown_id(connected_store):
    service = PaymentService(connected_store)
    with pytest.raises(NotFoundError):
        await service.update_status(str(ObjectId()), "SUCCESS")
    with pytest.raises(NotFoundError):
        await service.update_status("xyz", "SUCCESS")


async def test_concurrent_storage_adjustments_are_not_lost(connected_store):
    service = UserService(connected_store)
    await service.create_or_fetch(UserCreate(uid="u1", email="a@example.com"))
    await asyncio.gather(*(service.adjust_storage("u1", 1) for _ in range(50)))
    user = await service.get_user("u1")
    assert user.storageGB == 50
