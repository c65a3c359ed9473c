"""
Payment endpoints.

These routes record storage purchase intents and let an operator
mark them as paid or failed.  No payment provider is contacted; the
UPI link is stored exactly as the client sent it.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status

from storage_api.app.core.db import MongoStore, get_store
from storage_api.app.schemas.payment import PaymentCreate, PaymentRead, PaymentStatusUpdate
from storage_api.app.services.payment_service import PaymentService


router = APIRouter()


def get_payment_service(store: MongoStore = Depends(get_store)) -> PaymentService:
    return PaymentService(store)


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payload: Optional[PaymentCreate] = None,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentRead:
    """Create a payment intent with status ``PENDING``."""
    return await service.create_payment(payload or PaymentCreate())


@router.get("", response_model=List[PaymentRead])
async def list_payments(service: PaymentService = Depends(get_payment_service)) -> List[PaymentRead]:
    return await service.list_payments()


@router.put("/{payment_id}", response_model=PaymentRead)
async def update_payment_status(
    payment_id: str = Path(..., description="Payment ID"),
    payload: Optional[PaymentStatusUpdate] = None,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentRead:
    """Set the payment's status.

    Any string is accepted; ``PENDING``, ``SUCCESS`` and ``FAILED``
    are the values clients are expected to send.
    """
    new_status = payload.status if payload else None
    return await service.update_status(payment_id, new_status)
