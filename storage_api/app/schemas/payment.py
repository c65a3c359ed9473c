"""
Pydantic models for payment data.

A payment records a storage purchase: how many GB, the total price
and the UPI link the client was sent to.  It starts ``PENDING`` and is
moved to another status by an explicit update.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class PaymentCreate(BaseModel):
    """Schema for creating a payment.

    All four fields are required; the check lives in
    ``PaymentService.create_payment``.
    """

    model_config = {"coerce_numbers_to_str": True}

    userId: Optional[str] = Field(None, examples=["Xk3v9QaLm2"], description="uid of the purchasing user")
    gb: Optional[Union[int, float]] = Field(None, examples=[5])
    totalPrice: Optional[Union[int, float]] = Field(None, examples=[100])
    upiLink: Optional[str] = Field(None, examples=["upi://pay?pa=store@upi&am=100"])


class PaymentStatusUpdate(BaseModel):
    model_config = {"coerce_numbers_to_str": True}

    status: Optional[str] = Field(None, examples=["SUCCESS"])


class PaymentRead(BaseModel):
    """Schema for reading a payment."""

    id: str = Field(..., alias="_id")
    userId: str
    gb: Union[int, float]
    totalPrice: Union[int, float]
    upiLink: str
    # Updates are stored as sent, so values outside the enum can appear.
    status: Union[PaymentStatus, str] = PaymentStatus.PENDING
    createdAt: datetime

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("createdAt")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # BSON dates come back naive unless the client is tz aware.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
