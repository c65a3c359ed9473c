"""
Pydantic models for user data.

A user is keyed by ``uid``, the identifier issued by the external
sign‑in provider.  ``storageGB`` is the purchased storage counter; it
starts at zero and is only ever changed by increments.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Payload sent on every sign‑in.  ``uid`` and ``email`` are required."""

    # Sign‑in providers sometimes send numeric ids; store them as strings.
    model_config = {"coerce_numbers_to_str": True}

    uid: Optional[str] = Field(None, examples=["Xk3v9QaLm2"])
    name: Optional[str] = Field(None, examples=["Asha Rao"])
    email: Optional[str] = Field(None, examples=["asha@example.com"])


class StorageUpdate(BaseModel):
    # Left untyped so that strings and booleans reach the service and
    # are rejected with the documented message.
    storageGB: Any = Field(None, examples=[5])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str = Field(..., alias="_id")
    uid: str
    name: Optional[str] = None
    email: str
    # Returned as stored: an integer counter stays an integer.
    storageGB: Union[int, float] = 0

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)


class UserEnvelope(BaseModel):
    message: str
    user: UserRead
