"""
User endpoints.

Clients call ``POST /api/users`` after every sign‑in; the first call
for a ``uid`` creates the user and later calls return it unchanged.
``PUT /api/users/{uid}/storage`` adds to the purchased storage.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from storage_api.app.core.db import MongoStore, get_store
from storage_api.app.schemas.user import StorageUpdate, UserCreate, UserEnvelope, UserRead
from storage_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(store: MongoStore = Depends(get_store)) -> UserService:
    return UserService(store)


@router.post(
    "",
    response_model=UserEnvelope,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_201_CREATED: {"model": UserEnvelope, "description": "User created"}},
)
async def create_or_fetch_user(
    response: Response,
    payload: Optional[UserCreate] = None,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Create the user on first sign‑in, otherwise return the stored one.

    Responds ``201`` when the user was created and ``200`` when it
    already existed.
    """
    user, created = await service.create_or_fetch(payload or UserCreate())
    if created:
        response.status_code = status.HTTP_201_CREATED
        return UserEnvelope(message="User created", user=user)
    return UserEnvelope(message="User already exists", user=user)


@router.get("/{uid}", response_model=UserRead)
async def get_user(uid: str, service: UserService = Depends(get_user_service)) -> UserRead:
    return await service.get_user(uid)


@router.put("/{uid}/storage", response_model=UserEnvelope)
async def update_storage(
    uid: str,
    payload: Optional[StorageUpdate] = None,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Increment the user's ``storageGB`` by the given amount.

    The body carries a delta, not the new total: ``{"storageGB": 5}``
    adds five GB and ``{"storageGB": -3}`` removes three.
    """
    delta = payload.storageGB if payload else None
    user = await service.adjust_storage(uid, delta)
    return UserEnvelope(message="Storage updated", user=user)
