"""
Top‑level API router.

When new domains are introduced, add their routers here.
"""

from fastapi import APIRouter

from .endpoints import payments, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(payments.router, prefix="/payments", tags=["payments"])
