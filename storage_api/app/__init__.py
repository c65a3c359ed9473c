"""
Application package initializer.

The service is organised by layer: ``core`` holds configuration,
logging, error types and the MongoDB store; ``schemas`` defines the
request and response models; ``services`` contains the per‑domain
operations; ``api`` exposes one router per domain (users, payments).
"""

from .main import app  # noqa: F401
