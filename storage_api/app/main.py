"""
Main entrypoint for the Storage API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn storage_api.app.main:app --reload

The MongoDB store is created and connected by the lifespan handler
and closed again on shutdown.  Tests pass their own store to
``create_app``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import MongoStore
from .core.exceptions import AppError, app_error_handler, request_validation_handler, unhandled_error_handler
from .core.logging_config import setup_logging


def create_app(store: Optional[MongoStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[MongoStore]
        Store to serve requests from.  When omitted one is built from
        ``settings.mongo_uri`` and ``settings.db_name``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(
        settings.log_level,
        settings.log_file or None,
        driver_level=settings.mongo_log_level,
        access_log=settings.access_log,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.store = store or MongoStore(settings.mongo_uri, settings.db_name)
        await app.state.store.connect()
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "API is running..."

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
