"""
FastAPI application factory + lifespan.

- Export API under ``/api/v1/exports``.
- Staged files served under ``/storage``.
- Engines disposed on shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from resource_export import __version__
from resource_export.api.storage import router as storage_router
from resource_export.api.v1 import api_router
from resource_export.core.config import configure_logging, settings
from resource_export.core.database import db_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: configure logging.
    Shutdown: dispose DB engines.
    """
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")

    yield

    db_manager.close()
    logger.info("DB engines disposed")


def create_fastapi_app() -> FastAPI:
    """Application factory for FastAPI."""
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Export admin resources to xlsx",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    app.include_router(api_router)
    app.include_router(storage_router)

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": __version__,
            "status": "running",
            "docs": "/api/docs" if settings.DEBUG else "disabled",
        }

    return app


# Module-level instance for ``uvicorn resource_export.main:app``
app = create_fastapi_app()
