"""
Lunchbox backend - application entry point
School lunch ordering API for parents: kids, monthly menus and per-date lunch selections

Modules:
- parent accounts and JWT authentication
- kid profiles
- monthly menu and holiday calendar
- lunch selections with the 24-hour modification lock and audit trail
- admin menu/holiday maintenance

Stack: FastAPI + DuckDB + JWT
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .config.logging import configure_logging
from .config.settings import Settings, settings as default_settings
from .core.clock import Clock
from .core.database import DatabaseManager
from .core.error_handler import (
    application_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.exceptions import BaseApplicationError, RepositoryError
from .core.security import SecurityManager
from .repositories import DuckDBLunchRepository
from .schemas.common import HealthResponse
from .services import ServiceContainer

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[DatabaseManager] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """Build the FastAPI application with its own database and service graph"""
    settings = settings or default_settings
    configure_logging(settings)

    db = db or DatabaseManager.from_settings(settings)
    repository = DuckDBLunchRepository(db)
    services = ServiceContainer(
        repository,
        SecurityManager.from_settings(settings),
        clock=clock,
        admin_usernames=settings.admin_username_set,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            db.init_database()
        except RepositoryError as e:
            # the connection is retried lazily on the first request
            logger.error("Database initialization failed: %s", e.message)
        yield
        db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="School lunch ordering API",
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db = db
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        try:
            db.fetch_one("SELECT 1 AS ok")
            return HealthResponse(status="healthy", version=settings.api_version, database="connected")
        except RepositoryError as e:
            return HealthResponse(status="unhealthy", version=settings.api_version, database=f"error: {e.message}")

    @app.get("/")
    def root():
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "description": "School lunch ordering API"
        }

    return app


# ASGI entry point: uvicorn lunchbox.app:app
app = create_app()
