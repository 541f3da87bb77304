"""Application factory for the vidshare HTTP API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vidshare.api.dependencies import get_container
from vidshare.api.errors import register_error_handlers
from vidshare.api.routes import auth, comments, users, videos
from vidshare.config.settings import Settings, get_settings
from vidshare.db.migrate import run_migrations
from vidshare.models.api import MessageResponse
from vidshare.services.container import ServiceContainer
from vidshare.utils.log import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When ``container`` is supplied it is used as-is and never closed by the
    app. Otherwise migrations run (if enabled) and a Postgres-backed
    container is created at startup and closed at shutdown.
    """

    settings = settings or (container.settings if container is not None else get_settings())
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if container is not None:
            yield
            return

        if settings.auto_migrate:
            run_migrations(settings=settings)
        app.state.container = ServiceContainer.from_settings(settings)
        logger.info("vidshare API ready (environment=%s)", settings.environment.value)
        try:
            yield
        finally:
            app.state.container.close()

    docs = settings.environment.exposes_docs
    app = FastAPI(
        title="vidshare",
        description="Video sharing backend: accounts, videos, reactions and comments",
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
    )
    if container is not None:
        app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", response_model=MessageResponse)
    def read_root() -> MessageResponse:
        return MessageResponse(message="vidshare backend running")

    @app.get("/health")
    def health(services: ServiceContainer = Depends(get_container)) -> dict:
        try:
            database_ok = services.health_check()
        except Exception as exc:  # noqa: BLE001 - reported in the response body
            logger.warning("Health check failed: %s", exc)
            database_ok = False
        return {"backend": "running", "database": "connected" if database_ok else "unavailable"}

    for router in (auth.router, users.router, videos.router, comments.router):
        app.include_router(router)

    return app


__all__ = ["create_app"]
