"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from access_core.api.error_handlers import register_exception_handlers
from access_core.api.routers import get_api_router
from access_core.core.config import AppSettings, get_settings
from access_core.core.database import session_scope
from access_core.core.logging import configure_logging
from access_core.services.resources import ResourceService


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: D401
    """Register baseline resources so guarded routes have something to match."""

    settings: AppSettings = app.state.settings
    with session_scope() as session:
        ResourceService(session).ensure_baseline_resources(settings.default_resources)

    yield


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Application factory."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Access Core",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)
    app.include_router(get_api_router())
    return app
