"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.router import api_router
from app.config import Settings, get_settings
from app.db.engine import Database
from app.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the app around an explicitly constructed Database.

    Tests pass their own in-memory ``database``; otherwise one is created
    from ``settings.database_url`` and disposed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    owns_database = database is None
    database = database or Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.create_all()
        logger.info("Database ready at %s", database.url)
        yield
        if owns_database:
            await database.dispose()

    app = FastAPI(
        title="Building Reviews",
        description="Apartment building reviews with moderated submissions and aggregated ratings.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app
