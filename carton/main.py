"""Carton API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CartonError → structured JSON responses
    - Database and HTTP clients initialized on startup via lifespan, closed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from carton.api.dependencies import close_clients, init_clients
from carton.api.error_handlers import register_error_handlers
from carton.api.routes import components, health, payloads
from carton.config import get_settings
from carton.infrastructure import database
from carton.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_clients(settings)
    logger.info("Carton API started")
    yield
    await close_clients()
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Carton API shutting down")


app = FastAPI(title="Carton API", version="0.1.0", lifespan=lifespan)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(components.router)
app.include_router(payloads.router)

register_error_handlers(app)
