"""Driver Log API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DriverLogError -> structured JSON responses
    - Database initialized and schema created on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event
    - HTML rendering and static assets are served elsewhere; this app is JSON + CSV only
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from driverlog.api.error_handlers import register_error_handlers
from driverlog.api.routes import admin, health, logs
from driverlog.config import get_settings
from driverlog.infrastructure import database
from driverlog.infrastructure.http_middleware import register_middleware
from driverlog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(settings.resolved_database_url)
    await manager.create_schema()
    logger.info("Driver log API started")
    yield
    await manager.dispose()
    logger.info("Driver log API shutting down")


app = FastAPI(title="Driver Log API", version="1.0.0", lifespan=lifespan)

register_middleware(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(logs.router)
app.include_router(admin.router)

register_error_handlers(app)
