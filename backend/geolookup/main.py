"""GeoLookup API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GeoLookupError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geolookup.api.error_handlers import register_error_handlers
from geolookup.infrastructure.database import init_db, close_db
from geolookup.infrastructure.observability import setup_logging
from geolookup.config import get_settings
from geolookup.api.routes import health, roads, directory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("GeoLookup API started")
    yield
    await close_db()
    logger.info("GeoLookup API shutting down")


app = FastAPI(
    title="GeoLookup API", version="1.0.0", lifespan=lifespan,
)

# CORS: origins from settings, GET-only API
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(roads.router)
app.include_router(directory.router)

register_error_handlers(app)
