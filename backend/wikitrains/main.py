"""WikiTrains API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WikiTrainsError to structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and cache table initialized on startup via lifespan context manager;
      the shared Wikipedia client closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wikitrains.api.dependencies import close_game_services
from wikitrains.api.error_handlers import register_error_handlers
from wikitrains.api.routes import game_socket, health
from wikitrains.config import get_settings
from wikitrains.infrastructure.database import init_db
from wikitrains.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db.create_schema()
    logger.info("WikiTrains API started")
    yield
    await close_game_services()
    await db.dispose()
    logger.info("WikiTrains API shutting down")


app = FastAPI(
    title="WikiTrains API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(game_socket.router)

register_error_handlers(app)
