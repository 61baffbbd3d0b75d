"""Priceboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PriceboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The shared PriceBoard is closed on shutdown via the lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from priceboard.infrastructure.observability import setup_logging
from priceboard.config import get_settings
from priceboard.api.dependencies import close_board
from priceboard.api.error_handlers import register_error_handlers
from priceboard.api.routes import cards, health, selection, sets

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "Priceboard API started",
        extra={"url": settings.catalog_base_url},
    )
    yield
    await close_board()
    logger.info("Priceboard API shutting down")


app = FastAPI(
    title="Priceboard API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(sets.router)
app.include_router(selection.router)
app.include_router(cards.router)

register_error_handlers(app)
