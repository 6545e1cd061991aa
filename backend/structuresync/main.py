"""StructureSync API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map StructureSyncError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan; seed file imported only into an empty store

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from structuresync import __version__
import structuresync.infrastructure.database as database
from structuresync.infrastructure.observability import setup_logging
from structuresync.config import get_settings
from structuresync.api.error_handlers import register_error_handlers
from structuresync.api.routes import categories, health, multi_category, schema_import
from structuresync.services.schema_service import seed_if_empty

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
    if settings.schema_seed_file:
        async with database.db_manager.session() as db:
            await seed_if_empty(db, settings.schema_seed_file)
    logger.info("StructureSync API started")
    yield
    logger.info("StructureSync API shutting down")
    await database.db_manager.dispose()


app = FastAPI(
    title="StructureSync API", version=__version__, lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(categories.router)
app.include_router(multi_category.router)
app.include_router(schema_import.router)

register_error_handlers(app)
