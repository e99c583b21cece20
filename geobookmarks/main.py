"""Geobookmarks API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GeoBookmarksError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, geocoder and bookmark store built on startup via lifespan; the store
      lives on app.state and is handed to routes through a dependency
    - Loaded bookmarks without a cached name are queued for resolution at startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store closed before the engine is disposed: pending resolutions may still write names
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geobookmarks.api.error_handlers import register_error_handlers
from geobookmarks.api.routes import bookmarks, health
from geobookmarks.config import get_settings
from geobookmarks.infrastructure.database import init_db
from geobookmarks.infrastructure.geohash_geometry import PygeohashGeometry
from geobookmarks.infrastructure.nominatim_geocoder import NominatimReverseGeocoder
from geobookmarks.infrastructure.observability import setup_logging
from geobookmarks.infrastructure.preference_store import SqlPreferenceStore
from geobookmarks.services.bookmark_persistence import BookmarkPersistence
from geobookmarks.services.bookmark_store import create_bookmark_store
from geobookmarks.services.name_resolver import NameResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    geocoder = NominatimReverseGeocoder(
        user_agent=settings.nominatim_user_agent,
        domain=settings.nominatim_domain,
        language=settings.geocoder_language,
        timeout_seconds=settings.geocoder_timeout_seconds,
        min_delay_seconds=settings.geocoder_min_delay_seconds,
    )
    store = await create_bookmark_store(
        BookmarkPersistence(SqlPreferenceStore(manager)),
        NameResolver(geocoder, PygeohashGeometry()),
    )
    app.state.bookmark_store = store
    scheduled = store.resolve_missing_names()
    if scheduled:
        logger.info(f"Scheduled name resolution for {scheduled} loaded bookmarks")
    logger.info("Geobookmarks API started")
    yield
    logger.info("Geobookmarks API shutting down")
    await store.close()
    await manager.dispose()


app = FastAPI(
    title="Geobookmarks API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)

register_error_handlers(app)
