"""Bookmarks API — REST mutation endpoints and an SSE stream of store snapshots.

Invariants:
    - Mutations return the list view as committed by that call
    - Invalid input (nothing bookmarkable after normalization, or > 12 chars) → 400
    - DELETE of a key that is not bookmarked is a no-op, not a 404
    - Listing bookmarks schedules resolution for entries still lacking a name
    - The store comes from app.state (set in lifespan); tests override get_bookmark_store

Design Decisions:
    - /stream declared before /{geohash} so the literal path wins
    - SSE headers prevent proxy/browser buffering of streamed events
    - The snapshot subscription is closed with the response, not left to async-generator GC
"""

import asyncio
import json
import logging
from contextlib import aclosing

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse

from geobookmarks.core.errors import ErrorContext, InvalidGeohashError
from geobookmarks.core.geohash_keys import is_valid_geohash, normalize_geohash
from geobookmarks.schemas.bookmark import (
    BookmarkCreate, BookmarkListResponse, BookmarkStatus, BookmarkView,
)
from geobookmarks.services.bookmark_store import BookmarkStore, BookmarksSnapshot

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/bookmarks", tags=["bookmarks"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def get_bookmark_store(request: Request) -> BookmarkStore:
    """FastAPI dependency for the application's bookmark store."""
    store = getattr(request.app.state, "bookmark_store", None)
    if store is None:
        raise RuntimeError("Bookmark store not initialized")
    return store


def _require_valid(raw: str) -> str:
    key = normalize_geohash(raw)
    if not is_valid_geohash(key):
        raise InvalidGeohashError(
            raw, context=ErrorContext(geohash=key or None),
        )
    return key


def _list_view(snapshot: BookmarksSnapshot) -> BookmarkListResponse:
    return BookmarkListResponse(
        bookmarks=[
            BookmarkView.build(key, snapshot.names.get(key))
            for key in snapshot.bookmarks
        ],
    )


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(store: BookmarkStore = Depends(get_bookmark_store)):
    """List bookmarks, most recent first, with resolved names where available."""
    scheduled = store.resolve_missing_names()
    if scheduled:
        logger.info(f"Scheduled name resolution for {scheduled} bookmarks")
    return _list_view(store.snapshot)


@router.post(
    "", response_model=BookmarkListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_bookmark(
    body: BookmarkCreate, store: BookmarkStore = Depends(get_bookmark_store),
):
    """Bookmark a geohash. Adding an existing bookmark changes nothing."""
    key = _require_valid(body.geohash)
    await store.add(key)
    return _list_view(store.snapshot)


@router.delete("", response_model=BookmarkListResponse)
async def clear_bookmarks(store: BookmarkStore = Depends(get_bookmark_store)):
    """Remove every bookmark and cached name."""
    await store.clear_all()
    return _list_view(store.snapshot)


@router.get("/stream")
async def stream_bookmarks(store: BookmarkStore = Depends(get_bookmark_store)):
    """SSE stream — current snapshot first, then one event per committed mutation."""

    async def event_generator():
        try:
            async with aclosing(store.snapshots()) as stream:
                async for snapshot in stream:
                    yield _sse_line({
                        "type": "snapshot",
                        "data": _list_view(snapshot).model_dump(mode="json"),
                    })
        except asyncio.CancelledError:
            logger.info("Client disconnected from bookmark stream")
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


@router.get("/{geohash}", response_model=BookmarkStatus)
async def get_bookmark_status(
    geohash: str, store: BookmarkStore = Depends(get_bookmark_store),
):
    key = normalize_geohash(geohash)
    return BookmarkStatus(geohash=key, bookmarked=store.is_bookmarked(key))


@router.delete("/{geohash}", response_model=BookmarkListResponse)
async def remove_bookmark(
    geohash: str, store: BookmarkStore = Depends(get_bookmark_store),
):
    await store.remove(geohash)
    return _list_view(store.snapshot)


@router.post("/{geohash}/toggle", response_model=BookmarkListResponse)
async def toggle_bookmark(
    geohash: str, store: BookmarkStore = Depends(get_bookmark_store),
):
    key = _require_valid(geohash)
    await store.toggle(key)
    return _list_view(store.snapshot)
