"""Bookmark Persistence — reads and writes the two bookmark blobs through a PreferenceStore.

Invariants:
    - Each blob loads independently: a corrupt names blob never empties the bookmark list
    - Load failures are logged and that blob starts empty
    - Write failures are logged and swallowed — the in-memory store stays authoritative
    - No retry on failure

Design Decisions:
    - Encoding lives in core/bookmark_codec.py (pure); this class only does IO + error policy
    - erase() removes both keys in one call so a clear never leaves half the state behind
"""

import logging

from geobookmarks.core.bookmark_codec import (
    BOOKMARKS_STORE_KEY, NAMES_STORE_KEY,
    decode_bookmarks, decode_names, encode_bookmarks, encode_names,
)
from geobookmarks.core.domain_types import GeohashKey
from geobookmarks.core.repository_protocols import PreferenceStore

logger = logging.getLogger(__name__)


class BookmarkPersistence:
    """Ordered bookmark list and name map, persisted as JSON blobs."""

    def __init__(self, preferences: PreferenceStore):
        self._preferences = preferences

    async def load_bookmarks(self) -> list[GeohashKey]:
        try:
            blob = await self._preferences.get(BOOKMARKS_STORE_KEY)
            if not blob:
                return []
            return decode_bookmarks(blob)
        except Exception as e:
            logger.error(f"Failed to load bookmarks: {e}")
            return []

    async def load_names(self) -> dict[str, str]:
        try:
            blob = await self._preferences.get(NAMES_STORE_KEY)
            if not blob:
                return {}
            return decode_names(blob)
        except Exception as e:
            logger.error(f"Failed to load bookmark names: {e}")
            return {}

    async def save_bookmarks(self, bookmarks: list[str]) -> None:
        try:
            await self._preferences.set(
                BOOKMARKS_STORE_KEY, encode_bookmarks(bookmarks),
            )
        except Exception as e:
            logger.error(f"Failed to persist bookmarks: {e}")

    async def save_names(self, names: dict[str, str]) -> None:
        try:
            await self._preferences.set(NAMES_STORE_KEY, encode_names(names))
        except Exception as e:
            logger.error(f"Failed to persist bookmark names: {e}")

    async def erase(self) -> None:
        try:
            await self._preferences.remove(BOOKMARKS_STORE_KEY, NAMES_STORE_KEY)
        except Exception as e:
            logger.error(f"Failed to erase persisted bookmarks: {e}")
