"""SQL Preference Store — PreferenceStore implementation over the preferences table.

Invariants:
    - set() is an upsert: last write wins per key
    - remove() of a missing key is a no-op
    - Every call uses its own session from DatabaseSessionManager (auto-rollback on error)
    - SQLAlchemy failures surface as DatabaseError (mapped by the session manager)
"""

import logging

from sqlalchemy import delete, select

from geobookmarks.infrastructure.database import DatabaseSessionManager
from geobookmarks.models.preference import Preference

logger = logging.getLogger(__name__)


class SqlPreferenceStore:
    """Durable key-value blobs backed by async SQLAlchemy."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def get(self, key: str) -> str | None:
        async with self._manager.session() as db:
            result = await db.execute(
                select(Preference.value).where(Preference.key == key),
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        async with self._manager.session() as db:
            row = await db.get(Preference, key)
            if row is None:
                db.add(Preference(key=key, value=value))
            else:
                row.value = value
            await db.commit()

    async def remove(self, *keys: str) -> None:
        if not keys:
            return
        async with self._manager.session() as db:
            await db.execute(
                delete(Preference).where(Preference.key.in_(keys)),
            )
            await db.commit()
        logger.debug(f"Removed preferences: {', '.join(keys)}")
