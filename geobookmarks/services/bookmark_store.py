"""Bookmark Store — owns bookmark state, publishes snapshots, schedules name resolution.

Invariants:
    - set(bookmarks) == membership at every commit; both change together under the lock
    - Bookmarks are ordered most-recently-added first, no duplicates
    - A name is written only for a current bookmark that has no name yet, and only if no
      clear_all happened since its resolution was scheduled
    - A key is in the in-flight set for exactly one resolution attempt; it is marked before
      the task is created, with no suspension point between check and mark
    - Every committed mutation (including name write-backs) publishes one snapshot
    - No mutation ever awaits geocoding

Design Decisions:
    - Explicit construction via create_bookmark_store(): the app lifespan owns the instance,
      tests build their own (no process-wide singleton)
    - One asyncio.Lock around state change + persistence write: writes reach storage in
      commit order and write-backs cannot interleave with a mutation
    - No cancellation of stale resolutions: the clear generation and membership check turn
      late completions into no-ops
    - A resolution that never completes keeps its key in flight until restart (known
      limitation — no timeout is imposed here)
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from geobookmarks.core.domain_types import GeohashKey
from geobookmarks.core.geohash_keys import level_for_length, normalize_geohash
from geobookmarks.services.bookmark_persistence import BookmarkPersistence
from geobookmarks.services.name_resolver import NameResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookmarksSnapshot:
    """Immutable view of the store after one committed mutation."""
    bookmarks: tuple[GeohashKey, ...] = ()
    names: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}),
    )


SnapshotListener = Callable[[BookmarksSnapshot], None]


class BookmarkStore:
    """Geohash bookmarks with lazily resolved, cached place names."""

    def __init__(self, persistence: BookmarkPersistence, resolver: NameResolver):
        self._persistence = persistence
        self._resolver = resolver
        self._lock = asyncio.Lock()
        self._membership: set[str] = set()
        self._bookmarks: list[GeohashKey] = []
        self._names: dict[str, str] = {}
        self._resolving: set[str] = set()
        # Bumped by clear_all; tasks from an older generation never write back
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[SnapshotListener] = []
        self._snapshot = BookmarksSnapshot()

    # ─── Observable outputs ─────────────────────────────────────

    @property
    def snapshot(self) -> BookmarksSnapshot:
        return self._snapshot

    @property
    def bookmarks(self) -> tuple[GeohashKey, ...]:
        return self._snapshot.bookmarks

    @property
    def names(self) -> Mapping[str, str]:
        return self._snapshot.names

    @property
    def resolving(self) -> frozenset[str]:
        return frozenset(self._resolving)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; it receives the current snapshot immediately.

        Returns an unsubscribe callable.
        """
        self._listeners.append(listener)
        self._notify(listener, self._snapshot)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def snapshots(self) -> AsyncIterator[BookmarksSnapshot]:
        """Async stream of snapshots, starting with the current one."""
        queue: asyncio.Queue[BookmarksSnapshot] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    # ─── Queries ────────────────────────────────────────────────

    def is_bookmarked(self, raw: str) -> bool:
        return normalize_geohash(raw) in self._membership

    # ─── Mutations ──────────────────────────────────────────────

    async def load(self) -> None:
        """Replace in-memory state with the persisted snapshot."""
        async with self._lock:
            bookmarks = await self._persistence.load_bookmarks()
            names = await self._persistence.load_names()
            self._bookmarks = list(bookmarks)
            self._membership = set(bookmarks)
            self._names = dict(names)
            self._publish()
        logger.info(f"Loaded {len(bookmarks)} bookmarks, {len(names)} names")

    async def add(self, raw: str) -> None:
        key = normalize_geohash(raw)
        if not key:
            return
        async with self._lock:
            await self._add_locked(key)

    async def remove(self, raw: str) -> None:
        key = normalize_geohash(raw)
        if not key:
            return
        async with self._lock:
            await self._remove_locked(key)

    async def toggle(self, raw: str) -> None:
        key = normalize_geohash(raw)
        if not key:
            return
        async with self._lock:
            if key in self._membership:
                await self._remove_locked(key)
            else:
                await self._add_locked(key)

    async def clear_all(self) -> None:
        """Wipe bookmarks, names and in-flight markers, and erase persisted blobs."""
        async with self._lock:
            self._membership.clear()
            self._bookmarks.clear()
            self._names.clear()
            self._resolving.clear()
            self._generation += 1
            self._publish()
            await self._persistence.erase()
        logger.info("Cleared all geohash bookmarks and names")

    async def _add_locked(self, key: GeohashKey) -> None:
        if key in self._membership:
            return
        self._membership.add(key)
        self._bookmarks.insert(0, key)
        self._publish()
        await self._persistence.save_bookmarks(list(self._bookmarks))
        self.resolve_name_if_needed(key)

    async def _remove_locked(self, key: GeohashKey) -> None:
        if key not in self._membership:
            return
        self._membership.discard(key)
        self._bookmarks.remove(key)
        names_changed = self._names.pop(key, None) is not None
        self._publish()
        await self._persistence.save_bookmarks(list(self._bookmarks))
        if names_changed:
            await self._persistence.save_names(dict(self._names))

    # ─── Name resolution ────────────────────────────────────────

    def resolve_name_if_needed(self, raw: str) -> bool:
        """Schedule resolution for a bookmarked key without a name. True if scheduled.

        Must be called from a running event loop. Check and mark happen without
        yielding, so concurrent callers can never dispatch the same key twice.
        """
        key = normalize_geohash(raw)
        if (
            not key
            or key not in self._membership
            or key in self._names
            or key in self._resolving
        ):
            return False
        self._resolving.add(key)
        task = asyncio.create_task(
            self._run_resolution(key, self._generation),
            name=f"resolve-{key}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    def resolve_missing_names(self) -> int:
        """Schedule resolution for every bookmark still lacking a name."""
        return sum(
            1 for key in list(self._bookmarks) if self.resolve_name_if_needed(key)
        )

    async def _run_resolution(self, key: GeohashKey, generation: int) -> None:
        try:
            name = await self._resolver.resolve(key)
            if name:
                await self._apply_name(key, name, generation)
            else:
                logger.info(
                    f"No place name for #{key}",
                    extra={
                        "geohash": key,
                        "geohash_level": level_for_length(len(key)).value,
                    },
                )
        except Exception as e:
            logger.warning(
                f"Name resolution failed for #{key}: {e}", extra={"geohash": key},
            )
        finally:
            # clear_all already emptied the set; a post-clear marker is not ours
            if generation == self._generation:
                self._resolving.discard(key)

    async def _apply_name(self, key: GeohashKey, name: str, generation: int) -> bool:
        async with self._lock:
            if (
                generation != self._generation
                or key not in self._membership
                or key in self._names
            ):
                logger.debug(
                    f"Discarding stale name for #{key}", extra={"geohash": key},
                )
                return False
            self._names[key] = name
            self._publish()
            await self._persistence.save_names(dict(self._names))
        return True

    # ─── Task lifecycle ─────────────────────────────────────────

    async def join(self) -> None:
        """Wait until no resolution task is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel outstanding resolutions (application shutdown)."""
        for task in list(self._tasks):
            task.cancel()
        await self.join()

    # ─── Publication ────────────────────────────────────────────

    def _publish(self) -> None:
        snapshot = BookmarksSnapshot(
            bookmarks=tuple(self._bookmarks),
            names=MappingProxyType(dict(self._names)),
        )
        self._snapshot = snapshot
        for listener in list(self._listeners):
            self._notify(listener, snapshot)

    def _notify(self, listener: SnapshotListener, snapshot: BookmarksSnapshot) -> None:
        try:
            listener(snapshot)
        except Exception as e:
            logger.error(f"Snapshot listener failed: {e}", exc_info=True)


async def create_bookmark_store(
    persistence: BookmarkPersistence, resolver: NameResolver,
) -> BookmarkStore:
    """Build a store and load its persisted state."""
    store = BookmarkStore(persistence, resolver)
    await store.load()
    return store
