"""App Lifespan — startup wiring and shutdown of the bookmark store.

Invariants:
    - The store is built from persisted state and placed on app.state
    - Loaded bookmarks without a cached name are resolved without waiting for a request
    - Shutdown closes the store before disposing the database manager
"""

import pytest

import geobookmarks.main as main_module
from geobookmarks.core.domain_types import AddressResult

from tests.fakes import FakeGeocoder, FakeGeometry, FakePreferenceStore, always

BOOKMARKS_KEY = "locationChannel.bookmarks"
NAMES_KEY = "locationChannel.bookmarkNames"


class _FakeManager:
    def __init__(self):
        self.disposed = False

    async def dispose(self):
        self.disposed = True


@pytest.fixture
def wiring(monkeypatch):
    preferences = FakePreferenceStore({
        BOOKMARKS_KEY: '["u4prez", "9q"]',
        NAMES_KEY: '{"9q": "California"}',
    })
    geocoder = FakeGeocoder(always(AddressResult(sub_locality="Mission District")))
    manager = _FakeManager()

    monkeypatch.setattr(main_module, "setup_logging", lambda *args: None)
    monkeypatch.setattr(main_module, "init_db", lambda url, **kwargs: manager)
    monkeypatch.setattr(main_module, "SqlPreferenceStore", lambda m: preferences)
    monkeypatch.setattr(
        main_module, "NominatimReverseGeocoder", lambda **kwargs: geocoder,
    )
    monkeypatch.setattr(main_module, "PygeohashGeometry", FakeGeometry)
    return preferences, geocoder, manager


async def test_startup_resolves_unnamed_loaded_bookmarks(wiring):
    preferences, geocoder, manager = wiring

    async with main_module.lifespan(main_module.app):
        store = main_module.app.state.bookmark_store
        assert store.bookmarks == ("u4prez", "9q")
        assert store.resolving == frozenset({"u4prez"})
        await store.join()

        assert len(geocoder.calls) == 1
        assert dict(store.names) == {
            "9q": "California", "u4prez": "Mission District",
        }

    assert manager.disposed


async def test_startup_with_all_names_cached_does_not_geocode(wiring):
    preferences, geocoder, manager = wiring
    preferences.data[NAMES_KEY] = '{"9q": "California", "u4prez": "Mission"}'

    async with main_module.lifespan(main_module.app):
        store = main_module.app.state.bookmark_store
        assert store.resolving == frozenset()
        await store.join()

    assert geocoder.calls == []
