"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh preference store, geocoder, and geometry
    - The store fixture cancels outstanding resolution tasks on teardown
"""

import os

import pytest

# Ensure tests never point at a real database or the public geocoder identity
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NOMINATIM_USER_AGENT", "geobookmarks-tests/0.0")
os.environ.setdefault("LOG_FORMAT", "text")

from geobookmarks.services.bookmark_persistence import BookmarkPersistence  # noqa: E402
from geobookmarks.services.bookmark_store import create_bookmark_store  # noqa: E402
from geobookmarks.services.name_resolver import NameResolver  # noqa: E402

from tests.fakes import FakeGeocoder, FakeGeometry, FakePreferenceStore  # noqa: E402


@pytest.fixture
def preferences():
    return FakePreferenceStore()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def geometry():
    return FakeGeometry()


@pytest.fixture
def persistence(preferences):
    return BookmarkPersistence(preferences)


@pytest.fixture
def resolver(geocoder, geometry):
    return NameResolver(geocoder, geometry)


@pytest.fixture
async def store(persistence, resolver):
    store = await create_bookmark_store(persistence, resolver)
    yield store
    await store.close()
