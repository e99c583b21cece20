"""API test fixtures — FastAPI test client bound to the fake-backed store.

Invariants:
    - get_bookmark_store overridden; the app lifespan (real DB, Nominatim) never runs
    - Overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from geobookmarks.api.routes.bookmarks import get_bookmark_store
from geobookmarks.main import app


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_bookmark_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
