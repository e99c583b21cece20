"""Name Resolver — turns a geohash key into a display name via reverse geocoding.

Invariants:
    - Keys of length <= 2 sample up to 5 points (center, then corners) and stop at 2 names
    - Longer keys geocode the center exactly once
    - A geocoder exception abandons that point (coarse) or the whole key (fine); it is
      logged and never propagated
    - Never writes state: the store decides whether a result is still wanted

Design Decisions:
    - Selection rules live in core/place_names.py so they are testable without IO
    - Sequential point lookups: the geocoder is rate limited anyway, and early stop
      after two names saves requests
"""

import logging

from geobookmarks.core.place_names import (
    MAX_REGION_NAMES, compose_region_names, pick_name_for_length,
    region_name, sample_points,
)
from geobookmarks.core.repository_protocols import GeohashGeometry, ReverseGeocoder

logger = logging.getLogger(__name__)


class NameResolver:
    """Resolves one key per call. Stateless; dedup is the store's job."""

    def __init__(self, geocoder: ReverseGeocoder, geometry: GeohashGeometry):
        self._geocoder = geocoder
        self._geometry = geometry

    async def resolve(self, key: str) -> str | None:
        if len(key) <= 2:
            return await self._resolve_region(key)
        return await self._resolve_center(key)

    async def _resolve_region(self, key: str) -> str | None:
        """Composite admin name: "<first> and <second>" when the cell spans two."""
        bounds = self._geometry.decode_bounds(key)
        names: list[str] = []
        for attempt, (lat, lon) in enumerate(sample_points(bounds), start=1):
            try:
                address = await self._geocoder.lookup(lat, lon)
            except Exception as e:
                logger.warning(
                    f"Geocoding failed for #{key} point ({lat:.4f}, {lon:.4f}): {e}",
                    extra={"geohash": key, "attempt": attempt},
                )
                continue
            name = region_name(address)
            if name and name not in names:
                names.append(name)
            if len(names) >= MAX_REGION_NAMES:
                break
        return compose_region_names(names)

    async def _resolve_center(self, key: str) -> str | None:
        lat, lon = self._geometry.decode_center(key)
        try:
            address = await self._geocoder.lookup(lat, lon)
        except Exception as e:
            logger.warning(
                f"Geocoding failed for #{key}: {e}", extra={"geohash": key},
            )
            return None
        return pick_name_for_length(len(key), address)
