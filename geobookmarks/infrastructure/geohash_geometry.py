"""Geohash Geometry — GeohashGeometry implementation over pygeohash.

Invariants:
    - decode_bounds returns the exact cell (center ± decode error on each axis)
    - decode_center equals the bounds' center
    - Callers pass normalized, non-empty keys; pygeohash behavior on bad input is not relied on

Design Decisions:
    - Wrap a geohash library rather than carrying our own codec: the bit-interleaving
      algorithm is not part of this service
"""

import pygeohash

from geobookmarks.core.domain_types import Bounds


class PygeohashGeometry:
    """Bounds and center for a geohash key."""

    def decode_bounds(self, key: str) -> Bounds:
        lat, lon, lat_err, lon_err = pygeohash.decode_exactly(key)
        return Bounds(
            lat_min=lat - lat_err,
            lat_max=lat + lat_err,
            lon_min=lon - lon_err,
            lon_max=lon + lon_err,
        )

    def decode_center(self, key: str) -> tuple[float, float]:
        lat, lon, _, _ = pygeohash.decode_exactly(key)
        return lat, lon
