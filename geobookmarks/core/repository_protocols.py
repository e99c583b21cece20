"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO (storage, geocoding, geometry) accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - PreferenceStore and ReverseGeocoder are async because implementations do IO;
      GeohashGeometry is sync — decoding is pure arithmetic
"""

from typing import Protocol

from geobookmarks.core.domain_types import AddressResult, Bounds


class PreferenceStore(Protocol):
    """Durable string-keyed string blobs — implemented by shell."""
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def remove(self, *keys: str) -> None: ...


class ReverseGeocoder(Protocol):
    """Coordinates → address components. None means no result (not an error)."""
    async def lookup(self, lat: float, lon: float) -> AddressResult | None: ...


class GeohashGeometry(Protocol):
    """Geohash decoding. Undefined for invalid keys — callers normalize first."""
    def decode_bounds(self, key: str) -> Bounds: ...
    def decode_center(self, key: str) -> tuple[float, float]: ...
