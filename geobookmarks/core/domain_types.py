"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - GeohashKey is always a normalized key (lowercase, geohash alphabet only, non-empty)
    - Level is derived from key length, never stored
    - AddressResult fields are optional; empty strings are treated as absent downstream

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API responses embed the level)
    - Frozen dataclasses for value objects crossing the Protocol boundary
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GeohashKey = NewType("GeohashKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class GeohashLevel(str, Enum):
    """Coarseness label derived from key length — picks which address field to surface."""
    REGION = "region"
    PROVINCE = "province"
    CITY = "city"
    NEIGHBORHOOD = "neighborhood"
    BLOCK = "block"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Bounds:
    """Bounding box a geohash decodes to."""
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    @property
    def center(self) -> tuple[float, float]:
        return (
            (self.lat_min + self.lat_max) / 2,
            (self.lon_min + self.lon_max) / 2,
        )


@dataclass(frozen=True)
class AddressResult:
    """Single reverse-geocoding result, reduced to the components we surface."""
    region: str | None = None
    sub_region: str | None = None
    locality: str | None = None
    sub_locality: str | None = None
    country: str | None = None
