"""Geohash Keys — normalization, validation, and level derivation for bookmark keys.

Invariants:
    - normalize_geohash is total, pure, and idempotent
    - Empty result means "not a bookmarkable key" — callers must check
    - normalize_geohash never caps length; is_valid_geohash enforces 1..12

Design Decisions:
    - frozenset alphabet lookup: O(1) per char, no regex
    - Length cap lives in is_valid_geohash only — the store accepts whatever normalizes
      non-empty (persisted blobs from older builds may carry longer keys)
"""

from geobookmarks.core.domain_types import GeohashKey, GeohashLevel

GEOHASH_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
MAX_GEOHASH_LENGTH = 12

_ALLOWED = frozenset(GEOHASH_ALPHABET)


def normalize_geohash(raw: str) -> GeohashKey:
    """Trim, lowercase, strip '#', drop anything outside the geohash alphabet."""
    cleaned = raw.strip().lower().replace("#", "")
    return GeohashKey("".join(ch for ch in cleaned if ch in _ALLOWED))


def is_valid_geohash(key: str) -> bool:
    """True for a non-empty, already-normalized key of at most 12 chars."""
    if not key or len(key) > MAX_GEOHASH_LENGTH:
        return False
    return all(ch in _ALLOWED for ch in key)


def level_for_length(length: int) -> GeohashLevel:
    if length <= 2:
        return GeohashLevel.REGION
    if length <= 4:
        return GeohashLevel.PROVINCE
    if length == 5:
        return GeohashLevel.CITY
    if length == 6:
        return GeohashLevel.NEIGHBORHOOD
    return GeohashLevel.BLOCK
