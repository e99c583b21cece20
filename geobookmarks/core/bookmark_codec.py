"""Bookmark Codec — JSON encoding of the two persisted blobs.

Invariants:
    - decode_bookmarks(encode_bookmarks(x)) == x for any normalized, duplicate-free list
    - decode_bookmarks normalizes entries, skips empties, dedups first-seen, keeps order
    - decode_names is a direct parse: no validation against current bookmarks;
      only non-string or empty values are dropped
    - Decoders raise ValueError on malformed blobs; the persistence service decides what to do

Design Decisions:
    - Stable storage keys shared with earlier clients of the same preference store
    - ensure_ascii=False: place names keep their native script in storage
"""

import json

from geobookmarks.core.domain_types import GeohashKey
from geobookmarks.core.geohash_keys import normalize_geohash

BOOKMARKS_STORE_KEY = "locationChannel.bookmarks"
NAMES_STORE_KEY = "locationChannel.bookmarkNames"


def encode_bookmarks(bookmarks: list[str]) -> str:
    return json.dumps(list(bookmarks), ensure_ascii=False)


def encode_names(names: dict[str, str]) -> str:
    return json.dumps(dict(names), ensure_ascii=False)


def decode_bookmarks(blob: str) -> list[GeohashKey]:
    """Rebuild the ordered bookmark list from a stored JSON array."""
    raw = json.loads(blob)
    if not isinstance(raw, list):
        raise ValueError(f"bookmarks blob is {type(raw).__name__}, expected list")
    seen: set[str] = set()
    ordered: list[GeohashKey] = []
    for entry in raw:
        if not isinstance(entry, str):
            continue
        key = normalize_geohash(entry)
        if key and key not in seen:
            seen.add(key)
            ordered.append(key)
    return ordered


def decode_names(blob: str) -> dict[str, str]:
    raw = json.loads(blob)
    if not isinstance(raw, dict):
        raise ValueError(f"names blob is {type(raw).__name__}, expected object")
    return {
        str(key): value for key, value in raw.items()
        if isinstance(value, str) and value
    }
