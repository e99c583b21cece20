"""Bookmark Schemas — Pydantic models for the bookmarks API boundary.

Invariants:
    - BookmarkCreate.geohash: 1-64 chars, stripped, non-empty (normalization happens in core)
    - BookmarkView carries derived fields (level, coverage) computed, never stored

Design Decisions:
    - Raw strings accepted ("#U4PR" is fine): the route normalizes and validates so the
      error body can name the offending input
"""

from pydantic import BaseModel, Field, field_validator

from geobookmarks.core.coverage import coverage_label
from geobookmarks.core.domain_types import GeohashLevel
from geobookmarks.core.geohash_keys import level_for_length


class BookmarkCreate(BaseModel):
    """Bookmark creation — raw user input, normalized downstream."""
    geohash: str = Field(min_length=1, max_length=64)

    @field_validator("geohash")
    @classmethod
    def strip_geohash(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("geohash cannot be empty or whitespace")
        return v


class BookmarkView(BaseModel):
    """One bookmark as displayed: key, level, coverage, and resolved name if any."""
    geohash: str
    level: GeohashLevel
    coverage: str
    name: str | None = None

    @classmethod
    def build(cls, geohash: str, name: str | None) -> "BookmarkView":
        return cls(
            geohash=geohash,
            level=level_for_length(len(geohash)),
            coverage=coverage_label(len(geohash)),
            name=name,
        )


class BookmarkListResponse(BaseModel):
    bookmarks: list[BookmarkView]


class BookmarkStatus(BaseModel):
    geohash: str
    bookmarked: bool
