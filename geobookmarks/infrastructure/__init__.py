"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; it never holds bookmark state
    - External failures mapped to the typed hierarchy in core/errors.py

Design Decisions:
    - Thin adapters over third-party clients (geopy, pygeohash, SQLAlchemy)
"""
