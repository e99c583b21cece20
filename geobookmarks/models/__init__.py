"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is complete for alembic and test fixtures
"""

from geobookmarks.models.preference import Preference  # noqa: F401
