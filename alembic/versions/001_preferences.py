"""Create preferences table for durable key-value blobs.

Revision ID: 001_preferences
Revises:
Create Date: 2026-10-17

Holds the persisted bookmark list (locationChannel.bookmarks) and the
resolved name map (locationChannel.bookmarkNames) as JSON text.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_preferences'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'preferences',
        sa.Column('key', sa.String(128), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('preferences')
