"""Article cache table: tiered key-value store of curated articles.

Revision ID: 001_cached_articles
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_cached_articles"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cached_articles",
        sa.Column("tier", sa.String(20), primary_key=True),
        sa.Column("slot", sa.String(20), primary_key=True),
        sa.Column("article", sa.JSON, nullable=False),
        sa.Column("stored_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("cached_articles")
