"""CachedArticle ORM: one curated article in a tier slot of the article cache.

Invariants:
    - (tier, slot) is the primary key: one article per slot, upserts replace
    - slot is the stringified non-negative integer index ("0", "1", ...)
    - article holds the JSON payload {"title", "description", "imageURL"}

Design Decisions:
    - JSON column instead of three text columns: the table is a key-value store,
      readers only ever need the whole record
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from wikitrains.db.base import Base


class CachedArticle(Base):
    __tablename__ = "cached_articles"

    tier: Mapped[str] = mapped_column(String(20), primary_key=True)
    slot: Mapped[str] = mapped_column(String(20), primary_key=True)
    article: Mapped[dict] = mapped_column(JSON, nullable=False)
    stored_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
