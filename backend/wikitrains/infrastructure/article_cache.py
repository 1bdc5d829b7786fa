"""Article Cache: tiered key-value store of curated articles over the cached_articles table.

Invariants:
    - Two namespaces (Tier.ONE, Tier.TWO); keys are stringified non-negative ints
    - get() of an empty slot raises ArticleNotCachedError (never returns None)
    - set() is an upsert and commits immediately
    - Stored articles are not re-validated on read

Design Decisions:
    - session.merge() for upsert: portable across SQLite and PostgreSQL
    - Each call opens its own session: initGame's 9 concurrent reads never share one
      AsyncSession (sessions are not safe for concurrent use)
"""

import logging

from sqlalchemy import func, select

from wikitrains.core.domain_types import Article, Tier
from wikitrains.core.errors import ArticleNotCachedError
from wikitrains.infrastructure.database import DatabaseSessionManager
from wikitrains.models.cached_article import CachedArticle

logger = logging.getLogger(__name__)


def slot_key(index: int) -> str:
    if index < 0:
        raise ValueError(f"cache index must be non-negative, got {index}")
    return str(index)


class ArticleCache:
    """Tiered article cache backed by the async database session manager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get(self, tier: Tier, index: int) -> Article:
        slot = slot_key(index)
        async with self._db.session() as session:
            row = await session.get(CachedArticle, (tier.value, slot))
        if row is None:
            raise ArticleNotCachedError(tier.value, slot)
        return Article.from_payload(row.article)

    async def set(self, tier: Tier, index: int, article: Article) -> None:
        slot = slot_key(index)
        async with self._db.session() as session:
            await session.merge(CachedArticle(
                tier=tier.value, slot=slot, article=article.to_payload(),
            ))
            await session.commit()
        logger.debug(
            "Cached article", extra={"tier": tier.value, "slot": slot, "title": article.title},
        )

    async def count(self, tier: Tier) -> int:
        async with self._db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(CachedArticle)
                .where(CachedArticle.tier == tier.value),
            )
            return int(result.scalar_one())
