"""Pool Builder: accumulates qualifying articles from the random feed or from page links.

Invariants:
    - random_articles() returns exactly `count` Articles with pairwise-distinct titles
    - Each title is classified at most once per build run
    - Random-feed builds stop after max_candidate_batches batches with
      CandidatesExhaustedError (no unbounded loops)
    - linked_articles() raises InsufficientLinksError when the page links to fewer than
      `count` distinct titles; links are sampled without replacement, at most
      max_link_candidates of them are classified
    - fill_cache() writes nothing unless both tiers were built completely

Design Decisions:
    - Classification is sequential: interactive latency dominates, and upstream load stays
      one request at a time per session
    - Injected random.Random: deterministic link sampling in tests
"""

import logging
import random

from wikitrains.core.domain_types import Article, Tier
from wikitrains.core.errors import (
    CandidatesExhaustedError,
    ErrorContext,
    InsufficientLinksError,
)
from wikitrains.core.repository_protocols import ArticleSource, ArticleStore
from wikitrains.core.sampling import shuffled
from wikitrains.services.article_classifier import ArticleClassifier

logger = logging.getLogger(__name__)


class PoolBuilder:
    def __init__(
        self,
        source: ArticleSource,
        classifier: ArticleClassifier,
        random_batch_size: int = 500,
        max_candidate_batches: int = 50,
        max_link_candidates: int = 60,
        rng: random.Random | None = None,
    ):
        self._source = source
        self._classifier = classifier
        self.random_batch_size = random_batch_size
        self.max_candidate_batches = max_candidate_batches
        self.max_link_candidates = max_link_candidates
        self._rng = rng or random.Random()  # nosec B311

    async def random_articles(self, count: int, min_views: int) -> list[Article]:
        """Draw random titles until `count` of them qualify at `min_views`."""
        found: list[Article] = []
        seen: set[str] = set()
        for batch in range(self.max_candidate_batches):
            titles = await self._source.random_titles(self.random_batch_size)
            for title in titles:
                if title in seen:
                    continue
                seen.add(title)
                article = await self._classifier.classify(title, min_views)
                if article is None:
                    continue
                found.append(article)
                logger.info(
                    f"Pool article {len(found)}/{count}: {title}",
                    extra={"title": title, "attempt": batch + 1},
                )
                if len(found) >= count:
                    return found
        logger.warning(
            "Random feed exhausted before pool was full",
            extra={"found": len(found), "required": count},
        )
        raise CandidatesExhaustedError(
            len(found), count, self.max_candidate_batches,
        )

    async def linked_articles(
        self, title: str, count: int, min_views: int = 0,
    ) -> list[Article]:
        """Pick `count` qualifying articles among the pages `title` links to."""
        links = list(dict.fromkeys(await self._source.links(title)))
        if len(links) < count:
            raise InsufficientLinksError(title, len(links), count)

        found: list[Article] = []
        candidates = shuffled(links, self._rng)[:self.max_link_candidates]
        for candidate in candidates:
            article = await self._classifier.classify(candidate, min_views)
            if article is None:
                continue
            found.append(article)
            if len(found) >= count:
                return found
        raise CandidatesExhaustedError(
            len(found), count, len(candidates), ErrorContext(title=title),
        )

    async def fill_cache(
        self,
        store: ArticleStore,
        tier_one_count: int,
        tier_two_count: int,
        tier_one_min_views: int,
        tier_two_min_views: int,
    ) -> dict[Tier, int]:
        """Build both tiers, then write them to the store (slots 0..n-1)."""
        pools = {
            Tier.ONE: await self.random_articles(tier_one_count, tier_one_min_views),
            Tier.TWO: await self.random_articles(tier_two_count, tier_two_min_views),
        }
        for tier, articles in pools.items():
            for index, article in enumerate(articles):
                await store.set(tier, index, article)
            logger.info(
                f"Stored {len(articles)} articles in {tier.value}",
                extra={"tier": tier.value},
            )
        return {tier: len(articles) for tier, articles in pools.items()}
