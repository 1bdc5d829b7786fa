"""Game Services: the explicitly constructed object graph every session handler receives.

Invariants:
    - One GameServices per process; handlers never reach for module globals
    - The article cache is the only state shared across sessions (read-mostly)

Design Decisions:
    - Plain dataclass container: tests build one from fakes without patching imports
    - build_game_services() wires the production adapters from Settings
"""

import random
from dataclasses import dataclass

from wikitrains.config import Settings
from wikitrains.core.repository_protocols import ArticleSource, ArticleStore
from wikitrains.infrastructure.article_cache import ArticleCache
from wikitrains.infrastructure.database import DatabaseSessionManager
from wikitrains.infrastructure.wikipedia_client import WikipediaClient
from wikitrains.services.article_classifier import ArticleClassifier
from wikitrains.services.pool_builder import PoolBuilder


@dataclass
class GameServices:
    settings: Settings
    source: ArticleSource
    cache: ArticleStore
    pool_builder: PoolBuilder


def assemble_services(
    settings: Settings,
    source: ArticleSource,
    cache: ArticleStore,
    rng: random.Random | None = None,
) -> GameServices:
    """Wire classifier and pool builder around the given boundaries."""
    classifier = ArticleClassifier(source)
    pool_builder = PoolBuilder(
        source,
        classifier,
        random_batch_size=settings.random_batch_size,
        max_candidate_batches=settings.max_candidate_batches,
        max_link_candidates=settings.max_link_candidates,
        rng=rng,
    )
    return GameServices(
        settings=settings, source=source, cache=cache, pool_builder=pool_builder,
    )


def build_wikipedia_client(settings: Settings) -> WikipediaClient:
    return WikipediaClient(
        api_url=settings.wikipedia_api_url,
        user_agent=settings.wikipedia_user_agent,
        timeout_seconds=settings.wikipedia_timeout_seconds,
        links_limit=settings.links_limit,
        pageview_days=settings.pageview_days,
    )


def build_game_services(
    settings: Settings, db: DatabaseSessionManager,
) -> GameServices:
    """Production wiring: Wikipedia over httpx, cache over the database."""
    return assemble_services(
        settings, build_wikipedia_client(settings), ArticleCache(db),
    )
