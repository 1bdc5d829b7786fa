"""Service test fixtures: async cache DB, fake article source, service wiring, HTTP client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched so routes that read it directly see the test DB
    - Services are always built from fakes; no test reaches Wikipedia

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the cache table
    - DatabaseSessionManager built via __new__: reuses its rollback/error mapping
      around the test engine
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import wikitrains.infrastructure.database as db_module
from wikitrains.config import Settings
from wikitrains.db.base import Base
from wikitrains.infrastructure.article_cache import ArticleCache
from wikitrains.infrastructure.database import DatabaseSessionManager
from wikitrains.main import app
from wikitrains.services.game_services import assemble_services

from tests.services.fake_wikipedia import FakeArticleSource, FakeArticleStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def article_cache(test_db_manager):
    return ArticleCache(test_db_manager)


@pytest.fixture
def settings():
    return Settings(
        tier_one_size=12,
        tier_two_size=3,
        tier_one_min_views=500,
        tier_two_min_views=200,
        max_candidate_batches=5,
        max_link_candidates=60,
        random_batch_size=500,
        choices_per_move=3,
        choice_min_views=0,
    )


@pytest.fixture
def fake_source():
    return FakeArticleSource()


@pytest.fixture
def fake_store():
    return FakeArticleStore()


@pytest.fixture
def make_services(settings, fake_source, fake_store):
    """Build GameServices from fakes; override any collaborator per test."""
    def _make(source=None, store=None, test_settings=None, seed=1234):
        return assemble_services(
            test_settings or settings,
            source or fake_source,
            store or fake_store,
            rng=random.Random(seed),
        )
    return _make


@pytest.fixture
async def client(test_db_manager):
    """HTTP test client with db_manager pointed at the test DB."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
