"""Boundary Protocols: contracts between core/services and the IO shell.

Invariants:
    - Services depend on these Protocols, never on httpx or SQLAlchemy directly
    - Implementations provided by infrastructure/ via GameServices (dependency injection)

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from wikitrains.core.domain_types import Article, Tier


class ArticleSource(Protocol):
    """Contract for the remote article service (Wikipedia)."""
    async def random_titles(self, limit: int) -> list[str]: ...
    async def page_views(self, title: str) -> int: ...
    async def description(self, title: str) -> str: ...
    async def image_url(self, title: str) -> str: ...
    async def links(self, title: str) -> list[str]: ...


class ArticleStore(Protocol):
    """Contract for the tiered article cache."""
    async def get(self, tier: Tier, index: int) -> Article: ...
    async def set(self, tier: Tier, index: int, article: Article) -> None: ...
    async def count(self, tier: Tier) -> int: ...
