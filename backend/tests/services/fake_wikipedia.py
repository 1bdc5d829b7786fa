"""Fake Article Source and Store: in-memory doubles for services tests.

Invariants:
    - FakeArticleSource answers from a title -> FakePage dict; unknown titles behave like
      missing pages (0 views, empty image/description, no links)
    - random_titles() pops one configured batch per call, then returns empty batches
    - calls records (operation, title) for every request, in order
    - fail_on[operation] makes that operation raise the given exception

Design Decisions:
    - Flat classes, no inheritance: they satisfy the Protocols structurally
"""

from dataclasses import dataclass, field

from wikitrains.core.domain_types import Article, Tier
from wikitrains.core.errors import ArticleNotCachedError


@dataclass
class FakePage:
    views: int = 1_000
    image_url: str = "https://upload.wikimedia.org/wikipedia/commons/a/a1/Example.jpg"
    description: str = "Capital city of a country"
    links: list[str] = field(default_factory=list)


class FakeArticleSource:
    def __init__(
        self,
        pages: dict[str, FakePage] | None = None,
        random_batches: list[list[str]] | None = None,
    ):
        self.pages = pages or {}
        self.random_batches = list(random_batches or [])
        self.calls: list[tuple[str, str | None]] = []
        self.fail_on: dict[str, Exception] = {}

    def _record(self, operation: str, title: str | None) -> FakePage:
        self.calls.append((operation, title))
        if operation in self.fail_on:
            raise self.fail_on[operation]
        if title is None:
            return FakePage()
        return self.pages.get(title, FakePage(views=0, image_url="", description=""))

    def calls_for(self, operation: str) -> list[str | None]:
        return [t for op, t in self.calls if op == operation]

    async def random_titles(self, limit: int) -> list[str]:
        self._record("random", None)
        if not self.random_batches:
            return []
        return self.random_batches.pop(0)[:limit]

    async def page_views(self, title: str) -> int:
        return self._record("pageviews", title).views

    async def description(self, title: str) -> str:
        return self._record("description", title).description

    async def image_url(self, title: str) -> str:
        return self._record("pageimages", title).image_url

    async def links(self, title: str) -> list[str]:
        return list(self._record("links", title).links)


class FakeArticleStore:
    def __init__(self):
        self.slots: dict[tuple[Tier, int], Article] = {}
        self.reads: list[tuple[Tier, int]] = []

    async def get(self, tier: Tier, index: int) -> Article:
        self.reads.append((tier, index))
        try:
            return self.slots[(tier, index)]
        except KeyError:
            raise ArticleNotCachedError(tier.value, str(index))

    async def set(self, tier: Tier, index: int, article: Article) -> None:
        self.slots[(tier, index)] = article

    async def count(self, tier: Tier) -> int:
        return sum(1 for t, _ in self.slots if t == tier)


def make_article(title: str) -> Article:
    return Article(
        title=title,
        description=f"Description of {title}",
        image_url=f"https://upload.wikimedia.org/{title.replace(' ', '_')}.jpg",
    )


def seeded_store(tier_one: int, tier_two: int) -> FakeArticleStore:
    """Store with 'One <i>' articles in tierOne and 'Two <i>' in tierTwo."""
    store = FakeArticleStore()
    for i in range(tier_one):
        store.slots[(Tier.ONE, i)] = make_article(f"One {i}")
    for i in range(tier_two):
        store.slots[(Tier.TWO, i)] = make_article(f"Two {i}")
    return store
