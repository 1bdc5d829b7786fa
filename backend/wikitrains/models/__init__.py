"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is populated before create_all/autogenerate
"""

from wikitrains.models.cached_article import CachedArticle  # noqa: F401
