"""Article Classifier: fetches a candidate's facts and applies the qualification checks.

Invariants:
    - Checks run in order views -> image -> description and stop at the first failure
      (each check costs one upstream call)
    - min_views == 0 skips the page-view call entirely
    - Returns a complete Article or None; never a partial record
    - UpstreamUnavailableError propagates to the caller

Design Decisions:
    - Predicates live in core/classify.py (pure); this shell only sequences the IO
"""

import logging

from wikitrains.core.classify import (
    has_image,
    is_acceptable_description,
    meets_view_threshold,
    requires_view_check,
)
from wikitrains.core.domain_types import Article
from wikitrains.core.repository_protocols import ArticleSource

logger = logging.getLogger(__name__)


class ArticleClassifier:
    def __init__(self, source: ArticleSource):
        self._source = source

    async def classify(self, title: str, min_views: int) -> Article | None:
        """Return the Article for `title` if it qualifies, else None."""
        if requires_view_check(min_views):
            views = await self._source.page_views(title)
            if not meets_view_threshold(views, min_views):
                return None

        image_url = await self._source.image_url(title)
        if not has_image(image_url):
            return None

        description = await self._source.description(title)
        if not is_acceptable_description(description):
            logger.debug("Rejected description", extra={"title": title})
            return None

        return Article(title=title, description=description, image_url=image_url)
