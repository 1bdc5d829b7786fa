"""Wikipedia Client: async adapter over the MediaWiki action API (the article source).

Invariants:
    - Titles sent as format_title(title) (spaces -> underscores); httpx URL-encodes params
    - Every request carries a timeout; nothing waits on Wikipedia indefinitely
    - Timeouts, transport errors, non-2xx statuses and undecodable bodies all map to
      UpstreamUnavailableError (core/errors.py)
    - No retries: a failed call aborts the caller's operation

Design Decisions:
    - One shared httpx.AsyncClient per process: connection pooling across sessions
    - Decoding delegated to pure core/wiki_response.py, the adapter only does transport
    - User-Agent always set (Wikimedia API etiquette rejects anonymous clients)
"""

import logging
from typing import Any, Callable

import httpx

from wikitrains.core.errors import ErrorContext, UpstreamUnavailableError
from wikitrains.core.wiki_response import (
    decode_description,
    decode_image_url,
    decode_links,
    decode_page_views,
    decode_random_titles,
    format_title,
)

logger = logging.getLogger(__name__)


class WikipediaClient:
    """Article source backed by en.wikipedia.org (or any MediaWiki api.php)."""

    def __init__(
        self,
        api_url: str,
        user_agent: str,
        timeout_seconds: float = 10.0,
        links_limit: int = 500,
        pageview_days: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.links_limit = links_limit
        self.pageview_days = pageview_days
        self.client = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def random_titles(self, limit: int) -> list[str]:
        params = {"list": "random", "rnnamespace": 0, "rnlimit": limit}
        return await self._query("random", params, decode_random_titles)

    async def page_views(self, title: str) -> int:
        params = {
            "prop": "pageviews",
            "pvipdays": self.pageview_days,
            "titles": format_title(title),
        }
        return await self._query("pageviews", params, decode_page_views, title)

    async def description(self, title: str) -> str:
        params = {"prop": "description", "titles": format_title(title)}
        return await self._query("description", params, decode_description, title)

    async def image_url(self, title: str) -> str:
        params = {
            "prop": "pageimages",
            "piprop": "original",
            "titles": format_title(title),
        }
        return await self._query("pageimages", params, decode_image_url, title)

    async def links(self, title: str) -> list[str]:
        params = {
            "prop": "links",
            "pllimit": self.links_limit,
            "titles": format_title(title),
        }
        return await self._query("links", params, decode_links, title)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _query(
        self,
        operation: str,
        params: dict[str, Any],
        decode: Callable[[Any], Any],
        title: str | None = None,
    ):
        """GET api.php?action=query&format=json&... and decode the body."""
        context = ErrorContext(title=title)
        try:
            response = await self.client.get(
                self.api_url,
                params={"action": "query", "format": "json", **params},
            )
            response.raise_for_status()
            return decode(response.json())
        except httpx.TimeoutException:
            logger.warning(
                f"Wikipedia {operation} timed out", extra={"title": title},
            )
            raise UpstreamUnavailableError("request timed out", operation, context)
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"HTTP {e.response.status_code}", operation, context,
            )
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(str(e) or type(e).__name__, operation, context)
        except ValueError as e:
            raise UpstreamUnavailableError(f"malformed response: {e}", operation, context)
