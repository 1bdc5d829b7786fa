"""Wiki Response Decoding: pure extraction of scalars from MediaWiki action API payloads.

Invariants:
    - Pure functions: no IO, no async
    - Absent or null fields resolve to explicit defaults (0 views, "" text, [] lists),
      never to None
    - Page-keyed responses are read from their first page only (one title per request)
    - Structurally broken payloads (no "query") raise ValueError; the HTTP adapter maps
      that to UpstreamUnavailableError

Design Decisions:
    - One decoder per endpoint, each built on _field(): a single typed
      "optional field with default" step instead of scattered None checks
    - Page views use the most recent non-null day; days come back as ISO dates so
      lexical order is chronological order
"""

from typing import Any, TypeVar

T = TypeVar("T")


def format_title(title: str) -> str:
    """Spaces to underscores, the form the API keys titles by."""
    return title.replace(" ", "_")


def _field(mapping: Any, key: str, default: T) -> T:
    """Read an optional field, falling back to default when absent, null, or mistyped."""
    if not isinstance(mapping, dict):
        return default
    value = mapping.get(key)
    if value is None or not isinstance(value, type(default)):
        return default
    return value


def _query(payload: Any) -> dict:
    query = payload.get("query") if isinstance(payload, dict) else None
    if not isinstance(query, dict):
        raise ValueError("response has no 'query' object")
    return query


def first_page(payload: Any) -> dict:
    """Return the first page object of a page-id-keyed response."""
    pages = _field(_query(payload), "pages", {})
    for page in pages.values():
        if isinstance(page, dict):
            return page
    return {}


def decode_random_titles(payload: Any) -> list[str]:
    entries = _field(_query(payload), "random", [])
    return [
        e["title"] for e in entries
        if isinstance(e, dict) and isinstance(e.get("title"), str)
    ]


def decode_page_views(payload: Any) -> int:
    """Views on the most recent day that has data; 0 when no day does.

    The newest day of the window is often still null while Wikimedia processes it.
    """
    views = _field(first_page(payload), "pageviews", {})
    for day in sorted(views, reverse=True):
        count = _field(views, day, -1)
        if count >= 0:
            return count
    return 0


def decode_description(payload: Any) -> str:
    return _field(first_page(payload), "description", "")


def decode_image_url(payload: Any) -> str:
    original = _field(first_page(payload), "original", {})
    return _field(original, "source", "")


def decode_links(payload: Any) -> list[str]:
    links = _field(first_page(payload), "links", [])
    return [
        link["title"] for link in links
        if isinstance(link, dict) and isinstance(link.get("title"), str)
    ]
