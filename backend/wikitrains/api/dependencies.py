"""Shared FastAPI dependencies: the process-wide GameServices singleton.

Invariants:
    - GameServices built once per process, on first use, from Settings and db_manager
    - close_game_services() releases the shared HTTP client on shutdown

Design Decisions:
    - Lazy singleton like a shared API client: one httpx connection pool for all sockets
    - Tests replace it through app.dependency_overrides[get_game_services]
"""

from wikitrains.config import get_settings
from wikitrains.infrastructure.database import get_db_manager
from wikitrains.infrastructure.wikipedia_client import WikipediaClient
from wikitrains.services.game_services import GameServices, build_game_services

_game_services: GameServices | None = None


def get_game_services() -> GameServices:
    global _game_services
    if _game_services is None:
        _game_services = build_game_services(get_settings(), get_db_manager())
    return _game_services


async def close_game_services() -> None:
    global _game_services
    if _game_services is not None and isinstance(_game_services.source, WikipediaClient):
        await _game_services.source.aclose()
    _game_services = None
