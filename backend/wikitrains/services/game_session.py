"""Game Session Handler: turns one connection's client commands into server events.

Invariants:
    - One handler (and one GameState) per connection; discarded on disconnect
    - initGame draws slots within the stored count of each tier (slots are dense 0..n-1),
      then reads 1 tierTwo + end_candidates distinct tierOne slots concurrently and
      emits all of them or nothing
    - InvalidCommandError is logged and swallowed: the client receives no event
    - Every other WikiTrainsError becomes exactly one "error" event, and the event the
      command would have produced (initArticles / newChoices) is not emitted
    - Reaching the ending article emits gameComplete instead of new choices
    - A move is recorded in the path only after its link choices were fetched; a failed
      move leaves path and move count untouched

Design Decisions:
    - handle() is an async generator of event dicts, the route only serializes and sends
    - Collaborators arrive through GameServices; rng injectable for deterministic draws
"""

import asyncio
import logging
import random
from typing import AsyncGenerator

from wikitrains.core.domain_types import ClientEvent, ConnectionId, ServerEvent, Tier
from wikitrains.core.errors import (
    ArticleNotCachedError,
    InvalidCommandError,
    WikiTrainsError,
)
from wikitrains.core.game_state import GameState
from wikitrains.core.sampling import draw_game_indices
from wikitrains.schemas.game import ClientMessage
from wikitrains.services.game_services import GameServices

logger = logging.getLogger(__name__)


def _event(event: ServerEvent, data) -> dict:
    return {"type": event.value, "data": data}


class GameSessionHandler:
    """Per-connection game logic."""

    def __init__(
        self,
        services: GameServices,
        connection_id: ConnectionId,
        rng: random.Random | None = None,
    ):
        self._services = services
        self.connection_id = connection_id
        self._rng = rng or random.Random()  # nosec B311
        self.state = GameState()

    async def handle(self, message: ClientMessage) -> AsyncGenerator[dict, None]:
        """Process one client command, yielding the events to send back."""
        log_extra = {"connection_id": self.connection_id, "event_type": message.type.value}
        try:
            if message.type == ClientEvent.INIT_GAME:
                yield await self._init_game()
            elif message.type == ClientEvent.ENDING_ARTICLE_CHOSEN:
                self._choose_ending(message.title)
            elif message.type == ClientEvent.NEXT_ARTICLE_CHOSEN:
                yield await self._next_article(message.title)
        except InvalidCommandError as e:
            logger.info(f"Ignored command: {e.message}", extra=log_extra)
        except WikiTrainsError as e:
            logger.error(
                f"{message.type.value} failed: {e.message}",
                extra={**log_extra, "error_code": e.code},
            )
            e.context.connection_id = self.connection_id
            yield e.to_event()

    async def _init_game(self) -> dict:
        end_count = self._services.settings.end_candidates
        cache = self._services.cache
        tier_one_size, tier_two_size = await asyncio.gather(
            cache.count(Tier.ONE), cache.count(Tier.TWO),
        )
        if tier_two_size < 1:
            raise ArticleNotCachedError(Tier.TWO.value, "0")
        if tier_one_size < end_count:
            raise ArticleNotCachedError(Tier.ONE.value, str(tier_one_size))
        start, ends = draw_game_indices(
            tier_one_size, tier_two_size, end_count, self._rng,
        )
        articles = await asyncio.gather(
            cache.get(Tier.TWO, start),
            *(cache.get(Tier.ONE, i) for i in ends),
        )
        self.state.start_round(articles[0], list(articles[1:]))
        logger.info(
            f"Game initialized from {articles[0].title}",
            extra={"connection_id": self.connection_id},
        )
        return _event(
            ServerEvent.INIT_ARTICLES, [a.to_payload() for a in articles],
        )

    def _choose_ending(self, title: str) -> None:
        self.state.choose_ending_article(title)
        logger.info(
            f"Ending article: {title}",
            extra={"connection_id": self.connection_id, "title": title},
        )

    async def _next_article(self, title: str) -> dict:
        if self.state.is_finishing_move(title):
            self.state.record_move(title)
            logger.info(
                f"Reached {title} in {self.state.moves} move(s)",
                extra={"connection_id": self.connection_id, "title": title},
            )
            return _event(ServerEvent.GAME_COMPLETE, {
                "endingArticle": title,
                "path": list(self.state.path),
                "moves": self.state.moves,
            })

        settings = self._services.settings
        choices = await self._services.pool_builder.linked_articles(
            title, settings.choices_per_move, settings.choice_min_views,
        )
        self.state.record_move(title)
        self.state.offer_choices(choices)
        return _event(ServerEvent.NEW_CHOICES, [a.to_payload() for a in choices])
