"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - Article is frozen: once built by the classifier it is never mutated
    - Article wire/persisted shape is {"title", "description", "imageURL"}
    - All valid states and event names encoded as Enums (no raw string matching)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (socket envelopes are JSON)
    - Frozen dataclass over Pydantic for Article: core stays dependency-free
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

ConnectionId = NewType("ConnectionId", str)
ViewCount = NewType("ViewCount", int)


@dataclass(frozen=True)
class Article:
    """A curated Wikipedia article as shown to the player."""
    title: str
    description: str
    image_url: str

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "imageURL": self.image_url,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "Article":
        return cls(
            title=payload["title"],
            description=payload["description"],
            image_url=payload["imageURL"],
        )


# ─── Enums ───────────────────────────────────────────────────────

class Tier(str, Enum):
    """Popularity buckets of the article cache."""
    ONE = "tierOne"
    TWO = "tierTwo"


class GamePhase(str, Enum):
    """Per-connection game lifecycle."""
    IDLE = "idle"
    AWAITING_END_CHOICE = "awaiting_end_choice"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class ClientEvent(str, Enum):
    """Commands the game client sends over the socket."""
    INIT_GAME = "initGame"
    ENDING_ARTICLE_CHOSEN = "endingArticleChosen"
    NEXT_ARTICLE_CHOSEN = "nextArticleChosen"


class ServerEvent(str, Enum):
    """Events the server emits over the socket."""
    INIT_ARTICLES = "initArticles"
    NEW_CHOICES = "newChoices"
    GAME_COMPLETE = "gameComplete"
    ERROR = "error"
