"""Game State: in-memory per-connection state of one WikiTrains round.

Invariants:
    - ending_article_title is set at most once per round and only to a title among
      current_choices at the moment of choosing
    - phase is derived, never stored: idle until a round starts, awaiting_end_choice until
      the ending article is chosen, in_progress afterwards, complete once reached
    - path starts with the start article; consecutive duplicates are not recorded
    - The ending article only completes the round when it was among the link choices
      last offered (linked_titles); other titles are taken as the client sends them
    - Rule violations raise InvalidCommandError; the caller decides to log and ignore

Design Decisions:
    - Dataclass with computed properties: pure, deterministic, testable without mocks
    - start_round() resets everything, so a repeated initGame begins a fresh round
    - is_finishing_move() validates without mutating, so callers can fetch the next
      choices first and record_move() only once the move succeeded
"""

from dataclasses import dataclass, field

from wikitrains.core.domain_types import Article, GamePhase
from wikitrains.core.errors import InvalidCommandError


@dataclass
class GameState:
    """Per-connection round state: pure dataclass, no IO."""

    start_article: Article | None = None
    current_choices: list[Article] = field(default_factory=list)
    ending_article_title: str | None = None
    path: list[str] = field(default_factory=list)
    linked_titles: list[str] = field(default_factory=list)
    completed: bool = False

    @property
    def phase(self) -> GamePhase:
        if self.start_article is None:
            return GamePhase.IDLE
        if self.completed:
            return GamePhase.COMPLETE
        if self.ending_article_title is None:
            return GamePhase.AWAITING_END_CHOICE
        return GamePhase.IN_PROGRESS

    @property
    def choice_titles(self) -> list[str]:
        return [a.title for a in self.current_choices]

    @property
    def current_title(self) -> str | None:
        return self.path[-1] if self.path else None

    @property
    def moves(self) -> int:
        return max(len(self.path) - 1, 0)

    def start_round(self, start: Article, end_candidates: list[Article]) -> None:
        self.start_article = start
        self.current_choices = list(end_candidates)
        self.ending_article_title = None
        self.path = [start.title]
        self.linked_titles = []
        self.completed = False

    def choose_ending_article(self, title: str) -> None:
        if self.ending_article_title is not None:
            raise InvalidCommandError(
                f"Ending article already chosen ({self.ending_article_title}); "
                f"ignoring {title!r}",
            )
        if title not in self.choice_titles:
            raise InvalidCommandError(
                f"{title!r} is not among the current choices",
            )
        self.ending_article_title = title

    def is_finishing_move(self, title: str) -> bool:
        """Validate a move to `title`; True when it reaches the ending article."""
        if self.phase in (GamePhase.IDLE, GamePhase.COMPLETE):
            raise InvalidCommandError(
                f"Cannot move to {title!r} while game is {self.phase.value}",
            )
        if self.ending_article_title is None or title != self.ending_article_title:
            return False
        if title not in self.linked_titles:
            raise InvalidCommandError(
                f"{title!r} was not offered from {self.current_title!r}",
            )
        return True

    def record_move(self, title: str) -> bool:
        """Record a navigation step. Returns True when the ending article is reached."""
        finishing = self.is_finishing_move(title)
        if title != self.current_title:
            self.path.append(title)
        self.completed = finishing
        return finishing

    def offer_choices(self, choices: list[Article]) -> None:
        self.current_choices = list(choices)
        self.linked_titles = [a.title for a in choices]
