"""Game State tests: per-connection round lifecycle.

Tests cover:
    - Phase derivation: idle -> awaiting_end_choice -> in_progress -> complete
    - Ending article accepted only once and only from current choices
    - Moves before a round starts are rejected
    - Path bookkeeping and completion detection (ending must have been offered)
    - start_round resets a finished round
"""

import pytest

from wikitrains.core.domain_types import Article, GamePhase
from wikitrains.core.errors import InvalidCommandError
from wikitrains.core.game_state import GameState


def _article(title: str) -> Article:
    return Article(title=title, description=f"About {title}", image_url=f"https://img/{title}")


def _started(*choices: str) -> GameState:
    state = GameState()
    state.start_round(_article("Start"), [_article(c) for c in choices])
    return state


def test_new_state_is_idle():
    assert GameState().phase == GamePhase.IDLE


def test_start_round_awaits_end_choice():
    state = _started("A", "B")
    assert state.phase == GamePhase.AWAITING_END_CHOICE
    assert state.choice_titles == ["A", "B"]
    assert state.path == ["Start"]


def test_choose_ending_article_among_choices():
    state = _started("A", "B")
    state.choose_ending_article("B")
    assert state.ending_article_title == "B"
    assert state.phase == GamePhase.IN_PROGRESS


def test_second_ending_choice_is_rejected_and_first_sticks():
    state = _started("A", "B")
    state.choose_ending_article("A")
    with pytest.raises(InvalidCommandError):
        state.choose_ending_article("B")
    assert state.ending_article_title == "A"


def test_ending_choice_outside_choices_is_rejected():
    state = _started("A", "B")
    with pytest.raises(InvalidCommandError):
        state.choose_ending_article("Z")
    assert state.ending_article_title is None


def test_ending_choice_before_round_is_rejected():
    with pytest.raises(InvalidCommandError):
        GameState().choose_ending_article("A")


def test_move_before_round_is_rejected():
    with pytest.raises(InvalidCommandError):
        GameState().record_move("A")


def test_moves_extend_path_without_consecutive_duplicates():
    state = _started("A", "B")
    state.choose_ending_article("A")
    assert state.record_move("Start") is False
    assert state.record_move("Ohio") is False
    assert state.record_move("Ohio") is False
    assert state.path == ["Start", "Ohio"]
    assert state.moves == 1


def test_reaching_ending_article_completes_round():
    state = _started("A", "B")
    state.choose_ending_article("B")
    state.record_move("Ohio")
    state.offer_choices([_article("B"), _article("C")])
    assert state.record_move("B") is True
    assert state.phase == GamePhase.COMPLETE
    assert state.path == ["Start", "Ohio", "B"]
    assert state.moves == 2


def test_ending_article_not_offered_is_rejected():
    state = _started("A", "B")
    state.choose_ending_article("B")
    with pytest.raises(InvalidCommandError):
        state.record_move("B")
    assert state.path == ["Start"]
    assert state.phase == GamePhase.IN_PROGRESS


def test_is_finishing_move_does_not_touch_path():
    state = _started("A", "B")
    state.choose_ending_article("B")
    state.offer_choices([_article("B")])
    assert state.is_finishing_move("Ohio") is False
    assert state.is_finishing_move("B") is True
    assert state.path == ["Start"]
    assert state.phase == GamePhase.IN_PROGRESS


def test_move_after_completion_is_rejected():
    state = _started("A")
    state.choose_ending_article("A")
    state.offer_choices([_article("A")])
    state.record_move("A")
    with pytest.raises(InvalidCommandError):
        state.record_move("Ohio")


def test_start_round_resets_previous_round():
    state = _started("A")
    state.choose_ending_article("A")
    state.offer_choices([_article("A")])
    state.record_move("A")
    state.start_round(_article("Other"), [_article("C")])
    assert state.phase == GamePhase.AWAITING_END_CHOICE
    assert state.ending_article_title is None
    assert state.path == ["Other"]
    assert state.linked_titles == []


def test_offer_choices_replaces_current_choices():
    state = _started("A", "B")
    state.offer_choices([_article("X")])
    assert state.choice_titles == ["X"]
    assert state.linked_titles == ["X"]
