"""Unit tests for src/nim/game.py"""

from datetime import datetime

import pytest

from src.core.exceptions import (
    GameAlreadyOverError,
    GameStateError,
    IllegalMoveError,
    InvalidConfigurationError,
)
from src.core.models import GameModel
from src.core.shared_types import Difficulty, HintCategory, Player, Status
from src.nim.engine import HeapSet, apply_move
from src.nim.game import NimGame

PLAYERS = ("Ahab", "Ishmael")


@pytest.fixture
def classic_game() -> NimGame:
    return NimGame.new_game([3, 5, 7, 9], PLAYERS)


# -- CREATION LOGIC --
def test_new_game(classic_game: NimGame) -> None:
    assert isinstance(classic_game.state, HeapSet)
    assert classic_game.players == {Player.FIRST: "Ahab", Player.SECOND: "Ishmael"}
    assert classic_game.status == Status.IN_PROGRESS
    assert classic_game.ai_opponent is False
    assert classic_game.difficulty == Difficulty.MEDIUM


def test_new_game_needs_two_players() -> None:
    with pytest.raises(InvalidConfigurationError):
        _ = NimGame.new_game([3, 4], ["solo"])


def test_game_creation_from_model_roundtrip(fixed_time: datetime) -> None:
    """Create a NimGame from a GameModel and convert back into GameModel"""
    expected_model = GameModel(
        heaps=[3, 5, 7, 1],
        current_player=2,
        game_over=False,
        winner=None,
        move_history=[
            {
                "heap_index": 3,
                "remove_count": 8,
                "player": 1,
                "timestamp": fixed_time.isoformat(),
            }
        ],
        registered_players={"1": "Ahab", "2": "Ishmael"},
        ai_opponent=True,
        difficulty="hard",
    )

    game = NimGame.from_model(expected_model)
    assert game.to_model() == expected_model


def test_game_from_model_builds_domain_objects(fixed_time: datetime) -> None:
    state = apply_move(HeapSet(heaps=(2, 2)), 0, 2, timestamp=fixed_time)
    model = NimGame(state=state, players={Player.FIRST: "a", Player.SECOND: "b"}).to_model()

    game = NimGame.from_model(model)
    assert game.state == state
    assert game.state.current_player is Player.SECOND
    assert game.difficulty is Difficulty.MEDIUM


@pytest.mark.parametrize(
    "changes",
    [
        {"difficulty": "impossible"},
        {"registered_players": {"3": "who?"}},
        {"registered_players": {"first": "who?"}},
        {"game_over": True, "winner": 1},  # heaps are not empty
    ],
)
def test_game_from_invalid_model(changes: dict) -> None:
    model = NimGame.new_game([1, 2], PLAYERS).to_model()
    for field_name, value in changes.items():
        setattr(model, field_name, value)
    with pytest.raises(GameStateError):
        _ = NimGame.from_model(model)


# -- PLAYING --
def test_make_move(classic_game: NimGame) -> None:
    classic_game.make_move(3, 8)
    assert classic_game.state.heaps == (3, 5, 7, 1)
    assert classic_game.state.current_player == Player.SECOND


def test_failed_move_keeps_state(classic_game: NimGame) -> None:
    before = classic_game.state
    with pytest.raises(IllegalMoveError):
        classic_game.make_move(0, 4)
    assert classic_game.state is before


def test_select_object(classic_game: NimGame) -> None:
    """Clicking object 1 in heap 2 (7 objects) takes objects 1..6."""
    classic_game.select_object(heap_index=2, object_index=1)
    assert classic_game.state.heaps == (3, 5, 1, 9)
    assert classic_game.state.move_history[-1].remove_count == 6


def test_select_object_after_game_over() -> None:
    game = NimGame.new_game([1], PLAYERS)
    game.select_object(0, 0)
    with pytest.raises(GameAlreadyOverError):
        game.select_object(0, 0)


def test_winner_name() -> None:
    game = NimGame.new_game([1], PLAYERS)
    assert game.winner_name is None
    game.make_move(0, 1)
    assert game.status == Status.GAME_OVER
    assert game.winner_name == "Ishmael"


def test_is_ai_turn() -> None:
    game = NimGame.new_game([2, 2], PLAYERS, ai_opponent=True)
    assert game.is_ai_turn is False
    game.make_move(0, 1)
    assert game.is_ai_turn is True

    human_only = NimGame.new_game([2, 2], PLAYERS)
    human_only.make_move(0, 1)
    assert human_only.is_ai_turn is False


def test_hint_and_legal_moves(classic_game: NimGame) -> None:
    hint = classic_game.hint()
    assert hint.category == HintCategory.WINNING
    assert (hint.target_heap_index, hint.remove_count) in classic_game.legal_moves()


def test_reset(classic_game: NimGame) -> None:
    classic_game.make_move(0, 3)
    classic_game.make_move(1, 2)
    classic_game.reset()
    assert classic_game.state.heaps == (3, 5, 7, 9)
    assert classic_game.state.move_history == ()
    assert classic_game.state.current_player == Player.FIRST
    assert classic_game.players == {Player.FIRST: "Ahab", Player.SECOND: "Ishmael"}
