"""Unit tests for src/api/models.py"""

from uuid import UUID, uuid4

import pytest

from src.api.models import CreateGameRequest, MoveRequest, SelectObjectRequest
from src.core.config import DEFAULT_HEAPS, MAX_HEAP_SIZE, MAX_HEAPS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_create_request_defaults() -> None:
    request = CreateGameRequest()
    assert request.heaps == list(DEFAULT_HEAPS)
    assert request.player_names == ("Player 1", "Player 2")
    assert request.ai_opponent is False
    assert request.difficulty == Difficulty.MEDIUM


def test_valid_create_request() -> None:
    request = CreateGameRequest(
        heaps=[1, 0, 4],
        player_names=("  Queequeg ", "Starbuck"),
        ai_opponent=True,
        difficulty="hard",
    )
    assert request.heaps == [1, 0, 4]
    assert request.player_names == ("Queequeg", "Starbuck")
    assert request.difficulty == Difficulty.HARD


@pytest.mark.parametrize(
    "invalid_heaps",
    [
        [],  # no heaps
        [3, -1],  # negative heap
        [MAX_HEAP_SIZE + 1],  # too big to play
        [1] * (MAX_HEAPS + 1),  # too many heaps
    ],
)
def test_invalid_heaps(invalid_heaps: list[int]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(heaps=invalid_heaps)


@pytest.mark.parametrize(
    "invalid_names",
    [
        ("", "Starbuck"),
        ("Starbuck", "   "),
        ("Starbuck", "Starbuck"),
    ],
)
def test_invalid_player_names(invalid_names: tuple[str, str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(player_names=invalid_names)


# -- Validation - MoveRequest --
def test_valid_move_request(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, heap_index=2, remove_count=3)
    assert request.heap_index == 2
    assert request.remove_count == 3


@pytest.mark.parametrize(
    "heap_index, remove_count",
    [
        (-1, 1),
        (0, 0),
        (0, -5),
    ],
)
def test_invalid_move_request(mock_id: UUID, heap_index: int, remove_count: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, heap_index=heap_index, remove_count=remove_count)


# -- Validation - SelectObjectRequest --
def test_valid_select_request(mock_id: UUID) -> None:
    request = SelectObjectRequest(game_id=mock_id, heap_index=0, object_index=0)
    assert request.object_index == 0


@pytest.mark.parametrize("heap_index, object_index", [(-1, 0), (0, -1)])
def test_invalid_select_request(mock_id: UUID, heap_index: int, object_index: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SelectObjectRequest(
            game_id=mock_id, heap_index=heap_index, object_index=object_index
        )
