"""
Nim engine: heap state, move legality, the end-of-game rule and the nim-sum hint.

All transitions are pure. A HeapSet is never modified; every operation that changes the game returns a new one.

---
End-of-game rule: misère. The player who removes the last object LOSES.
The hint, however, is the classic nim-sum (normal play) strategy. Both agree on every position except the ones where
all heaps hold at most one object, where the hint can point at a losing move. That mismatch is kept as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from functools import reduce
from operator import xor
from typing import Iterable, Optional, Sequence

from src.core.exceptions import (
    GameAlreadyOverError,
    GameStateError,
    IllegalMoveError,
    InvalidConfigurationError,
    MoveRejection,
)
from src.core.models import MoveRecord
from src.core.shared_types import HintCategory, Player

logger = logging.getLogger(__name__)

LOSING_POSITION_EXPLANATION = (
    "You are in a losing position. Take any move and hope your opponent makes a mistake."
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Move:
    heap_index: int
    remove_count: int
    player: Player
    timestamp: datetime

    def to_record(self) -> MoveRecord:
        return MoveRecord(
            heap_index=self.heap_index,
            remove_count=self.remove_count,
            player=int(self.player),
            timestamp=self.timestamp.isoformat(),
        )

    @classmethod
    def from_record(cls, record: MoveRecord) -> Move:
        try:
            return cls(
                heap_index=int(record["heap_index"]),
                remove_count=int(record["remove_count"]),
                player=Player(record["player"]),
                timestamp=datetime.fromisoformat(record["timestamp"]),
            )
        except (KeyError, ValueError, TypeError) as exc:
            raise GameStateError(f"Cannot read move record {record!r}.") from exc


@dataclass(frozen=True)
class HeapSet:
    """The complete state of one Nim game."""

    heaps: tuple[int, ...]
    current_player: Player = Player.FIRST
    game_over: bool = False
    winner: Optional[Player] = None
    move_history: tuple[Move, ...] = ()

    @property
    def remaining(self) -> int:
        return sum(self.heaps)


@dataclass(frozen=True)
class HintResult:
    category: HintCategory
    target_heap_index: int
    remove_count: int
    explanation: str


# --- ENGINE API ---
def new_game(heaps: Sequence[int]) -> HeapSet:
    """Start a game with the given heap sizes. Player 1 moves first."""
    starting_heaps = _validate_heaps(heaps)
    state = HeapSet(heaps=starting_heaps)
    if state.remaining == 0:
        # Nothing to take: the game is over before it starts, the end rule is applied with player 1 "to blame".
        state = _finish(state)
    logger.debug("New game with heaps %s", starting_heaps)
    return state


def nim_sum(heaps: Iterable[int]) -> int:
    """Bitwise XOR of all heap sizes."""
    return reduce(xor, heaps, 0)


def is_legal_move(state: HeapSet, heap_index: int, remove_count: int) -> bool:
    return _find_rejection(state, heap_index, remove_count) is None


def apply_move(
    state: HeapSet,
    heap_index: int,
    remove_count: int,
    timestamp: Optional[datetime] = None,
) -> HeapSet:
    """
    Take `remove_count` objects from heap `heap_index`.
    ----

    1. reject the move if it breaks a rule (state is left untouched)
    2. shrink the heap and record the move
    3. game over? the player who just moved loses. Otherwise pass the turn.
    """
    rejection = _find_rejection(state, heap_index, remove_count)
    if rejection is MoveRejection.GAME_OVER:
        raise GameAlreadyOverError("Cannot make a move. The game is already over.")
    if rejection is not None:
        raise IllegalMoveError(
            f"Cannot remove {remove_count} object(s) from heap {heap_index} of {list(state.heaps)}: {rejection}.",
            rejection,
        )

    heaps = list(state.heaps)
    heaps[heap_index] -= remove_count
    move = Move(
        heap_index=heap_index,
        remove_count=remove_count,
        player=state.current_player,
        timestamp=timestamp or utc_now(),
    )
    after_move = replace(
        state, heaps=tuple(heaps), move_history=(*state.move_history, move)
    )
    logger.debug(
        "Player %d removed %d from heap %d -> %s",
        move.player,
        remove_count,
        heap_index,
        after_move.heaps,
    )

    if after_move.remaining == 0:
        return _finish(after_move)
    return replace(after_move, current_player=state.current_player.opponent)


def compute_optimal_move(state: HeapSet) -> HintResult:
    """
    Nim-sum strategy
    ----

    * nim-sum 0: no move wins, suggest taking a single object (heap 0, or the first non-empty heap)
    * otherwise: the first heap (lowest index) where heap XOR nim-sum is smaller than the heap itself.
    Reducing that heap to heap XOR nim-sum leaves a position with nim-sum 0.
    """
    if state.game_over:
        raise GameAlreadyOverError("Cannot compute a hint. The game is already over.")

    total = nim_sum(state.heaps)
    if total == 0:
        fallback_index = next(i for i, size in enumerate(state.heaps) if size > 0)
        return HintResult(
            category=HintCategory.LOSING_FALLBACK,
            target_heap_index=fallback_index,
            remove_count=1,
            explanation=LOSING_POSITION_EXPLANATION,
        )

    for index, size in enumerate(state.heaps):
        target = size ^ total
        if target < size:
            return HintResult(
                category=HintCategory.WINNING,
                target_heap_index=index,
                remove_count=size - target,
                explanation=f"Remove {size - target} object(s) from row {index + 1}.",
            )

    # A non-zero nim-sum always has a heap with its highest set bit.
    raise AssertionError(f"No reducing heap found for nim-sum {total} in {state.heaps}")


# --- SUPPORTING OPERATIONS ---
def legal_moves(state: HeapSet) -> list[tuple[int, int]]:
    """All (heap_index, remove_count) pairs that can be played right now."""
    if state.game_over:
        return []
    return [
        (index, count)
        for index, size in enumerate(state.heaps)
        for count in range(1, size + 1)
    ]


def remove_count_for_selection(state: HeapSet, heap_index: int, object_index: int) -> int:
    """Selecting an object removes it together with every object to its right in the same heap."""
    if not _is_plain_int(heap_index) or not 0 <= heap_index < len(state.heaps):
        raise IllegalMoveError(
            f"There is no heap {heap_index}. Heaps: {list(state.heaps)}",
            MoveRejection.HEAP_INDEX_OUT_OF_RANGE,
        )
    heap_size = state.heaps[heap_index]
    if not _is_plain_int(object_index) or not 0 <= object_index < heap_size:
        raise IllegalMoveError(
            f"There is no object {object_index} in heap {heap_index} (size {heap_size}).",
            MoveRejection.REMOVE_COUNT_OUT_OF_RANGE,
        )
    return heap_size - object_index


def initial_heaps(state: HeapSet) -> tuple[int, ...]:
    """Undo every recorded move to recover the starting heaps."""
    heaps = list(state.heaps)
    for move in state.move_history:
        heaps[move.heap_index] += move.remove_count
    return tuple(heaps)


def reset(state: HeapSet) -> HeapSet:
    """Same heaps as at the start of the game, fresh history."""
    return new_game(initial_heaps(state))


def restore(
    heaps: Sequence[int],
    current_player: int,
    game_over: bool,
    winner: Optional[int],
    move_history: Iterable[Move],
) -> HeapSet:
    """Rebuild a HeapSet from stored values, refusing anything the engine could never have produced."""
    try:
        checked_heaps = _validate_heaps(heaps)
    except InvalidConfigurationError as exc:
        raise GameStateError(f"Stored heaps are invalid: {exc}") from exc

    try:
        player = Player(current_player)
        winning_player = None if winner is None else Player(winner)
    except ValueError as exc:
        raise GameStateError(
            f"Unknown player in stored game: current={current_player!r}, winner={winner!r}."
        ) from exc

    is_empty = sum(checked_heaps) == 0
    if game_over != is_empty:
        raise GameStateError(
            f"Stored game_over={game_over} does not match heaps {list(checked_heaps)}."
        )
    if game_over != (winning_player is not None):
        raise GameStateError(
            f"Stored winner={winner!r} does not match game_over={game_over}."
        )

    history = tuple(move_history)
    _check_history(checked_heaps, history)

    # Player 1 opens. After each move the turn passes, except after the move that ends the game.
    expected_player = Player.FIRST
    if history:
        last_mover = history[-1].player
        expected_player = last_mover if game_over else last_mover.opponent
    if player != expected_player:
        raise GameStateError(
            f"Stored current_player={current_player!r} does not follow from the move history."
        )
    if winning_player is not None and winning_player != player.opponent:
        raise GameStateError(
            f"Stored winner={winner!r} took the last object, so cannot have won."
        )

    return HeapSet(
        heaps=checked_heaps,
        current_player=player,
        game_over=game_over,
        winner=winning_player,
        move_history=history,
    )


# -- PRIVATE HELPERS ---
def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_heaps(heaps: Sequence[int]) -> tuple[int, ...]:
    if len(heaps) == 0:
        raise InvalidConfigurationError("A game needs at least one heap.")
    for size in heaps:
        if not _is_plain_int(size):
            raise InvalidConfigurationError(f"Heap sizes must be integers, got {size!r}.")
        if size < 0:
            raise InvalidConfigurationError(f"Heap sizes cannot be negative, got {size}.")
    return tuple(heaps)


def _check_history(heaps: tuple[int, ...], history: tuple[Move, ...]) -> None:
    """Every stored move must be one apply_move could have recorded, starting from non-negative heaps."""
    for number, move in enumerate(history):
        if not 0 <= move.heap_index < len(heaps):
            raise GameStateError(
                f"Stored move {number} refers to heap {move.heap_index}, which does not exist."
            )
        if move.remove_count < 1:
            raise GameStateError(
                f"Stored move {number} removes {move.remove_count} object(s). At least one is required."
            )
        expected_player = Player.FIRST if number % 2 == 0 else Player.SECOND
        if move.player != expected_player:
            raise GameStateError(
                f"Stored move {number} was made by player {move.player}, expected player {expected_player}."
            )

    starting_heaps = list(heaps)
    for move in history:
        starting_heaps[move.heap_index] += move.remove_count
    # Starting heaps are never negative.
    if any(size < 0 for size in starting_heaps):
        raise GameStateError(
            f"Stored move history leads back to negative starting heaps {starting_heaps}."
        )


def _find_rejection(
    state: HeapSet, heap_index: int, remove_count: int
) -> Optional[MoveRejection]:
    if state.game_over:
        return MoveRejection.GAME_OVER
    if not _is_plain_int(heap_index) or not 0 <= heap_index < len(state.heaps):
        return MoveRejection.HEAP_INDEX_OUT_OF_RANGE
    if not _is_plain_int(remove_count) or not 1 <= remove_count <= state.heaps[heap_index]:
        return MoveRejection.REMOVE_COUNT_OUT_OF_RANGE
    return None


def _finish(state: HeapSet) -> HeapSet:
    """Misère: whoever took the last object (the current player) loses."""
    winner = state.current_player.opponent
    logger.debug("Game over. Player %d wins.", winner)
    return replace(state, game_over=True, winner=winner)
