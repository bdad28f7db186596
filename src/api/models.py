"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.config import (
    DEFAULT_HEAPS,
    DEFAULT_PLAYER_NAMES,
    MAX_HEAP_SIZE,
    MAX_HEAPS,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, HintCategory, Status

PlayerNumber = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    heaps: list[int] = list(DEFAULT_HEAPS)
    player_names: tuple[str, str] = DEFAULT_PLAYER_NAMES
    ai_opponent: bool = False
    difficulty: Difficulty = Difficulty.MEDIUM

    @field_validator("heaps")
    @classmethod
    def validate_heaps(cls, value: list[int]) -> list[int]:
        if len(value) == 0:
            raise InvalidRequestError("A game needs at least one heap.")
        if len(value) > MAX_HEAPS:
            raise InvalidRequestError(
                f"At most {MAX_HEAPS} heaps are supported, got {len(value)}."
            )
        if any(size < 0 or size > MAX_HEAP_SIZE for size in value):
            raise InvalidRequestError(
                f"Heap sizes must be between 0 and {MAX_HEAP_SIZE}, got {value}."
            )
        return value

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: tuple[str, str]) -> tuple[str, str]:
        first, second = (name.strip() for name in value)
        if not first or not second:
            raise InvalidRequestError("Player names cannot be empty.")
        if first == second:
            raise InvalidRequestError(
                f"Both players are called {first!r}. Pick two different names."
            )
        return first, second


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    heap_index: int
    remove_count: int

    @field_validator("heap_index")
    @classmethod
    def validate_heap_index(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"heap_index cannot be negative, got {value}.")
        return value

    @field_validator("remove_count")
    @classmethod
    def validate_remove_count(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(
                f"At least one object must be removed, got remove_count={value}."
            )
        return value


class SelectObjectRequest(BaseModel):
    """A click on an object: it and everything to its right in the heap gets removed."""

    game_id: UUID
    heap_index: int
    object_index: int

    @field_validator(*["heap_index", "object_index"])
    @classmethod
    def validate_index(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Indices cannot be negative, got {value}.")
        return value


class HintRequest(BaseModel):
    game_id: UUID


class AITurnRequest(BaseModel):
    game_id: UUID


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    heap_index: int
    remove_count: int
    player: int
    timestamp: str


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PlayerNumber, PlayerName]
    heaps: list[int]
    starting_heaps: list[int]
    current_player: int
    status: Status
    winner: Optional[int]
    winner_name: Optional[str]
    ai_opponent: bool
    difficulty: Difficulty
    move_history: list[MoveResponse]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    current_player: int
    legal_moves: list[tuple[int, int]]


class HintResponse(BaseModel):
    game_id: UUID
    category: HintCategory
    target_heap_index: int
    remove_count: int
    explanation: str
    nim_sum: int
