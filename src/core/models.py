"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)

Everything in here is JSON-compatible: lists, ints, strings and None only.
"""

from dataclasses import dataclass, field
from typing import Optional, TypedDict

# Type aliases to make GameModel easier to read
PlayerNumber = str
PlayerName = str


class MoveRecord(TypedDict):
    heap_index: int
    remove_count: int
    player: int
    timestamp: str  # ISO-8601, UTC


@dataclass
class GameModel:
    """Transport-safe representation of a Nim game used between API, Service, DB, and Game layers."""

    heaps: list[int]
    current_player: int
    game_over: bool
    winner: Optional[int]
    move_history: list[MoveRecord]
    registered_players: dict[PlayerNumber, PlayerName] = field(default_factory=dict)
    ai_opponent: bool = False
    difficulty: str = "medium"
