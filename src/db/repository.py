"""
Storage contract the NimService depends on.

SQLGameRepository (sql_repository.py) is the real implementation. The service tests use a dict-backed one.
Games are identified by a UUID handed out by the repository on creation.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    def get_game(self, game_id: UUID) -> GameModel | None:
        """Stored game, or None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game. Returns what was stored and the new ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored game with a newer state. None if the ID is unknown."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game. Returns the removed record, or None if the ID is unknown."""
        ...
