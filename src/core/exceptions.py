"""
Custom exceptions used across layers.

Every error raised on purpose by this project derives from GameError, so the layers above the domain
can catch a single type and translate it into a user-facing message.
"""

from enum import StrEnum


class MoveRejection(StrEnum):
    """Which rule a rejected move violated."""

    HEAP_INDEX_OUT_OF_RANGE = "heap index out of range"
    REMOVE_COUNT_OUT_OF_RANGE = "remove count out of range"
    GAME_OVER = "game is already over"


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game."""


class InvalidConfigurationError(GameError):
    """A game (or the application) was configured with values that cannot describe a Nim game."""


class GameStateError(GameError):
    """The requested action does not fit the current state of the game."""


class IllegalMoveError(GameError):
    """A move was rejected. `reason` tells the caller which rule was broken."""

    def __init__(self, message: str, reason: MoveRejection) -> None:
        super().__init__(message)
        self.reason = reason


class GameAlreadyOverError(IllegalMoveError):
    """Any move or hint requested after the last object has been taken."""

    def __init__(self, message: str = "The game is already over.") -> None:
        super().__init__(message, MoveRejection.GAME_OVER)


class InvalidRequestError(GameError):
    """Request data failed validation. Not a ValueError, so it leaves pydantic validators unwrapped."""


class RepositoryError(GameError):
    """Persistence layer could not find or store a record."""
