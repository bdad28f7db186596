"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Player(IntEnum):
    FIRST = 1
    SECOND = 2

    @property
    def opponent(self) -> "Player":
        return Player.SECOND if self is Player.FIRST else Player.FIRST


class HintCategory(StrEnum):
    WINNING = "winning"
    LOSING_FALLBACK = "losing-fallback"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    GAME_OVER = "game over"
