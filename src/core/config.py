"""
Application settings, read once from environment variables.

Every value has a sensible default so tests and local runs need no environment at all.
"""

import os

from src.core.exceptions import InvalidConfigurationError


def parse_heaps(raw: str) -> tuple[int, ...]:
    """'3,5,7,9' -> (3, 5, 7, 9)"""
    try:
        heaps = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Cannot read heap sizes from {raw!r}. Expected comma-separated integers."
        ) from exc
    if not heaps or any(size < 0 for size in heaps):
        raise InvalidConfigurationError(
            f"Heap sizes must be a non-empty list of non-negative integers, got {raw!r}."
        )
    return heaps


def parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    raise InvalidConfigurationError(f"Cannot interpret {raw!r} as a boolean.")


def parse_positive_int(raw: str, name: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < 1:
        raise InvalidConfigurationError(f"{name} must be at least 1, got {value}.")
    return value


def parse_seconds(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be a number, got {raw!r}.") from exc
    if value < 0:
        raise InvalidConfigurationError(f"{name} cannot be negative, got {value}.")
    return value


# --- Persistence ---
DATABASE_URL = os.environ.get("NIM_DATABASE_URL", "sqlite:///nim.sqlite3")
DB_ECHO = parse_bool(os.environ.get("NIM_DB_ECHO", "false"))

# --- Game defaults ---
# The classic 4-row board: 3, 5, 7 and 9 objects.
DEFAULT_HEAPS = parse_heaps(os.environ.get("NIM_DEFAULT_HEAPS", "3,5,7,9"))
MAX_HEAPS = parse_positive_int(os.environ.get("NIM_MAX_HEAPS", "10"), "NIM_MAX_HEAPS")
MAX_HEAP_SIZE = parse_positive_int(
    os.environ.get("NIM_MAX_HEAP_SIZE", "50"), "NIM_MAX_HEAP_SIZE"
)
DEFAULT_PLAYER_NAMES = ("Player 1", "Player 2")

# --- AI opponent ---
# Cosmetic pause before the computer moves. Has no effect on which move is chosen.
AI_THINK_DELAY = parse_seconds(
    os.environ.get("NIM_AI_THINK_DELAY", "0.0"), "NIM_AI_THINK_DELAY"
)
MEDIUM_OPTIMAL_PROBABILITY = 0.5

# --- Logging ---
LOG_LEVEL = os.environ.get("NIM_LOG_LEVEL", "INFO").upper()
