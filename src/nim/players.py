"""
Computer opponents.

Choosing a move is policy, not a rule of the game: the engine only answers "what is optimal" and "what is legal".
Lower difficulty levels simply play worse by mixing in uniformly random legal moves.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

import src.nim.engine as engine
from src.core.config import AI_THINK_DELAY, MEDIUM_OPTIMAL_PROBABILITY
from src.core.exceptions import GameAlreadyOverError, InvalidConfigurationError
from src.core.shared_types import Difficulty
from src.nim.engine import HeapSet

logger = logging.getLogger(__name__)

ChosenMove = tuple[int, int]  # (heap_index, remove_count)


class Strategy(Protocol):
    def choose(self, state: HeapSet) -> ChosenMove: ...


class OptimalStrategy:
    """Always play the nim-sum suggestion."""

    def choose(self, state: HeapSet) -> ChosenMove:
        hint = engine.compute_optimal_move(state)
        return hint.target_heap_index, hint.remove_count


@dataclass
class RandomStrategy:
    """Pick a random non-empty heap, then take a random number of objects from it."""

    rng: random.Random = field(default_factory=random.Random)

    def choose(self, state: HeapSet) -> ChosenMove:
        if state.game_over:
            raise GameAlreadyOverError("Cannot choose a move. The game is already over.")
        available = [index for index, size in enumerate(state.heaps) if size > 0]
        heap_index = self.rng.choice(available)
        remove_count = self.rng.randint(1, state.heaps[heap_index])
        return heap_index, remove_count


@dataclass
class MixedStrategy:
    """Optimal with probability `optimal_probability`, random otherwise."""

    optimal_probability: float
    rng: random.Random = field(default_factory=random.Random)

    def choose(self, state: HeapSet) -> ChosenMove:
        if self.rng.random() < self.optimal_probability:
            return OptimalStrategy().choose(state)
        return RandomStrategy(self.rng).choose(state)


def strategy_for(difficulty: Difficulty, rng: Optional[random.Random] = None) -> Strategy:
    rng = rng or random.Random()
    match difficulty:
        case Difficulty.EASY:
            return RandomStrategy(rng)
        case Difficulty.MEDIUM:
            return MixedStrategy(MEDIUM_OPTIMAL_PROBABILITY, rng)
        case Difficulty.HARD:
            return OptimalStrategy()
    raise InvalidConfigurationError(f"Unknown difficulty: {difficulty!r}")


@dataclass
class AIPlayer:
    strategy: Strategy
    think_delay: float = AI_THINK_DELAY
    sleep: Callable[[float], None] = time.sleep

    def choose_move(self, state: HeapSet) -> ChosenMove:
        if self.think_delay > 0:
            self.sleep(self.think_delay)
        heap_index, remove_count = self.strategy.choose(state)
        logger.debug(
            "%s chose to remove %d from heap %d",
            type(self.strategy).__name__,
            remove_count,
            heap_index,
        )
        return heap_index, remove_count

    def play(self, state: HeapSet) -> HeapSet:
        """Choose a move and apply it."""
        heap_index, remove_count = self.choose_move(state)
        return engine.apply_move(state, heap_index, remove_count)
