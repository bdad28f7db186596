"""
The NimGame class is the entrypoint into the domain layer for the service layer.
It couples the engine state (HeapSet) with the session information a real game needs: who is playing and whether
player 2 is the computer. It converts to and from the GameModel the Service passes around.
"""

from dataclasses import dataclass
from typing import Optional, Self, Sequence

import src.nim.engine as engine
from src.core.exceptions import (
    GameAlreadyOverError,
    GameStateError,
    InvalidConfigurationError,
)
from src.core.models import GameModel
from src.core.shared_types import Difficulty, Player, Status
from src.nim.engine import HeapSet, HintResult, Move


@dataclass
class NimGame:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    state: HeapSet
    players: dict[Player, str]
    ai_opponent: bool = False
    difficulty: Difficulty = Difficulty.MEDIUM

    @classmethod
    def new_game(
        cls,
        heaps: Sequence[int],
        player_names: Sequence[str],
        ai_opponent: bool = False,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> Self:
        if len(player_names) != 2:
            raise InvalidConfigurationError(
                f"A game of Nim needs exactly two players, got {len(player_names)}."
            )
        return cls(
            state=engine.new_game(heaps),
            players={Player.FIRST: player_names[0], Player.SECOND: player_names[1]},
            ai_opponent=ai_opponent,
            difficulty=difficulty,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a NimGame from the information the Service layer actually has"""

        if model.difficulty not in {d.value for d in Difficulty}:
            raise GameStateError(
                f"Invalid difficulty: {model.difficulty!r}. \nPick one from {','.join(d.value for d in Difficulty)}"
            )
        try:
            players = {
                Player(int(number)): name
                for number, name in model.registered_players.items()
            }
        except ValueError as exc:
            raise GameStateError(
                f"Invalid registered players: {model.registered_players!r}"
            ) from exc

        state = engine.restore(
            heaps=model.heaps,
            current_player=model.current_player,
            game_over=model.game_over,
            winner=model.winner,
            move_history=[Move.from_record(record) for record in model.move_history],
        )
        return cls(
            state=state,
            players=players,
            ai_opponent=model.ai_opponent,
            difficulty=Difficulty(model.difficulty),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            heaps=list(self.state.heaps),
            current_player=int(self.state.current_player),
            game_over=self.state.game_over,
            winner=None if self.state.winner is None else int(self.state.winner),
            move_history=[move.to_record() for move in self.state.move_history],
            registered_players={
                str(int(player)): name for player, name in self.players.items()
            },
            ai_opponent=self.ai_opponent,
            difficulty=self.difficulty.value,
        )

    @property
    def status(self) -> Status:
        return Status.GAME_OVER if self.state.game_over else Status.IN_PROGRESS

    @property
    def winner_name(self) -> Optional[str]:
        if self.state.winner is None:
            return None
        return self.players.get(self.state.winner)

    @property
    def is_ai_turn(self) -> bool:
        return (
            self.ai_opponent
            and not self.state.game_over
            and self.state.current_player == Player.SECOND
        )

    def make_move(self, heap_index: int, remove_count: int) -> None:
        """Attempt a move. On failure the game keeps its current state."""
        self.state = engine.apply_move(self.state, heap_index, remove_count)

    def select_object(self, heap_index: int, object_index: int) -> None:
        """Remove the selected object and everything to its right in that heap."""
        if self.state.game_over:
            raise GameAlreadyOverError("Cannot select an object. The game is already over.")
        remove_count = engine.remove_count_for_selection(
            self.state, heap_index, object_index
        )
        self.make_move(heap_index, remove_count)

    def hint(self) -> HintResult:
        return engine.compute_optimal_move(self.state)

    def legal_moves(self) -> list[tuple[int, int]]:
        return engine.legal_moves(self.state)

    def reset(self) -> None:
        self.state = engine.reset(self.state)
