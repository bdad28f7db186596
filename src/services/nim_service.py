"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

import src.nim.engine as engine
from src.api.models import (
    AITurnRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    HintRequest,
    HintResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    ResetGameRequest,
    SelectObjectRequest,
)
from src.core.config import AI_THINK_DELAY
from src.core.exceptions import GameStateError, IllegalMoveError, RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.nim.game import NimGame
from src.nim.players import AIPlayer, strategy_for

logger = logging.getLogger(__name__)


class NimService:
    """Orchestration of layers for a game of Nim."""

    def __init__(
        self,
        repository: GameRepository,
        rng: Optional[random.Random] = None,
        ai_think_delay: float = AI_THINK_DELAY,
    ) -> None:
        self.repo = repository
        self.rng = rng or random.Random()
        self.ai_think_delay = ai_think_delay

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new game with the requested heaps and players."""

        # Use info in CreateGameRequest to create a new NimGame, and convert into GameModel
        new_game = NimGame.new_game(
            heaps=request.heaps,
            player_names=request.player_names,
            ai_opponent=request.ai_opponent,
            difficulty=request.difficulty,
        )

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s with heaps %s", game_id, request.heaps)

        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve every (heap_index, remove_count) pair the player to move may play."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        return LegalMovesResponse(
            game_id=request.game_id,
            current_player=int(game.state.current_player),
            legal_moves=game.legal_moves(),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        self._assert_human_turn(request.game_id, game)
        try:
            game.make_move(request.heap_index, request.remove_count)
        except IllegalMoveError as exc:
            self._log_rejection(request.game_id, exc)
            raise
        return self._save(request.game_id, game)

    def select_object(self, request: SelectObjectRequest) -> GameResponse:
        """Make a move by selecting an object (it and everything to its right is removed)."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        self._assert_human_turn(request.game_id, game)
        try:
            game.select_object(request.heap_index, request.object_index)
        except IllegalMoveError as exc:
            self._log_rejection(request.game_id, exc)
            raise
        return self._save(request.game_id, game)

    def get_hint(self, request: HintRequest) -> HintResponse:
        """Suggest a move for the player whose turn it is."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        hint = game.hint()
        return HintResponse(
            game_id=request.game_id,
            category=hint.category,
            target_heap_index=hint.target_heap_index,
            remove_count=hint.remove_count,
            explanation=hint.explanation,
            nim_sum=engine.nim_sum(game.state.heaps),
        )

    def play_ai_turn(self, request: AITurnRequest) -> GameResponse:
        """Let the computer (always player 2) make its move."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        if not game.is_ai_turn:
            raise GameStateError(
                f"It is not the computer's turn in game {request.game_id}. "
                f"ai_opponent={game.ai_opponent}, status={game.status}, player to move={game.state.current_player}"
            )

        ai_player = AIPlayer(
            strategy=strategy_for(game.difficulty, self.rng),
            think_delay=self.ai_think_delay,
        )
        game.state = ai_player.play(game.state)
        return self._save(request.game_id, game)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Start over with the same heaps, players and settings."""
        game = NimGame.from_model(self._fetch_game(request.game_id))
        game.reset()
        logger.info("Reset game %s", request.game_id)
        return self._save(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _assert_human_turn(self, game_id: UUID, game: NimGame) -> None:
        """While the computer is to move, players cannot move for it."""
        if game.is_ai_turn:
            raise GameStateError(
                f"Waiting for the computer to move in game {game_id}. Request an AI turn first."
            )

    def _log_rejection(self, game_id: UUID, error: IllegalMoveError) -> None:
        logger.warning("Rejected move in game %s (%s): %s", game_id, error.reason, error)

    def _save(self, game_id: UUID, game: NimGame) -> GameResponse:
        """Capture updated state in GameModel, store it and build the response."""
        model = game.to_model()
        updated = self.repo.update_game(game_id, model)
        if updated is None:
            raise RepositoryError(f"Game with {game_id=} could not be updated.")
        if game.state.game_over:
            logger.info(
                "Game %s is over. Player %d (%s) wins.",
                game_id,
                game.state.winner,
                game.winner_name,
            )
        return self._create_game_response(game_id, updated)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = NimGame.from_model(model)
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            heaps=model.heaps,
            starting_heaps=list(engine.initial_heaps(game.state)),
            current_player=model.current_player,
            status=game.status,
            winner=model.winner,
            winner_name=game.winner_name,
            ai_opponent=model.ai_opponent,
            difficulty=game.difficulty,
            move_history=[MoveResponse(**record) for record in model.move_history],
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
