"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from copy import deepcopy
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel, MoveRecord
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.info("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored state of an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        logger.info("Deleted game %s", game_id)
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        """
        Write GameModel fields onto the SQLAlchemy object.
        NOTE JSON columns only notice re-assignment, not in-place changes, so always hand over fresh copies.
        """
        game_db.heaps = list(game.heaps)
        game_db.current_player = game.current_player
        game_db.game_over = game.game_over
        game_db.winner = game.winner
        game_db.move_history = [dict(record) for record in game.move_history]
        game_db.registered_players = dict(game.registered_players)
        game_db.ai_opponent = game.ai_opponent
        game_db.difficulty = game.difficulty

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            heaps=list(game_db.heaps),
            current_player=game_db.current_player,
            game_over=game_db.game_over,
            winner=game_db.winner,
            move_history=[MoveRecord(**record) for record in deepcopy(game_db.move_history)],
            registered_players=dict(game_db.registered_players),
            ai_opponent=game_db.ai_opponent,
            difficulty=game_db.difficulty,
        )
