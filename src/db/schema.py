"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "nim_games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    heaps: Mapped[list[int]] = mapped_column(JSON)
    current_player: Mapped[int]
    game_over: Mapped[bool]
    winner: Mapped[Optional[int]]
    move_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    ai_opponent: Mapped[bool] = mapped_column(default=False)
    difficulty: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
