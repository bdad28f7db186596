"""Unit tests for src/db/database.py"""

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session

import src.db.database as database


def test_init_db_creates_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    test_engine = create_engine("sqlite:///:memory:")
    monkeypatch.setattr(database, "engine", test_engine)

    database.init_db()
    assert "nim_games" in inspect(test_engine).get_table_names()


def test_get_db_yields_session() -> None:
    generator = database.get_db()
    session = next(generator)
    assert isinstance(session, Session)
    generator.close()
