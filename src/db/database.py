"""Generate database session"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL, DB_ECHO
from src.core.logging_config import configure_logging
from src.db.schema import Base

logger = logging.getLogger(__name__)

engine = create_engine(DATABASE_URL, echo=DB_ECHO)
SessionLocal = sessionmaker(bind=engine)


def init_db() -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def main() -> None:
    """Create the tables in the configured database."""
    configure_logging()
    init_db()
    logger.info("Tables created in %s", engine.url)


if __name__ == "__main__":
    main()
