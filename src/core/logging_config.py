"""Logging setup shared by every entrypoint. Modules only ever call logging.getLogger(__name__)."""

import logging

from src.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a single stream handler to the root logger (no-op if one is already configured)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
