"""Process-wide logging setup."""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once; later calls are no-ops (basicConfig semantics)."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    if not settings.DEBUG:
        # SQL echo is controlled by DEBUG; keep the engine logger quiet otherwise.
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
