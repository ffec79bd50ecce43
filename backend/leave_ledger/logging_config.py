from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leave_ledger.config import Settings

# Engine-level loggers that are noisy at INFO.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")


def setup_logging(settings: Settings) -> None:
    """Configure root logging once for the API process."""
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
    if not settings.database_echo:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    if settings.debug:
        logging.getLogger("leave_ledger").setLevel(logging.DEBUG)
