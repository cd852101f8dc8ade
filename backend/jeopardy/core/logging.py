"""
Logging setup
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from jeopardy.core.config import settings

_CONSOLE_FMT = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

_FILE_FMT = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_CONFIGURED = False


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Install console (and optional rotating file) handlers. Safe to call twice."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    level = (level or settings.LOG_LEVEL).upper()
    log_file = log_file or settings.LOG_FILE

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setFormatter(_CONSOLE_FMT)
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(_FILE_FMT)
        root.addHandler(file_handler)

    # SQL echo is controlled by the engine, keep the library quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialised (level=%s, file=%s)", level, log_file or "-")
