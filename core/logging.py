"""
Logging setup for export runs.

Log records go to stderr so that an export streamed to stdout stays a
clean JSON document.
"""

from typing import Optional, TextIO
import logging
import sys
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-statement engine logging would bury the export progress lines
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level for a level name, falling back to settings, then INFO"""
    name = (level or settings.LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> int:
    """
    Configure the root logger for an export run.

    Args:
        level: Level name overriding LOG_LEVEL from settings
        stream: Handler target, stderr by default

    Returns:
        The numeric level applied to the root logger
    """
    log_level = resolve_level(level)

    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stderr)]
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).debug(
        f"Logging configured at {logging.getLevelName(log_level)} level"
    )
    return log_level
