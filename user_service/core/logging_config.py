# Standard library imports
import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the process.

    Args:
        level: Log level name (e.g. "INFO"); defaults to INFO when empty or unknown
    """
    resolved_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    logging.basicConfig(level=resolved_level, format=LOG_FORMAT)
