"""
Logging setup for scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers and
never configure handlers. Entry points call ``configure_logging`` once.
"""
from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def configure_logging(verbose: bool = False, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configure root logging for a command-line run.

    Args:
        verbose: DEBUG level when True, INFO otherwise.
        logger_name: Logger to return. None = the package logger.

    Returns:
        The requested logger, ready to use.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    return logging.getLogger(logger_name or "school_toolkit")
