"""Loguru sink configuration."""

import sys
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace loguru's default sink.

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional path for a daily rotated log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            level=level.upper()
        )
