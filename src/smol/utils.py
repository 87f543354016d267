"""Utility functions for smol."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure loguru sinks.

    Args:
        log_level: Level for the stderr sink
        log_file: Optional file that receives DEBUG and above, rotated at 10 MB
        console: Whether to log to stderr at all
    """
    logger.remove()

    if console:
        logger.add(sys.stderr, level=log_level, format="<level>{level: <8}</level> {message}")

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create log directory {log_file.parent}: {e}")
            return
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            encoding="utf-8",
        )
