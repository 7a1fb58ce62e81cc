"""Logging configuration for the usecase runner.

Output goes to the build log on stderr. A file log can be kept as well,
usually under the project's build directory so it is cleaned with it.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# Remove default handler
logger.remove()

_handler_ids: list[int] = []


def setup_logging(
    log_dir: Optional[Path] = None,
    level: str = "INFO",
    *,
    console: bool = True,
    file: bool = False,
) -> None:
    """Configure logging once per process.

    Args:
        log_dir: Directory for the file log (default: ./logs)
        level: Minimum log level
        console: Log to stderr
        file: Also log to a rotating file in ``log_dir``
    """
    if _handler_ids:
        return

    if console:
        _handler_ids.append(logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True))

    if file:
        log_dir = log_dir or Path("./logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(logger.add(
            log_dir / f"usecase_runner_{datetime.now():%Y%m%d}.log",
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        ))


def reset_logging() -> None:
    """Remove the handlers added by setup_logging()."""
    while _handler_ids:
        logger.remove(_handler_ids.pop())


def get_logger(name: str = "usecase_runner"):
    """Get a logger bound to ``name`` (typically the module name)."""
    return logger.bind(name=name)
