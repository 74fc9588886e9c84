"""
Unified output system using Loguru.
User-facing messages go to stdout and the log file; diagnostics go to the log only.
"""

import sys
import threading
from pathlib import Path
from typing import Optional

from loguru import logger

_print_lock = threading.Lock()


def setup_loguru(
    log_file: Path, level: str = "INFO", console_level: Optional[str] = None
) -> None:
    """
    Configure loguru with a rotating file sink and an optional stderr sink.

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        console_level: Minimum level echoed to stderr (--debug / --verbose), None for file only
    """
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_level:
        logger.add(
            sys.stderr,
            level=console_level,
            format="<level>{level}</level>: {message}",
        )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints for the user.

    Use this instead of print() for user-facing messages that should also be logged.
    Warnings and errors are printed to stderr.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if level == "debug":
        return

    stream = sys.stderr if level in ("warning", "error") else sys.stdout
    # Plugin and mpv event threads may print concurrently with the shell
    with _print_lock:
        print(message, file=stream)
