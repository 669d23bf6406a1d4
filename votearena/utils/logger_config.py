"""
Logging configuration for VoteArena.

All package loggers hang off the ``votearena`` logger, so one call to
setup_logging configures the whole service.
"""

import logging
import sys
from typing import Iterable, Optional, TextIO


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# httpx logs every request URL at INFO; PostgREST URLs are noise here
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Set up logging for the service.

    Args:
        level: Logging level name (case-insensitive, unknown names mean INFO)
        format_string: Log record format
        log_file: Optional file to also write logs to
        stream: Console stream (stdout by default)
        quiet: Third-party loggers raised to WARNING

    Returns:
        The ``votearena`` logger
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    package_logger = logging.getLogger("votearena")
    package_logger.setLevel(numeric_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(formatter)
    package_logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``votearena`` namespace (the namespace root if name is empty)."""
    if not name:
        return logging.getLogger("votearena")
    if name.startswith("votearena"):
        return logging.getLogger(name)
    return logging.getLogger(f"votearena.{name}")
