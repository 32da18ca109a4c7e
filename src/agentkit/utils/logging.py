"""
Logging helpers.

Library modules log through ``logging.getLogger(__name__)``; applications
call :func:`set_log_level` or :func:`get_logger` to get output on stderr.
"""

import logging
import sys

ROOT_LOGGER = "agentkit"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """
    Get a logger that writes to stderr.

    Args:
        name: Logger name (usually __name__)
        level: Level applied when the handler is first attached

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(level))

    return logger


def set_log_level(level: int | str) -> None:
    """
    Set the log level for every agentkit logger.

    Args:
        level: Log level name or number (DEBUG, INFO, WARNING, ...)
    """
    logging.getLogger(ROOT_LOGGER).setLevel(_resolve_level(level))
