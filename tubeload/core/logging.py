"""Logging utilities for tubeload modules."""

import logging
from typing import Set


ROOT_LOGGER = 'tubeload'

_registered: Set[str] = {ROOT_LOGGER}


def get_logger(name: str) -> logging.Logger:
    """Get a 'tubeload.*' logger that propagates to the root logger.

    Loggers obtained here are remembered so setup_logging() can adjust
    all of them at once. Until basicConfig() has installed a handler the
    logger defaults to WARNING, which keeps library use quiet.

    Args:
        name: Dotted logger name under 'tubeload'

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f"{ROOT_LOGGER}.{name}"
    _registered.add(name)

    logger = logging.getLogger(name)
    logger.propagate = True

    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger


def setup_logging(level=logging.INFO) -> None:
    """
    Set the level of every tubeload logger.

    Args:
        level: Logging level (default: logging.INFO)
    """
    for name in sorted(_registered):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = True
