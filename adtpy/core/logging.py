"""Logging utilities for adtpy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    Loggers propagate to the root logger, so ``logging.basicConfig()`` is
    enough to see adtpy output. A default level is set only when the root
    logger has no handlers yet.

    Args:
        name: Logger name (typically 'adtpy.<component>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def truncate(text: str, limit: int = 1000) -> str:
    """Shorten payloads for debug output."""
    if text is None:
        return ''
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"
