"""
History context logger.

Provides logging interface for history context with automatic [history] prefix.
All history modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[history]"


def _log_debug(message: str) -> None:
    """Log debug message with [history] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
