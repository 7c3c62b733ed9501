"""
Metrics context logger.

Provides logging interface for metrics context with automatic [metrics] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[metrics]"


def _log_info(message: str) -> None:
    """Log info message with [metrics] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [metrics] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [metrics] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
