"""
API logger.

Provides logging interface for the HTTP layer with automatic [api] prefix.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from atsresume.utils.logger import setup_logger as _setup_logger
from atsresume.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("ATSRESUME_LOGS_PATH", "outs/logs"))
CONSOLE_LEVEL = os.getenv("ATSRESUME_LOG_LEVEL", "INFO")

CONTEXT_PREFIX = "[api]"


def setup_api_logger(log_dir: Path = None) -> Path:
    """Configure loguru for a server session (timestamped log directory by default)."""
    if log_dir is None:
        log_dir = LOGS_PATH / f"api_{now()}"
    return _setup_logger(context_name="api", log_dir=log_dir, console_level=CONSOLE_LEVEL)


def _log_info(message: str) -> None:
    """Log info message with [api] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [api] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [api] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")
