"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from atsresume.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Content ready": os.getenv("ATSRESUME_CONTENT_READY", "networkidle"),
            "Chromium": os.getenv("ATSRESUME_CHROMIUM_PATH") or "playwright bundled",
        },
        level_colors={"SUCCESS": "<bold><green>"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(html_size: int, page_format: str, wait_until: str, active: int) -> None:
    """Log start of a PDF export with context."""
    _log_info(f"Starting PDF export ({html_size} chars of HTML)")
    _log_debug(f"  Format: {page_format}")
    _log_debug(f"  Content ready: {wait_until}")
    _log_debug(f"  Active exports: {active}")


def log_stage(stage: str) -> None:
    _log_debug(f"  Stage: {stage}")


def log_export_result(
    success: bool,
    elapsed_time: float,
    pdf_size: int = 0,
    error: BaseException = None,
) -> None:
    """
    Log export result.

    Args:
        success: Whether a PDF was produced
        elapsed_time: Time taken, engine launch to close
        pdf_size: Size of produced PDF in bytes
        error: Failure raised by the engine (when unsuccessful)
    """
    if success:
        _log_success(f"PDF export succeeded: {pdf_size} bytes ({elapsed_time:.2f}s)")
    else:
        _log_error(f"PDF export failed ({elapsed_time:.2f}s)")
        if error is not None:
            # Engine errors are often multi-line call logs
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nENGINE ERROR:\n{'=' * 80}\n{error}\n"
            )
