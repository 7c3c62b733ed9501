"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from atsresume.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, phase: str = "compose") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        phase: Phase name for provenance ("compose" or "preview")

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating helpers


def log_assets_loaded(template_path: Path, css_path: Path, template_size: int, css_size: int) -> None:
    """Log the one-time load of the template/stylesheet pair."""
    _log_info("Loaded resume assets")
    _log_debug(f"  Template: {template_path} ({template_size} chars)")
    _log_debug(f"  Stylesheet: {css_path} ({css_size} chars)")


def log_composition(resume_name: str, section_sizes: dict, html_size: int) -> None:
    """Log a completed composition with per-section fragment sizes."""
    _log_debug(f"Composed HTML for '{resume_name}' ({html_size} chars)")
    for section, size in section_sizes.items():
        _log_debug(f"  {section}: {size} chars")
