"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_resolved_text(resolved: str) -> None:
    """
    Dump resolved template text for diagnosis.

    Uses opt(raw=True) so multi-line text keeps its original formatting.
    """
    logger.opt(raw=True).debug(f"\n{'=' * 80}\nRESOLVED TEMPLATE:\n{'=' * 80}\n{resolved}\n")
