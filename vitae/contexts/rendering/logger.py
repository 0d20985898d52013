"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import BuildProvenance
from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, provenance: BuildProvenance) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        provenance: Theme, data and output directories for the log header

    Returns:
        Path to log file

    Example:
        from vitae.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, BuildProvenance(theme="default"))
        _log_info("Starting layout...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        provenance=provenance,
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


def log_render_start(lang: str, template_path: Path, output_path: Path) -> None:
    """Log start of a PDF render with context."""
    _log_info(f"Generating PDF ({lang})")
    _log_debug(f"  Template: {template_path}")
    _log_debug(f"  Output: {output_path}")


def log_render_result(result, verbose: bool = False) -> None:
    """
    Log a finished render with layout diagnostics.

    Args:
        result: RenderResult from PDFGenerator.generate()
        verbose: List every overflowing row instead of a summary
    """
    _log_success(
        f"PDF generated: {result.pdf_path.name} "
        f"({result.page_count} pages, {result.elapsed_time:.2f}s)"
    )

    overflowing = result.layout.overflowing_rows
    if not overflowing:
        return

    _log_warning(f"{len(overflowing)} rows have content taller than their declared height")
    limit = len(overflowing) if verbose else 3
    for placement in overflowing[:limit]:
        _log_debug(
            f"  Row {placement.index} (page {placement.page}): "
            f"measured {placement.measured_height:.1f}mm > declared {placement.declared_height:.1f}mm"
        )
    if len(overflowing) > limit:
        _log_debug(f"  ... and {len(overflowing) - limit} more rows")
