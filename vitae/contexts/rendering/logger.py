"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


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


def log_pdf_start(output_path: Path, html_length: int) -> None:
    """Log start of PDF printing with context."""
    _log_info("Generating ATS-optimized PDF")
    _log_debug(f"  Output: {output_path}")
    _log_debug(f"  HTML: {html_length} chars")


def log_pdf_result(
    output_path: Path,
    success: bool,
    elapsed_time: float,
    size_kb: int = None,
    page_count: int = None,
    error: Exception = None,
) -> None:
    """
    Log PDF printing result.

    Args:
        output_path: Target PDF path
        success: Whether the PDF was written
        elapsed_time: Time taken to print
        size_kb: Size of the written PDF
        page_count: Pages in the written PDF (None if unreadable)
        error: The failure, when success is False
    """
    if success:
        _log_success(f"PDF generated ({elapsed_time:.2f}s)")
        _log_info(f"  Location: {output_path}")
        _log_info(f"  File size: {size_kb} KB")
        if page_count is not None:
            _log_debug(f"  Pages: {page_count}")
    else:
        _log_error(f"PDF generation failed ({elapsed_time:.2f}s)")
        if error is not None:
            _log_error(f"  Error: {error}")
