"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_generation_start(outputs) -> None:
    """Log start of document generation with target paths."""
    _log_info("Generating documents from resume data")
    _log_debug(f"  Website: {outputs.website_path}")
    _log_debug(f"  Print document: {outputs.print_path}")
    if outputs.manifest_path:
        _log_debug(f"  Manifest: {outputs.manifest_path}")


def log_document_written(kind: str, path: Path, size: int) -> None:
    """Log a single written document."""
    _log_success(f"{kind} generated: {path} ({size} chars)")


def log_generation_result(success: bool, elapsed_time: float, error: Exception = None) -> None:
    """Log outcome of generate_all()."""
    if success:
        _log_success(f"All documents generated ({elapsed_time:.2f}s)")
    else:
        _log_error(f"Document generation failed ({elapsed_time:.2f}s)")
        if error is not None:
            _log_error(f"  Error: {error}")
