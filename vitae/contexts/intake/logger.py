"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def log_load_start(data_path: Path) -> None:
    """Log start of data loading."""
    _log_info(f"Loading resume data from {data_path}")


def log_load_result(data_path: Path, success: bool, error: Exception = None) -> None:
    """Log outcome of data loading."""
    if success:
        _log_success(f"Loaded resume data: {data_path.name}")
    else:
        _log_error(f"Failed to load resume data: {data_path}")
        if error is not None:
            _log_error(f"  Error: {error}")
