"""
Building context logger.

Provides logging interface for building context with automatic [build] prefix.
All building modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[build]"


def setup_build_logger(
    log_dir: Path, data_file: Path, dist_dir: Path, command: str, verbose: bool = False
) -> Path:
    """
    Setup logger for a build session.

    Args:
        log_dir: Directory for this build session
        data_file: Résumé data file being built
        dist_dir: Output directory
        command: CLI command that started the session ("build", "pdf", "watch")
        verbose: Show per-stage DEBUG lines (staged assets, written documents,
                 changed files) on the console as well as in the log file

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={
            "Command": command,
            "Data file": data_file,
            "Output directory": dist_dir,
            "Console level": "DEBUG" if verbose else "INFO",
        },
        console_level="DEBUG" if verbose else "INFO",
    )


def _log_info(message: str) -> None:
    """Log info message with [build] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [build] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [build] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [build] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [build] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_stage_start(stage: str) -> None:
    """Log start of a pipeline stage."""
    _log_info(f"{stage}...")


def log_build_start(data_file: Path, dist_dir: Path) -> None:
    """Log start of a full build."""
    _log_info("Building resume site and PDF from data file")
    _log_debug(f"  Data: {data_file}")
    _log_debug(f"  Output: {dist_dir}")


def log_build_result(result, elapsed_time: float) -> None:
    """
    Log a successful build.

    Args:
        result: BuildResult from build_site()
        elapsed_time: Time taken for the whole pipeline
    """
    _log_success(f"Build completed successfully ({elapsed_time:.2f}s)")
    _log_info(f"  Website: {result.website_path}")
    _log_info(f"  PDF template: {result.print_path}")
    _log_info(f"  PDF: {result.pdf.pdf_path}")
    _log_debug(
        f"  Assets: {len(result.staging.copied)} copied, "
        f"{len(result.staging.kept)} kept, {len(result.staging.skipped)} skipped"
    )


def log_build_failure(error: Exception, elapsed_time: float) -> None:
    """Log a failed build."""
    _log_error(f"Build failed ({elapsed_time:.2f}s)")
    _log_error(f"  {type(error).__name__}: {error}")
