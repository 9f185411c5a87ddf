"""
Analysis context logger.

Provides logging interface for analysis context with automatic [analysis] prefix.
All analysis modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from resume_improver.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[analysis]"


def setup_analysis_logger(log_dir: Path, endpoint: str, strategy: str, verbose: bool = False) -> Path:
    """
    Setup logger for an analysis session.

    Args:
        log_dir: Directory for this session's logs
        endpoint: Analysis endpoint, recorded in the provenance header
        strategy: Request strategy, recorded in the provenance header
        verbose: Echo DEBUG messages to the console as well

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="analyze",
        log_dir=log_dir,
        extra_provenance={"Endpoint": endpoint, "Strategy": strategy},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [analysis] prefix


def _log_info(message: str) -> None:
    """Log info message with [analysis] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [analysis] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [analysis] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [analysis] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [analysis] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level analysis-specific logging helpers


def log_submission_start(request_id: int, strategy: str, url: str) -> None:
    """Log start of a submission."""
    _log_info(f"Submission #{request_id}: POST {url} ({strategy})")


def log_submission_result(request_id: int, result, elapsed_time: float) -> None:
    """
    Log the normalized outcome of a submission.

    Args:
        request_id: Monotonic submission number
        result: NormalizedResult shown to the user
        elapsed_time: Seconds from submission to result
    """
    if result.ok:
        _log_success(
            f"Submission #{request_id}: received {len(result.text)} characters ({elapsed_time:.2f}s)"
        )
    else:
        _log_error(f"Submission #{request_id} failed ({elapsed_time:.2f}s)")
        _log_error(f"  {result.message[:200]}")


def log_rejected_submission(reason: str) -> None:
    """Log a submission the session ignored."""
    _log_warning(f"Submission ignored: {reason}")
