"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_extraction_start(filename: str, mime_hint: str, size: int) -> None:
    """Log start of extraction with context."""
    _log_info(f"Extracting text from {filename or '<unnamed>'} ({mime_hint})")
    _log_debug(f"Upload size: {size} bytes")


def log_extraction_result(filename: str, text: str, elapsed_time: float) -> None:
    """Log extraction outcome, warning when nothing was recovered."""
    if text.strip():
        _log_success(
            f"{filename or '<unnamed>'}: extracted {len(text)} characters ({elapsed_time:.2f}s)"
        )
    else:
        _log_warning(
            f"{filename or '<unnamed>'}: no text found ({elapsed_time:.2f}s). "
            "Scanned or image-only documents are not supported."
        )
