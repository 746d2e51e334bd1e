"""
Migration context logger.

Provides logging interface for migration context with automatic [migrate] prefix.
All migration modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from galley.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[migrate]"


def setup_migration_logger(document_count: int, log_dir: Optional[Path] = None) -> Path:
    """
    Setup logger for migration context.

    Args:
        document_count: Number of documents queued for migration (for provenance)
        log_dir: Directory for this run (defaults to a fresh directory under LOGS_PATH)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="migrate",
        log_dir=log_dir,
        extra_provenance={"Documents": document_count},
    )


# Wrapper functions with automatic [migrate] prefix


def _log_info(message: str) -> None:
    """Log info message with [migrate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [migrate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [migrate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [migrate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [migrate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level migration-specific logging helpers


def log_migration_result(document_name: str, result) -> None:
    """
    Log the outcome of loading one stored document.

    Args:
        document_name: Identifier shown in the log (file name, document id)
        result: LoadResult from load_document()
    """
    if result.error:
        _log_error(f"{document_name}: unreadable, substituted empty document")
        _log_error(f"  Error: {result.error}")
    elif result.migrated:
        _log_success(f"{document_name}: migrated from legacy schema")
    else:
        _log_info(f"{document_name}: already current")
