"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from galley.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(page_size: str, capacity: float, log_dir: Optional[Path] = None) -> Path:
    """
    Setup logger for layout context.

    Args:
        page_size: Page size preset name (for provenance)
        capacity: Page capacity in pixels (for provenance)
        log_dir: Directory for this run (defaults to a fresh directory under LOGS_PATH)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance={"Page size": page_size, "Capacity": f"{capacity:g}px"},
    )


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_layout_result(result) -> None:
    """
    Log the outcome of one pagination pass.

    Clean passes are logged at debug level (they run once per frame);
    issues are logged as warnings.

    Args:
        result: LayoutResult from PaginationEngine.recompute()
    """
    _log_debug(
        f"{result.page_count} page(s), {len(result.corrections)} correction(s), "
        f"{result.iterations} iteration(s)"
    )
    for issue in result.get_issues():
        _log_warning(issue)
