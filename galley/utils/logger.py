"""
Logger setup for command-line runs.

Library code only logs, through each context's logger.py. Handlers are
configured here, once per script run:

- file handler at DEBUG in <LOGS_PATH>/<context>_<stamp>/<context>.log
- console handler at GALLEY_CONSOLE_LEVEL (default INFO), colorized by level
- provenance header (script, command, versions, config override, and any
  fields the caller adds)
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from galley import __version__
from galley.utils.timestamp import session_stamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LEVEL = os.getenv("GALLEY_CONSOLE_LEVEL", "INFO")

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def session_log_dir(context_name: str, logs_path: Optional[Path] = None) -> Path:
    """
    Fresh log directory for one run.

    Examples:
        >>> session_log_dir("migrate")  # doctest: +SKIP
        PosixPath('outs/logs/migrate_20251114_123456')
    """
    return (logs_path or LOGS_PATH) / f"{context_name}_{session_stamp()}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[Dict[str, Any]] = None,
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output to a per-run log file and the console.

    Args:
        context_name: Context identifier, used for the log file name ("migrate", "layout")
        log_dir: Directory for this run (defaults to session_log_dir(context_name))
        extra_provenance: Additional fields for the provenance header
        level_colors: Console color overrides by level name

    Returns:
        Path to log file
    """
    log_dir = log_dir or session_log_dir(context_name)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=CONSOLE_LEVEL, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[Dict[str, Any]] = None) -> None:
    """Log where and how this run was started, framed by rules."""
    rows: Dict[str, Any] = {
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        "galley": __version__,
    }
    config_override = os.getenv("GALLEY_CONFIG_PATH")
    if config_override:
        rows["Config override"] = config_override
    rows.update(extra_context or {})

    logger.info("=" * 80)
    for key, value in rows.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
