"""
Centralized logging configuration for hexpipes.

Provides debug logging to file for generation and puzzle operations.
Log file: <data_root>/debug.log (with rotation)

Usage:
    from hexpipes.logging_config import setup_logging
    setup_logging(data_root)  # Call once at startup

All hexpipes.* loggers will write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


# Global configuration
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

_logging_initialized = False


def setup_logging(
    data_root: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for hexpipes.

    Args:
        data_root: Path to data directory (log file goes here)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    data_path = Path(data_root)
    data_path.mkdir(parents=True, exist_ok=True)
    log_path = data_path / LOG_FILE_NAME

    root_logger = logging.getLogger("hexpipes")
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"hexpipes logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the hexpipes logger
    """
    if name.startswith("hexpipes."):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"hexpipes.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_generation(
    logger: logging.Logger,
    seed: int,
    attempt: int,
    status: str,
    duration_ms: int | None = None,
    details: str | None = None,
) -> None:
    """Log a generation attempt or its outcome."""
    duration_str = f" | {duration_ms}ms" if duration_ms else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"SEED {seed} | ATTEMPT {attempt:04d} | {status}{duration_str}{details_str}")


def log_world(
    logger: logging.Logger,
    seed: int,
    action: str,
    details: str | None = None,
) -> None:
    """Log a puzzle state change (scramble, rotation)."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"SEED {seed} | WORLD | {action}{details_str}")
