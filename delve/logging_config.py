"""Logging setup for Delve.

Everything under the ``delve`` logger goes to a rotating debug.log at DEBUG;
the console only shows WARNING and above unless asked otherwise.

Usage:
    from delve.logging_config import setup_logging
    setup_logging(log_dir)  # Once, from the CLI entry point

Movement, trigger and load lines use the log_* helpers below so the debug
log stays greppable by tag (MOVE, TRIGGER, LOAD).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


ROOT_LOGGER_NAME = "delve"
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

FILE_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-32s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

_logging_initialized = False


def _reset_handlers(logger: logging.Logger) -> None:
    """Close and drop handlers left over from an earlier setup."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure logging for every delve.* logger.

    Safe to call again; handlers from the previous call are replaced.

    Args:
        log_dir: Directory for debug.log (created if missing)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for stderr output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME

    delve_logger = logging.getLogger(ROOT_LOGGER_NAME)
    delve_logger.setLevel(logging.DEBUG)
    _reset_handlers(delve_logger)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    delve_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    delve_logger.addHandler(console_handler)

    if not _logging_initialized:
        delve_logger.info(f"Delve logging started {datetime.now().isoformat()} -> {log_file.absolute()}")
        _logging_initialized = True

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under delve."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_movement(
    logger: logging.Logger,
    map_id: str,
    from_pos: tuple[int, int],
    direction: str,
    accepted: bool,
    details: str | None = None,
) -> None:
    """Log a movement validation outcome."""
    status = "OK" if accepted else "REJECTED"
    details_str = f" | {details}" if details else ""
    logger.debug(
        f"MOVE | {map_id} | ({from_pos[0]}, {from_pos[1]}) {direction} | {status}{details_str}"
    )


def log_trigger(
    logger: logging.Logger,
    area_id: str,
    event_id: str,
    trigger: str,
    status: str,
    details: str | None = None,
) -> None:
    """Log an area event being considered or fired."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"TRIGGER | {trigger} | {area_id}/{event_id} | {status}{details_str}")


def log_load(
    logger: logging.Logger,
    operation: str,
    source: Path | str | None = None,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log data loading operations (tilesets, area maps)."""
    status = "OK" if success else "FAILED"
    source_str = f" | {source}" if source else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"LOAD | {operation}{source_str} | {status}{details_str}")
