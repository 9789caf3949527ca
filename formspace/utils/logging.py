"""Unified logging configuration for the Formspace backend.

Provides consistent logging with console output and optional rotating
file output under the configured logs directory.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from formspace.settings import settings

LOG_FORMAT = "[%(asctime)s.%(msecs)03d][%(levelname)s][%(filename)s:%(lineno)d]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "formspace"


def _ensure_app_logger_configured() -> None:
    """Attach the formatted console handler to the ``formspace`` parent logger once."""
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)

    has_formatted_handler = any(
        isinstance(h, logging.StreamHandler)
        and not isinstance(h, RotatingFileHandler)
        and h.formatter is not None
        and h.formatter._fmt == LOG_FORMAT
        for h in app_logger.handlers
    )
    if has_formatted_handler:
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    app_logger.addHandler(console_handler)

    app_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    app_logger.propagate = False


def setup_logging(log_name: str = "formspace") -> logging.Logger:
    """
    Setup logging with console and rotating file output.

    Log file path pattern: {logs_root}/{log_name}.log

    Args:
        log_name: The name of the log file (without .log extension).

    Returns:
        Configured logger instance
    """
    _ensure_app_logger_configured()

    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{log_name}")
    log_dir = _get_logs_root()
    if log_dir is None:
        return logger

    log_file_path = str(log_dir / f"{log_name}.log")
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == log_file_path for h in app_logger.handlers):
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        app_logger.addHandler(file_handler)
        app_logger.info(f"Log file handler added: {log_file_path}")

    logger.propagate = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Logger in the ``formspace.*`` namespace
    """
    _ensure_app_logger_configured()

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def _get_logs_root() -> Path | None:
    """Return the logs directory, or None when it cannot be created."""
    logs_root = settings.get_logs_root()
    try:
        logs_root.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_root


_ensure_app_logger_configured()
