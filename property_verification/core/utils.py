"""Core utilities."""

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from property_verification.core.settings.app_settings import LoggingSettings

logger = logging.getLogger(__name__)

# Handler names used to identify handlers and avoid duplicates
APP_STREAM_HANDLER_NAME = "pvs_app_stream_handler"
APP_FILE_HANDLER_NAME = "pvs_app_file_handler"

# Third-party loggers reset to NOTSET so they follow the root configuration
INHERITING_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "httpx"]


class HealthCheckFilter(logging.Filter):
    """Filter to exclude health check requests from access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter out health check log entries.

        Args:
            record (logging.LogRecord): Log record to check.

        Returns:
            bool: False to exclude the record, True to include it.
        """
        message = record.getMessage()
        if "/health" in message and "GET" in message:
            return False
        return True


def utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Returns:
        datetime: Current UTC time.
    """
    return datetime.now(UTC)


def _get_handler_by_name(root_logger: logging.Logger, name: str) -> logging.Handler | None:
    """
    Get a handler by name from a logger.

    Args:
        root_logger (logging.Logger): Logger to search.
        name (str): Handler name to find.

    Returns:
        logging.Handler | None: Handler if found, None otherwise.
    """
    for handler in root_logger.handlers:
        if getattr(handler, "name", None) == name:
            return handler
    return None


def _remove_handler_by_name(root_logger: logging.Logger, name: str) -> None:
    """
    Remove a handler by name from a logger.

    Args:
        root_logger (logging.Logger): Logger to remove from.
        name (str): Handler name to remove.
    """
    handler = _get_handler_by_name(root_logger=root_logger, name=name)
    if handler:
        root_logger.removeHandler(handler)
        handler.close()


def _get_min_level(root_level: str, loggers: dict[str, str]) -> int:
    """
    Get the minimum log level from root and all custom loggers.

    Args:
        root_level (str): The root logger level string.
        loggers (dict[str, str]): Dict of logger name to level string.

    Returns:
        int: The minimum numeric log level.
    """
    levels: list[int] = [logging.getLevelName(root_level.upper())]
    for level in loggers.values():
        levels.append(logging.getLevelName(level.upper()))
    return min(levels)


def _build_handler(settings: LoggingSettings) -> logging.Handler:
    """
    Build the stream or file handler described by the settings.

    Args:
        settings (LoggingSettings): Logging settings.

    Returns:
        logging.Handler: A named, unformatted handler.
    """
    if not settings.log_file:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.set_name(APP_STREAM_HANDLER_NAME)
        return handler

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if settings.rotate_logs:
        handler = TimedRotatingFileHandler(
            filename=log_path,
            when="midnight",
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(log_path, encoding="utf-8")

    handler.set_name(APP_FILE_HANDLER_NAME)
    return handler


def setup_logging(settings: LoggingSettings) -> None:
    """
    Setup logging configuration for the application.

    Args:
        settings (LoggingSettings): Logging settings to configure logging.
    """
    root_logger = logging.getLogger()

    min_level = _get_min_level(
        root_level=settings.log_level,
        loggers=settings.loggers,
    )
    root_logger.setLevel(settings.log_level.upper())

    _remove_handler_by_name(root_logger=root_logger, name=APP_STREAM_HANDLER_NAME)
    _remove_handler_by_name(root_logger=root_logger, name=APP_FILE_HANDLER_NAME)

    handler = _build_handler(settings=settings)
    handler.setFormatter(
        logging.Formatter(
            fmt=settings.log_format,
            datefmt=settings.date_format,
        )
    )
    handler.setLevel(min_level)
    root_logger.addHandler(handler)

    for logger_name in INHERITING_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.NOTSET)

    for logger_name, level in settings.loggers.items():
        logging.getLogger(logger_name).setLevel(level.upper())

    uvicorn_access_logger = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, HealthCheckFilter) for f in uvicorn_access_logger.filters):
        uvicorn_access_logger.addFilter(HealthCheckFilter())
