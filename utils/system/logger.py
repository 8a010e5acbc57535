import json
import logging
import logging.config
import logging.handlers
from datetime import datetime
from decimal import Decimal
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config import APP_NAME, DEBUG_LEVEL, LOGGING_CONFIG_PATH
from utils.exceptions import ConfigurationException


class LogLevel:
    """Enum-like class for log levels with clear hierarchy."""

    DEBUG = logging.DEBUG  # Detailed information for debugging
    INFO = logging.INFO  # General operational events
    WARNING = logging.WARNING  # Warning messages for potential issues
    ERROR = logging.ERROR  # Error events that might still allow the app to run
    CRITICAL = logging.CRITICAL  # Critical errors that prevent proper functioning


def _json_default(value: Any) -> str:
    # Decimal amounts are logged as exact strings
    if isinstance(value, Decimal):
        return str(value)
    return repr(value)


class StructuredLogger:
    """Enhanced logger with structured logging capabilities and context management."""

    def __init__(self, name: str, log_file: Optional[Path] = None):
        self.name = name
        self._context = {}
        self._log_file = log_file
        self._logger = logging.getLogger(name)
        if self._logger.level == logging.NOTSET:
            self._logger.setLevel(DEBUG_LEVEL)

        # Handlers are attached by setup_logger or external config, never here.
        self._logger.propagate = False  # Prevent double logging

    def with_context(self, **kwargs) -> "StructuredLogger":
        """Create a new logger instance with added context."""
        new_logger = StructuredLogger(self.name, self._log_file)
        new_logger._context = {**self._context, **kwargs}
        return new_logger

    def _format_message(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> str:
        """Format message with context and extra data."""
        if extra is not None and not isinstance(extra, dict):
            extra = {"data": extra}

        log_data = {
            "message": message,
            "timestamp": datetime.now().isoformat(),
            **self._context,
            **(extra or {}),
        }
        return json.dumps(log_data, default=_json_default)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.info(self._format_message(message, extra))

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.debug(self._format_message(message, extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.warning(self._format_message(message, extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.error(self._format_message(message, extra))

    def critical(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.critical(self._format_message(message, extra))

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log an exception with traceback."""
        self._logger.error(self._format_message(message, extra), exc_info=True)

    def _log(self, level: int, message: str, **kwargs) -> None:
        """Internal method for logging with level."""
        if self._logger.isEnabledFor(level):
            self._logger.log(level, self._format_message(message, kwargs))


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
        }

        # Parse the message if it's JSON
        try:
            message_data = json.loads(record.msg)
            if isinstance(message_data, dict):
                data.update(message_data)
            else:
                data["message"] = record.msg
        except (json.JSONDecodeError, TypeError):
            data["message"] = record.getMessage()

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            data["exc_info"] = record.exc_text

        return json.dumps(data)


class LoggerConfig:
    """Configuration class for logger settings."""

    def __init__(
        self, log_file: Path, level: int, max_size: int, backup_count: int, format: str
    ):
        self.log_file = log_file
        self.level = level
        self.max_size = max_size
        self.backup_count = backup_count
        self.format = format


def setup_logger(config: LoggerConfig) -> StructuredLogger:
    """Set up the application logger with a rotating file handler."""
    if config.format not in ("json", "text"):
        raise ConfigurationException(f"Invalid log format: {config.format}")

    app_logger = StructuredLogger(APP_NAME, config.log_file)

    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except (OSError, IOError) as e:
        raise ConfigurationException(f"Failed to configure logger: {e}")

    handler.setFormatter(
        JsonFormatter()
        if config.format == "json"
        else logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    app_logger._logger.addHandler(handler)
    app_logger._logger.setLevel(config.level)
    return app_logger


def rotate_logs(log_dir: Path) -> None:
    """Roll over the application's rotating handlers that write into ``log_dir``."""
    target = Path(log_dir).resolve()
    for handler in logger._logger.handlers:
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            continue
        if Path(handler.baseFilename).resolve().parent == target:
            handler.doRollover()


def clear_logs(log_dir: Path) -> None:
    """Clear all log files in the given directory."""
    for log_file in log_dir.glob("*.log*"):
        try:
            log_file.unlink(missing_ok=True)
        except OSError:
            pass


def setup_structured_logger(config_path: Path = LOGGING_CONFIG_PATH) -> StructuredLogger:
    """Configure and set up the application logger."""
    if config_path.exists():
        with open(config_path) as f:
            try:
                logging_config = yaml.safe_load(f)
                logging.config.dictConfig(logging_config)
            except (yaml.YAMLError, ValueError, TypeError) as e:
                raise ConfigurationException(
                    f"Invalid logging configuration in {config_path}: {e}"
                )

    app_logger = StructuredLogger(APP_NAME)
    if not app_logger._logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        app_logger._logger.addHandler(handler)
    return app_logger


def log_method(level: int = LogLevel.DEBUG):
    """Decorator for logging method calls with their arguments and results."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_logger = logger.with_context(
                function=func.__name__, module=func.__module__
            )

            func_logger._log(
                level,
                f"Entering {func.__name__}",
                args=str(args[1:]),
                kwargs=str(kwargs),
            )

            try:
                result = func(*args, **kwargs)
                func_logger._log(level, f"Completed {func.__name__}")
                return result
            except Exception as e:
                func_logger.error(
                    f"Exception in {func.__name__}",
                    extra={
                        "exception_type": type(e).__name__,
                        "exception_message": str(e),
                    },
                )
                raise

        return wrapper

    return decorator


# Initialize global logger instance
logger = setup_structured_logger()
