"""
Application Logger

This module provides the logging setup shared by every Inkwell component:
a configurable root application logger, an optional JSON formatter for log
shippers, a context-carrying adapter and a timing decorator.
"""

import os
import sys
import json
import time
import logging
import datetime
import functools
import asyncio
from typing import Dict, Any, Optional, Union, Callable, TypeVar

from inkwell.common.exceptions import InkwellError

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
APP_LOGGER_NAME = "inkwell"

F = TypeVar('F', bound=Callable[..., Any])

__all__ = [
    'configure_logger',
    'LoggerAdapter',
    'JsonFormatter',
    'app_logger',
    'log_execution_time'
]


class JsonFormatter(logging.Formatter):
    """
    Formatter that renders each record as a single JSON object.

    Context attached through LoggerAdapter (the ``data`` extra) is merged
    into the top level of the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno
        }

        if record.exc_info:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        data = getattr(record, 'data', None)
        if isinstance(data, dict):
            payload.update(data)

        return json.dumps(payload, default=str)


def configure_logger(
    name: str = APP_LOGGER_NAME,
    level: Union[str, int] = logging.INFO,
    format_string: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    use_json: bool = False,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure a logger with console and/or file handlers.

    Existing handlers on the logger are replaced, so calling this twice
    does not duplicate output.

    Args:
        name: Logger name
        level: Log level, as a name ("INFO") or a logging constant
        format_string: Log format string for text output
        date_format: Date format string for text output
        use_json: Emit JSON lines instead of text
        log_file: Optional path of a file to log to as well
        console_output: Whether to log to stdout

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []

    if use_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(format_string, date_format)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (FileNotFoundError, PermissionError) as e:
            logger.warning(f"Could not open log file {log_file}: {e}")

    return logger


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that attaches a fixed context to every record.

    The context ends up under the ``data`` extra, where JsonFormatter picks
    it up. For text output it is appended to the message.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, context or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        kwargs = dict(kwargs)
        extra = dict(kwargs.get('extra') or {})
        data = dict(extra.get('data') or {})
        data.update(self.extra)
        extra['data'] = data
        kwargs['extra'] = extra

        if self.extra:
            context = " ".join(f"{key}={value}" for key, value in self.extra.items())
            msg = f"{msg} [{context}]"
        return msg, kwargs

    def with_context(self, **context) -> 'LoggerAdapter':
        """Return a new adapter with ``context`` merged into this one's."""
        merged = dict(self.extra)
        merged.update(context)
        return LoggerAdapter(self.logger, merged)


def get_app_logger() -> logging.Logger:
    """Get the application logger, configuring it from the environment once."""
    logger = logging.getLogger(APP_LOGGER_NAME)

    if not logger.handlers:
        return configure_logger(
            name=APP_LOGGER_NAME,
            level=os.environ.get("LOG_LEVEL", "INFO"),
            use_json=os.environ.get("LOG_JSON", "false").lower() == "true",
            log_file=os.environ.get("LOG_FILE")
        )

    return logger


app_logger = get_app_logger()


def _log_failure(logger: Union[logging.Logger, logging.LoggerAdapter], name: str, elapsed: float, error: Exception) -> None:
    level = logging.DEBUG if isinstance(error, InkwellError) and error.status_code < 500 else logging.ERROR
    logger.log(level, f"{name} failed after {elapsed:.3f} seconds: {error}")


def log_execution_time(logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None) -> Callable[[F], F]:
    """
    Decorator that logs how long a function took, at debug level.

    Failures are re-raised. Client errors (an InkwellError with a status
    below 500) are logged at debug level, anything else at error level.
    Works for both plain and coroutine functions.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                _log_failure(logger or app_logger, func.__name__, elapsed, e)
                raise
            elapsed = time.perf_counter() - start_time
            (logger or app_logger).debug(f"{func.__name__} executed in {elapsed:.3f} seconds")
            return result

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                _log_failure(logger or app_logger, func.__name__, elapsed, e)
                raise
            elapsed = time.perf_counter() - start_time
            (logger or app_logger).debug(f"{func.__name__} executed in {elapsed:.3f} seconds")
            return result

        return async_wrapper if asyncio.iscoroutinefunction(func) else wrapper
    return decorator
