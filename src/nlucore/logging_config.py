"""
Structured JSON Logging Configuration for nlucore

Provides consistent, parseable logging for training and extraction runs.
Logs can be viewed with jq for easy filtering and analysis.
"""
import functools
import inspect
import json
import logging
import os
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional


# Attributes every LogRecord carries; anything else came in through extra={}
_STANDARD_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'extra_data', 'getMessage'
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect JSON-friendly fields passed through extra={}."""
    fields: Dict[str, Any] = {}
    for attr_name, attr_value in record.__dict__.items():
        if attr_name in _STANDARD_ATTRS:
            continue
        if isinstance(attr_value, (str, int, float, bool, type(None), dict, list)):
            fields[attr_name] = attr_value
    return fields


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Outputs logs as single-line JSON objects that are:
    - Machine-parseable
    - Human-readable with jq
    - Consistent across environments
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%f') + 'Z',
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        for key, value in _extra_fields(record).items():
            log_data.setdefault(key, value)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class PrettyJSONFormatter(logging.Formatter):
    """
    Colored single-line formatter for development.

    Keeps the same fields as JSONFormatter but renders them for a terminal.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',       # Reset
    }

    # Context fields worth showing inline, in display order
    INLINE_FIELDS = (
        'stage', 'labels_count', 'observations_count', 'iterations',
        'loss', 'locale', 'occurrences_count', 'duration_ms',
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a readable line."""
        timestamp = datetime.now(timezone.utc).strftime('%H:%M:%S.%f')[:-3]
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        parts = [
            f"{color}[{record.levelname}]{reset}",
            timestamp,
            f"{record.name}:",
            record.getMessage(),
        ]

        fields = _extra_fields(record)
        extra_parts = [
            f"{key}={fields[key]}" for key in self.INLINE_FIELDS
            if fields.get(key) is not None
        ]
        if extra_parts:
            parts.append(f"({', '.join(extra_parts)})")

        result = ' '.join(parts)

        if record.exc_info:
            result += '\n' + self.formatException(record.exc_info)

        return result


def setup_logging(
    app_name: str = 'nlucore',
    log_level: str = 'INFO',
    log_format: str = 'json',
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure structured logging for the package.

    Args:
        app_name: Name of the application logger
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('json' or 'pretty')
        log_file: Optional file path for file-based logging

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging('nlucore', 'INFO', 'json')
        >>> logger.info('Classifier trained', extra={'iterations': 739})
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(app_name)
    logger.setLevel(numeric_level)
    logger.handlers = []  # Clear any existing handlers

    if log_format == 'pretty':
        formatter: logging.Formatter = PrettyJSONFormatter()
    else:
        formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            # Always use JSON for file logs
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to setup file logging: {e}")

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def setup_logging_from_config(config=None) -> logging.Logger:
    """
    Configure the package logger from an NluConfig (defaults to the global one).

    DEBUG_NLP forces DEBUG level, which turns on the per-call summaries of
    log_function_call and the extractor's match counts.
    """
    if config is None:
        from nlucore.config import config
    return setup_logging(
        app_name='nlucore',
        log_level='DEBUG' if config.DEBUG_NLP else config.LOG_LEVEL,
        log_format=config.LOG_FORMAT,
        log_file=config.LOG_FILE,
    )


# ============================================================================
# Function Call Logging Decorator
# ============================================================================

def log_function_call(
    level: str = 'DEBUG',
    log_args: bool = True,
    log_time: bool = True
):
    """
    Decorator to log function input summary, result summary and timing.

    Args:
        level: Log level for the call/completion summaries
        log_args: Whether to log argument summaries
        log_time: Whether to log execution time

    Example:
        >>> @log_function_call()
        ... def find_entities(self, utterance: str, locale: str):
        ...     return occurrences

        Produces logs:
        DEBUG: FuzzyExtractor.find_entities() called (arg_utterance_length=27, arg_locale=en)
        DEBUG: FuzzyExtractor.find_entities() completed (result_count=1, duration_ms=0.8)
    """
    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)
        log_level = getattr(logging, level.upper(), logging.DEBUG)

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            func_name = func.__qualname__
            enabled = logger.isEnabledFor(log_level)

            if enabled:
                call_info = _prepare_args_summary(func, args, kwargs) if log_args else {}
                logger.log(log_level, f"{func_name}() called", extra=call_info)

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"{func_name}() failed after {round(duration, 2)}ms",
                    extra={
                        'error_type': type(e).__name__,
                        'error_message': str(e),
                        'duration_ms': round(duration, 2)
                    }
                )
                raise

            if enabled:
                result_info = _prepare_result_summary(result)
                if log_time:
                    result_info['duration_ms'] = round((time.perf_counter() - start_time) * 1000, 2)
                logger.log(log_level, f"{func_name}() completed", extra=result_info)

            return result

        return wrapper
    return decorator


def _prepare_args_summary(func, args, kwargs):
    """Summarize arguments: lengths for strings and sequences, values for scalars."""
    info = {}
    try:
        bound_args = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return info

    for param_name, param_value in bound_args.arguments.items():
        if param_name == 'self':
            continue
        # Prefixed so parameters like `name` never clash with LogRecord attributes
        if isinstance(param_value, str):
            if len(param_value) <= 16:
                info[f'arg_{param_name}'] = param_value
            else:
                info[f'arg_{param_name}_length'] = len(param_value)
        elif isinstance(param_value, (list, tuple, dict)):
            info[f'arg_{param_name}_count'] = len(param_value)
        elif isinstance(param_value, (int, float, bool)) or param_value is None:
            info[f'arg_{param_name}'] = param_value
    return info


def _prepare_result_summary(result):
    """Summarize a result for the completion log line."""
    if result is None:
        return {'result': 'None'}
    if isinstance(result, (list, tuple)):
        return {'result_count': len(result)}
    if hasattr(result, 'label') and hasattr(result, 'value'):
        return {'label': result.label, 'value': round(float(result.value), 4)}
    return {}
