"""
Structured logging for the slice engine.

Every engine logger is a StructuredLogger: a LoggerAdapter that attaches a
``context`` dict to each record. The formatters in Config.logging_config
print it after the message (console) or as a JSON object (files).

Usage:
    logger = get_component_logger('aligner', batch='2026-10-17')
    logger.split('Split source record #0 at 3', extra={'boundary': 3})

    with log_context(ledger='warehouse'):
        aligner.align(purchases, shipments)   # every record carries ledger

    @log_performance('slice_engine', level='DEBUG')
    def reconcile(source, destination):
        ...
"""

import functools
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Dict, Optional, Set, Tuple

from Config.constants_core import ENGINE_LOGGER_NAME
from Config.logging_config import ENGINE_LOG_LEVELS, LoggingConfig, get_logging_config, set_logging_config


# Per-task, so asyncio callers never see each other's fields
_log_context: ContextVar[Dict[str, Any]] = ContextVar('log_context', default={})


class StructuredLogger(logging.LoggerAdapter):
    """
    LoggerAdapter that merges three sources into ``record.context``.

    Later sources win: the ambient context (set_context / log_context), the
    adapter's own extra, then the ``extra`` passed to the logging call.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        merged = {**_log_context.get(), **(self.extra or {}), **(kwargs.pop('extra', None) or {})}
        if merged:
            kwargs['extra'] = {'context': merged}
        return msg, kwargs

    def split(self, msg: str, *args, **kwargs) -> None:
        self.log(ENGINE_LOG_LEVELS['SPLIT'], msg, *args, **kwargs)

    def unbalanced(self, msg: str, *args, **kwargs) -> None:
        self.log(ENGINE_LOG_LEVELS['UNBALANCED'], msg, *args, **kwargs)


# ============================================================================
# Factory
# ============================================================================

_loggers: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], StructuredLogger] = {}
_configured: Set[str] = set()


def get_logger(
    name: str,
    context: Optional[Dict[str, Any]] = None,
    config: Optional[LoggingConfig] = None,
) -> StructuredLogger:
    """
    Return the StructuredLogger for name and default context.

    Handlers are installed the first time a name is requested, or again when
    an explicit config is passed. Adapters are cached per (name, context).

    Examples:
        >>> logger = get_logger('slice_engine', context={'component': 'validator'})
        >>> logger.info('Validating alignment', extra={'pairs': 4})
    """
    if config is not None or name not in _configured:
        (config or get_logging_config()).configure_logger(logger_name=name, log_file=f"{name}.log")
        _configured.add(name)

    cache_key = (name, tuple(sorted((key, repr(value)) for key, value in (context or {}).items())))
    adapter = _loggers.get(cache_key)
    if adapter is None:
        adapter = _loggers[cache_key] = StructuredLogger(logging.getLogger(name), extra=context)
    return adapter


def get_component_logger(component: str, **extra_context) -> StructuredLogger:
    """Logger named ``slice_engine.<component>`` with component in its context."""
    return get_logger(f"{ENGINE_LOGGER_NAME}.{component}", context={'component': component, **extra_context})


def as_structured(logger) -> Any:
    """
    Accept whatever logger a caller hands in.

    Plain loggers and adapters are wrapped so split() and unbalanced() exist.
    Structured loggers and test doubles come back unchanged.
    """
    if isinstance(logger, StructuredLogger):
        return logger
    if isinstance(logger, logging.LoggerAdapter):
        return StructuredLogger(logger.logger, extra=dict(logger.extra or {}))
    if isinstance(logger, logging.Logger):
        return StructuredLogger(logger)
    return logger


# ============================================================================
# Ambient context
# ============================================================================

def set_context(**context) -> None:
    """Add fields to every record logged from the current context."""
    _log_context.set({**_log_context.get(), **context})


def clear_context() -> None:
    _log_context.set({})


def get_context() -> Dict[str, Any]:
    return dict(_log_context.get())


@contextmanager
def log_context(**context):
    """
    Add fields for the duration of a with block.

    Examples:
        >>> with log_context(batch='2026-10-17'):
        ...     logger.info('Aligning')  # carries batch
    """
    token = _log_context.set({**_log_context.get(), **context})
    try:
        yield
    finally:
        _log_context.reset(token)


# ============================================================================
# Timing
# ============================================================================

def log_performance(logger_name: str, level: str = 'INFO', include_args: bool = False) -> Callable:
    """
    Log entry, completion and duration of each call.

    Failures are logged at ERROR with the traceback and re-raised. The logger
    is resolved per call, so decorating does not install handlers at import.
    """
    level_number = LoggingConfig.level_number(level)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(logger_name)
            name = func.__name__
            call_extra = {'args': str(args), 'kwargs': str(kwargs)} if include_args else {}
            logger.log(level_number, f"Calling {name}", extra=call_extra)

            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration_ms = round((time.perf_counter() - started) * 1000, 2)
                logger.error(f"{name} failed", exc_info=True, extra={'duration_ms': duration_ms})
                raise

            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.log(level_number, f"{name} completed", extra={'duration_ms': duration_ms})
            return result

        return wrapper

    return decorator


def setup_structured_logging(
    log_dir: Optional[str] = None,
    console_level: Optional[str] = None,
    use_json: Optional[bool] = None,
    propagate: bool = False,
) -> LoggingConfig:
    """
    Install a new default LoggingConfig.

    Loggers are rebuilt with it the next time they are requested.

    Examples:
        >>> setup_structured_logging(console_level='DEBUG', log_dir='logs')
    """
    config = LoggingConfig(log_dir=log_dir, console_level=console_level, use_json=use_json, propagate=propagate)
    set_logging_config(config)
    _configured.clear()
    return config


__all__ = [
    'StructuredLogger',
    'get_logger',
    'get_component_logger',
    'as_structured',
    'set_context',
    'clear_context',
    'get_context',
    'log_context',
    'log_performance',
    'setup_structured_logging',
]
