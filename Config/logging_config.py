"""
Logging configuration for the slice engine.

Console output is colored text in development and one JSON object per line in
the environments listed in constants_core.STRUCTURED_LOG_ENVIRONMENTS.
Rotating JSON log files are only written when LOG_DIR is set.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from Config.environment import env


# Alignment events sit between the standard levels
ENGINE_LOG_LEVELS = {
    'SPLIT': 15,
    'UNBALANCED': 25,
}


def register_engine_levels() -> None:
    for name, number in ENGINE_LOG_LEVELS.items():
        logging.addLevelName(number, name)


register_engine_levels()

_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'context', 'taskName'}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record:

        {"timestamp": "2026-10-17T10:30:45.123456+00:00", "level": "SPLIT",
         "logger": "slice_engine.aligner", "message": "Split source record #0 at 3",
         "source": "aligner.py:110", "context": {"component": "aligner", "boundary": "3"}}

    Values json cannot encode (Decimal, RoundedDecimal) are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'source': f"{record.filename}:{record.lineno}",
        }

        context = getattr(record, 'context', None)
        if context:
            payload['context'] = context

        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        if extra:
            payload['extra'] = extra

        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Readable console lines with ANSI-colored levels and a trailing [context]."""

    COLORS = {
        'DEBUG': '\x1b[38;21m',
        'SPLIT': '\x1b[34;21m',       # Blue
        'INFO': '\x1b[38;21m',
        'UNBALANCED': '\x1b[35;21m',  # Magenta
        'WARNING': '\x1b[38;5;214m',
        'ERROR': '\x1b[31;21m',
        'CRITICAL': '\x1b[31;1m',
    }
    RESET = '\x1b[0m'
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)'

    def __init__(self, include_context: bool = True):
        super().__init__(self.FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color:
            # The file handler formats the same record after us
            record = logging.makeLogRecord(vars(record))
            record.levelname = f"{color}{record.levelname}{self.RESET}"
            record.msg = f"{color}{record.msg}{self.RESET}"

        line = super().format(record)

        context = getattr(record, 'context', None)
        if self.include_context and context:
            line += ' [' + ' | '.join(f"{key}={value}" for key, value in context.items()) + ']'
        return line


@dataclass
class LoggingConfig:
    """
    Handler settings shared by every engine logger.

    Fields left as None are filled from the environment:
    log_dir from LOG_DIR, console_level from LOG_LEVEL, use_json from LOG_JSON
    (or from SLICE_ENV when LOG_JSON is unset).
    """

    log_dir: Optional[Path] = None
    console_level: Optional[str] = None
    file_level: str = 'DEBUG'
    use_json: Optional[bool] = None
    max_bytes: int = 50 * 1024 * 1024
    backup_count: int = 5
    propagate: bool = False

    def __post_init__(self):
        if self.log_dir is None:
            self.log_dir = env.log_dir
        elif not isinstance(self.log_dir, Path):
            self.log_dir = Path(self.log_dir)

        self.console_level = (self.console_level or env.log_level).upper()
        self.file_level = self.file_level.upper()

        if self.use_json is None:
            self.use_json = env.is_production if env.log_json is None else env.log_json

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def level_number(level: str) -> int:
        """Resolve a level name, including SPLIT and UNBALANCED."""
        level = level.upper()
        if level in ENGINE_LOG_LEVELS:
            return ENGINE_LOG_LEVELS[level]
        number = logging.getLevelName(level)
        if not isinstance(number, int):
            raise ValueError(f"Unknown log level: {level}")
        return number

    def build_handlers(self, log_file: Optional[str] = None) -> List[logging.Handler]:
        """Console handler, plus a rotating JSON file handler when log_dir is set."""
        console = logging.StreamHandler()
        console.setLevel(self.level_number(self.console_level))
        console.setFormatter(JSONFormatter() if self.use_json else ColoredConsoleFormatter())
        handlers: List[logging.Handler] = [console]

        if log_file and self.log_dir is not None:
            rotating = RotatingFileHandler(
                self.log_dir / log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
            )
            rotating.setLevel(self.level_number(self.file_level))
            rotating.setFormatter(JSONFormatter())
            handlers.append(rotating)

        return handlers

    def configure_logger(self, logger_name: str, log_file: Optional[str] = None) -> logging.Logger:
        """Replace the handlers of logger_name with freshly built ones."""
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)  # handlers do the filtering

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in self.build_handlers(log_file):
            logger.addHandler(handler)

        logger.propagate = self.propagate
        return logger


_default_config: Optional[LoggingConfig] = None


def get_logging_config() -> LoggingConfig:
    global _default_config
    if _default_config is None:
        _default_config = LoggingConfig()
    return _default_config


def set_logging_config(config: LoggingConfig) -> None:
    global _default_config
    _default_config = config
