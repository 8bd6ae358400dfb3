"""
Environment detection and .env file loading.

Reads the project's .env file with python-dotenv (never overriding variables
already set in the process) and exposes typed settings for the slice engine.
"""
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from Config import constants_core as core
from Config.exceptions import ConfigChoiceError, ConfigRangeError, ConfigTypeError
from Shared_Utils.precision import safe_decimal


_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigTypeError(key, raw, bool)


class Environment:
    """Detect and configure environment."""

    def __init__(self, env_file: Optional[Path] = None):
        self.env_file = env_file or self._find_env_file()
        self._loaded = False

    def _find_env_file(self) -> Optional[Path]:
        """The .env beside the Config package, if there is one."""
        candidate = Path(__file__).resolve().parent.parent / '.env'
        return candidate if candidate.exists() else None

    def load(self, force_reload: bool = False) -> None:
        """
        Read the .env file once. Variables already in os.environ are kept.

        Pass force_reload=True to read it again.
        """
        if self._loaded and not force_reload:
            return
        if self.env_file:
            load_dotenv(self.env_file, override=False)
        self._loaded = True

    # ========================================================================
    # Settings
    # ========================================================================

    @property
    def env_name(self) -> str:
        return os.getenv('SLICE_ENV', core.DEFAULT_ENV_NAME).strip().lower()

    @property
    def is_production(self) -> bool:
        return self.env_name in core.STRUCTURED_LOG_ENVIRONMENTS

    @property
    def strict_balance(self) -> bool:
        """Raise on unequal source/destination totals instead of reporting them."""
        raw = os.getenv('SLICE_STRICT_BALANCE')
        if raw is None:
            return core.DEFAULT_STRICT_BALANCE
        return _parse_bool('SLICE_STRICT_BALANCE', raw)

    @property
    def value_quantum(self) -> Optional[Decimal]:
        """Decimal step split values are truncated to, if configured."""
        raw = os.getenv('SLICE_VALUE_QUANTUM')
        if not raw:
            return core.DEFAULT_VALUE_QUANTUM
        try:
            quantum = safe_decimal(raw.strip())
        except ValueError:
            raise ConfigTypeError('SLICE_VALUE_QUANTUM', raw, Decimal)
        if not quantum.is_finite():
            raise ConfigTypeError('SLICE_VALUE_QUANTUM', raw, Decimal)
        if quantum <= 0 or quantum > core.MAX_VALUE_QUANTUM:
            raise ConfigRangeError('SLICE_VALUE_QUANTUM', quantum, 0, core.MAX_VALUE_QUANTUM)
        return quantum

    @property
    def log_level(self) -> str:
        level = os.getenv('LOG_LEVEL', core.DEFAULT_LOG_LEVEL).strip().upper()
        if level not in core.LOG_LEVELS:
            raise ConfigChoiceError('LOG_LEVEL', level, core.LOG_LEVELS)
        return level

    @property
    def log_dir(self) -> Optional[Path]:
        """Directory for rotating log files; file logging is off when unset."""
        raw = os.getenv('LOG_DIR')
        return Path(raw) if raw else None

    @property
    def log_json(self) -> Optional[bool]:
        raw = os.getenv('LOG_JSON')
        if raw is None or raw == '':
            return None
        return _parse_bool('LOG_JSON', raw)

    def as_dict(self) -> dict:
        """Current settings keyed the way Config.validators expects them."""
        return {
            'SLICE_ENV': self.env_name,
            'SLICE_STRICT_BALANCE': self.strict_balance,
            'SLICE_VALUE_QUANTUM': self.value_quantum,
            'LOG_LEVEL': self.log_level,
        }

    def __repr__(self) -> str:
        return f"Environment(env={self.env_name}, file={self.env_file})"


def get_environment() -> str:
    """Name of the current environment ('development', 'production', ...)."""
    return env.env_name


# ============================================================================
# Global Instance - Auto-load on import
# ============================================================================

env = Environment()
env.load()

# Export for convenience
env_name = env.env_name
