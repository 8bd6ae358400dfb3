# Config/exceptions.py
"""
Configuration errors.

Each one names the offending setting and value and, where there is an
obvious fix, says what to set instead.
"""

from typing import Any, Optional, Sequence


class ConfigError(Exception):
    pass


class ConfigValidationError(ConfigError):
    """A setting is present but unusable."""

    def __init__(self, key: str, value: Any, reason: str, suggestion: Optional[str] = None):
        self.key = key
        self.value = value
        self.reason = reason
        self.suggestion = suggestion

        lines = [f"{key}={value!r} is invalid: {reason}"]
        if suggestion:
            lines.append(f"  Suggestion: {suggestion}")
        super().__init__("\n".join(lines))


class ConfigTypeError(ConfigValidationError):
    """The value cannot be read as the expected type."""

    def __init__(self, key: str, value: Any, expected_type: type):
        self.expected_type = expected_type
        super().__init__(
            key,
            value,
            f"not a valid {expected_type.__name__}",
            f"Set {key} to a {expected_type.__name__} value or remove it",
        )


class ConfigRangeError(ConfigValidationError):
    """A number lies outside (min_val, max_val]."""

    def __init__(self, key: str, value: Any, min_val: Optional[Any], max_val: Optional[Any]):
        self.min_val = min_val
        self.max_val = max_val

        bounds = []
        if min_val is not None:
            bounds.append(f"> {min_val}")
        if max_val is not None:
            bounds.append(f"<= {max_val}")

        suggestion = None
        if max_val is not None and value > max_val:
            suggestion = f"Try setting {key}={max_val} or lower"
        super().__init__(key, value, f"must be {' and '.join(bounds)}", suggestion)


class ConfigChoiceError(ConfigValidationError):
    """The value is not one of a fixed set."""

    def __init__(self, key: str, value: Any, choices: Sequence[Any]):
        self.choices = tuple(choices)
        super().__init__(key, value, f"must be one of {', '.join(str(c) for c in self.choices)}")
