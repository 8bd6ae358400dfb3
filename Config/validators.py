# Config/validators.py
"""
Validation of the engine settings.

Each setting is checked by one or more rules. A rule returns None for an
acceptable value and a short message otherwise; failures are collected into a
ConfigReport so one run lists every problem.

Usage:
    from Config.validators import validate_all_config

    validate_all_config()  # Raises ConfigError if invalid

    report = validate_all_config(raise_on_error=False)
    if not report:
        print(report.format_report())
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from . import constants_core as core
from .exceptions import ConfigError


# ============================================================================
# Rules
# ============================================================================

@dataclass(frozen=True)
class ValidationRule:
    key: str

    @property
    def description(self) -> str:
        raise NotImplementedError

    def validate(self, value: Any) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class TypeRule(ValidationRule):
    expected_type: type = object
    optional: bool = False

    @property
    def description(self) -> str:
        name = self.expected_type.__name__
        return f"{name} or unset" if self.optional else name

    def validate(self, value: Any) -> Optional[str]:
        if value is None and self.optional:
            return None
        # bool is an int subclass
        wrong_bool = isinstance(value, bool) and self.expected_type is not bool
        if wrong_bool or not isinstance(value, self.expected_type):
            return f"Expected {self.expected_type.__name__}, got {type(value).__name__}"
        return None


@dataclass(frozen=True)
class RangeRule(ValidationRule):
    """Numeric bounds; None passes (pair with an optional TypeRule)."""

    low: Optional[Decimal] = None
    high: Optional[Decimal] = None
    low_inclusive: bool = True
    high_inclusive: bool = True

    @property
    def description(self) -> str:
        bounds = []
        if self.low is not None:
            bounds.append(f"{'>=' if self.low_inclusive else '>'} {self.low}")
        if self.high is not None:
            bounds.append(f"{'<=' if self.high_inclusive else '<'} {self.high}")
        return " and ".join(bounds) or "any number"

    def validate(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return f"Not a number: {value!r}"
        if not number.is_finite():
            return f"Not a finite number: {value!r}"

        too_low = self.low is not None and (number < self.low if self.low_inclusive else number <= self.low)
        too_high = self.high is not None and (number > self.high if self.high_inclusive else number >= self.high)
        if too_low or too_high:
            return f"Must be {self.description}, got {number}"
        return None


@dataclass(frozen=True)
class ChoiceRule(ValidationRule):
    choices: Tuple[Any, ...] = ()

    @property
    def description(self) -> str:
        return "one of " + ", ".join(str(choice) for choice in self.choices)

    def validate(self, value: Any) -> Optional[str]:
        if value not in self.choices:
            return f"Must be {self.description}, got {value!r}"
        return None


ENGINE_RULES: List[ValidationRule] = [
    ChoiceRule('SLICE_ENV', core.KNOWN_ENVIRONMENTS),
    TypeRule('SLICE_STRICT_BALANCE', bool),
    TypeRule('SLICE_VALUE_QUANTUM', Decimal, optional=True),
    RangeRule('SLICE_VALUE_QUANTUM', low=Decimal('0'), high=core.MAX_VALUE_QUANTUM, low_inclusive=False),
    ChoiceRule('LOG_LEVEL', core.LOG_LEVELS),
]


# ============================================================================
# Report
# ============================================================================

@dataclass
class ConfigReport:
    """(key, message) pairs for every failed rule and every missing setting."""

    errors: List[Tuple[str, str]] = field(default_factory=list)
    warnings: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    def format_report(self, include_warnings: bool = True) -> str:
        sections = []
        if self.errors:
            sections.append("VALIDATION ERRORS:\n" + "\n".join(
                f"  ❌ {key}: {message}" for key, message in self.errors
            ))
        if include_warnings and self.warnings:
            sections.append("VALIDATION WARNINGS:\n" + "\n".join(
                f"  ⚠️  {key}: {message}" for key, message in self.warnings
            ))
        return "\n\n".join(sections) or "✅ All validation checks passed!"


# ============================================================================
# Entry points
# ============================================================================

def validate_config_dict(config: dict, rules: List[ValidationRule]) -> ConfigReport:
    """Apply rules to config; a key missing from config is only a warning."""
    report = ConfigReport()
    for rule in rules:
        if rule.key not in config:
            report.warnings.append((rule.key, "Not set, default applies"))
            continue
        problem = rule.validate(config[rule.key])
        if problem:
            report.errors.append((rule.key, problem))
    return report


def validate_engine_settings(settings: Optional[dict] = None) -> ConfigReport:
    """
    Validate engine settings.

    Args:
        settings: Settings to check (default: the current environment). A
            value the environment cannot even parse is reported as an error.
    """
    if settings is None:
        from .environment import env
        try:
            settings = env.as_dict()
        except ConfigError as e:
            return ConfigReport(errors=[(getattr(e, 'key', 'environment'), str(e))])

    return validate_config_dict(settings, ENGINE_RULES)


def validate_all_config(
        raise_on_error: bool = True,
        verbose: bool = False,
        settings: Optional[dict] = None,
) -> Optional[ConfigReport]:
    """
    Validate all configuration.

    Returns:
        The ConfigReport when raise_on_error is False, otherwise None

    Raises:
        ConfigError: validation failed and raise_on_error is True
    """
    report = validate_engine_settings(settings)

    if verbose:
        rule = "=" * 60
        print(f"\n{rule}\nCONFIG VALIDATION REPORT\n{rule}\n{report.format_report()}\n{rule}\n")

    if raise_on_error:
        if not report.is_valid:
            raise ConfigError(f"Config validation failed:\n{report.format_report(include_warnings=False)}")
        return None
    return report
