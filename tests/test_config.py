"""
Tests for environment loading and configuration validation.
"""

import pytest
from decimal import Decimal
from pathlib import Path

from Config.environment import Environment, env, get_environment
from Config.exceptions import ConfigChoiceError, ConfigError, ConfigRangeError, ConfigTypeError
from Config.validators import (
    ENGINE_RULES,
    ChoiceRule,
    RangeRule,
    TypeRule,
    validate_all_config,
    validate_config_dict,
    validate_engine_settings,
)


GOOD_SETTINGS = {
    'SLICE_ENV': 'production',
    'SLICE_STRICT_BALANCE': True,
    'SLICE_VALUE_QUANTUM': Decimal('0.01'),
    'LOG_LEVEL': 'SPLIT',
}


class TestEnvironmentDefaults:

    def test_defaults(self):
        environment = Environment(env_file=None)

        assert environment.env_name == 'development'
        assert environment.is_production is False
        assert environment.strict_balance is False
        assert environment.value_quantum is None
        assert environment.log_level == 'INFO'
        assert environment.log_dir is None
        assert environment.log_json is None

    def test_get_environment_reads_the_global_instance(self, monkeypatch):
        monkeypatch.setenv('SLICE_ENV', 'Staging')

        assert get_environment() == 'staging'
        assert env.is_production is True


class TestEnvironmentParsing:

    @pytest.mark.parametrize("raw,expected", [
        ('true', True), ('1', True), ('YES', True), ('on', True),
        ('false', False), ('0', False), ('no', False), ('', False),
    ])
    def test_strict_balance(self, monkeypatch, raw, expected):
        monkeypatch.setenv('SLICE_STRICT_BALANCE', raw)

        assert Environment().strict_balance is expected

    def test_strict_balance_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv('SLICE_STRICT_BALANCE', 'maybe')

        with pytest.raises(ConfigTypeError) as exc_info:
            Environment().strict_balance

        assert exc_info.value.key == 'SLICE_STRICT_BALANCE'

    def test_value_quantum(self, monkeypatch):
        monkeypatch.setenv('SLICE_VALUE_QUANTUM', ' 0.01 ')

        assert Environment().value_quantum == Decimal('0.01')

    @pytest.mark.parametrize("raw", ['abc', 'NaN'])
    def test_value_quantum_must_be_a_number(self, monkeypatch, raw):
        monkeypatch.setenv('SLICE_VALUE_QUANTUM', raw)

        with pytest.raises(ConfigTypeError):
            Environment().value_quantum

    @pytest.mark.parametrize("raw", ['0', '-0.01', '5'])
    def test_value_quantum_range(self, monkeypatch, raw):
        monkeypatch.setenv('SLICE_VALUE_QUANTUM', raw)

        with pytest.raises(ConfigRangeError):
            Environment().value_quantum

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'debug')

        assert Environment().log_level == 'DEBUG'

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'loud')

        with pytest.raises(ConfigChoiceError) as exc_info:
            Environment().log_level

        assert 'SPLIT' in exc_info.value.choices

    def test_log_dir_and_json(self, monkeypatch, tmp_path):
        monkeypatch.setenv('LOG_DIR', str(tmp_path))
        monkeypatch.setenv('LOG_JSON', 'true')

        environment = Environment()

        assert environment.log_dir == Path(tmp_path)
        assert environment.log_json is True

    def test_as_dict(self, monkeypatch):
        monkeypatch.setenv('SLICE_ENV', 'test')

        assert Environment().as_dict() == {
            'SLICE_ENV': 'test',
            'SLICE_STRICT_BALANCE': False,
            'SLICE_VALUE_QUANTUM': None,
            'LOG_LEVEL': 'INFO',
        }


class TestDotenvLoading:

    @pytest.fixture
    def env_file(self, tmp_path, monkeypatch):
        # Registered with monkeypatch so whatever load_dotenv sets is undone
        for name in ('SLICE_ENV', 'SLICE_STRICT_BALANCE'):
            monkeypatch.setenv(name, 'placeholder')
            monkeypatch.delenv(name)

        path = tmp_path / '.env'
        path.write_text("SLICE_ENV=staging\nSLICE_STRICT_BALANCE=true\n")
        return path

    def test_values_come_from_the_file(self, env_file):
        environment = Environment(env_file=env_file)
        environment.load()

        assert environment.env_name == 'staging'
        assert environment.strict_balance is True

    def test_process_environment_wins(self, env_file, monkeypatch):
        monkeypatch.setenv('SLICE_ENV', 'test')

        environment = Environment(env_file=env_file)
        environment.load()

        assert environment.env_name == 'test'
        assert environment.strict_balance is True

    def test_load_is_idempotent(self, env_file, monkeypatch):
        environment = Environment(env_file=env_file)
        environment.load()
        monkeypatch.delenv('SLICE_ENV')

        environment.load()
        assert environment.env_name == 'development'

        environment.load(force_reload=True)
        assert environment.env_name == 'staging'


class TestValidationRules:

    def test_good_settings_pass(self):
        result = validate_config_dict(GOOD_SETTINGS, ENGINE_RULES)

        assert result
        assert result.errors == []
        assert "All validation checks passed" in result.format_report()

    def test_bad_settings_collect_every_error(self):
        settings = {
            'SLICE_ENV': 'moon',
            'SLICE_STRICT_BALANCE': 'yes',
            'SLICE_VALUE_QUANTUM': Decimal('2'),
            'LOG_LEVEL': 'LOUD',
        }

        result = validate_config_dict(settings, ENGINE_RULES)

        assert not result
        assert [key for key, _ in result.errors] == [
            'SLICE_ENV', 'SLICE_STRICT_BALANCE', 'SLICE_VALUE_QUANTUM', 'LOG_LEVEL',
        ]

    def test_missing_keys_are_warnings(self):
        result = validate_config_dict({'SLICE_ENV': 'test'}, ENGINE_RULES)

        assert result.is_valid
        assert 'SLICE_STRICT_BALANCE' in [key for key, _ in result.warnings]
        assert "VALIDATION WARNINGS" in result.format_report()

    def test_type_rule(self):
        assert TypeRule('X', Decimal, optional=True).validate(None) is None
        assert TypeRule('X', int).validate(True) == "Expected int, got bool"
        assert TypeRule('X', bool).validate(True) is None

    def test_range_rule(self):
        rule = RangeRule('X', low=Decimal('0'), high=Decimal('1'), low_inclusive=False)

        assert rule.validate(None) is None
        assert rule.validate(Decimal('1')) is None
        assert rule.validate(Decimal('0')) == "Must be > 0 and <= 1, got 0"
        assert rule.validate('abc') == "Not a number: 'abc'"
        assert rule.description == "> 0 and <= 1"

    def test_choice_rule(self):
        rule = ChoiceRule('SLICE_ENV', ('test', 'production'))

        assert rule.validate('test') is None
        assert rule.validate('moon') == "Must be one of test, production, got 'moon'"


class TestValidateAllConfig:

    def test_raises_on_error(self):
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            validate_all_config(settings=dict(GOOD_SETTINGS, LOG_LEVEL='LOUD'))

    def test_returns_report_when_not_raising(self):
        result = validate_all_config(raise_on_error=False, settings=dict(GOOD_SETTINGS, SLICE_ENV='moon'))

        assert not result.is_valid
        assert "VALIDATION ERRORS" in result.format_report()

    def test_valid_config_returns_none_when_raising(self):
        assert validate_all_config(settings=GOOD_SETTINGS) is None

    def test_verbose_prints_report(self, capsys):
        validate_all_config(verbose=True, settings=GOOD_SETTINGS)

        assert "CONFIG VALIDATION REPORT" in capsys.readouterr().out

    def test_current_environment_is_validated(self):
        assert validate_engine_settings().is_valid

    def test_environment_errors_become_validation_errors(self, monkeypatch):
        monkeypatch.setenv('SLICE_VALUE_QUANTUM', '5')

        result = validate_engine_settings()

        assert not result.is_valid
        assert result.errors[0][0] == 'SLICE_VALUE_QUANTUM'
        assert "Try setting SLICE_VALUE_QUANTUM=1 or lower" in result.errors[0][1]
