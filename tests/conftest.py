"""
Shared test fixtures

Minimal, fast setup for the slice engine tests.
"""

import logging
from decimal import Decimal
from unittest.mock import MagicMock

import pytest


ENGINE_ENV_VARS = (
    'SLICE_ENV',
    'SLICE_STRICT_BALANCE',
    'SLICE_VALUE_QUANTUM',
    'LOG_LEVEL',
    'LOG_DIR',
    'LOG_JSON',
)


@pytest.fixture(autouse=True)
def clean_engine_env(monkeypatch):
    """Keep the developer's shell settings out of the tests."""
    for name in ENGINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_logger():
    """Mock logger"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.debug = MagicMock()
    logger.split = MagicMock()
    logger.unbalanced = MagicMock()
    return logger


class ListHandler(logging.Handler):
    """Collects records instead of writing them anywhere."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def capture_logger():
    """
    Attach a collecting handler to a named logger for the duration of a test.

    Usage:
        handler = capture_logger('slice_engine.aligner')
        ...
        assert handler.records
    """
    attached = []

    def attach(name):
        handler = ListHandler()
        logging.getLogger(name).addHandler(handler)
        attached.append((name, handler))
        return handler

    yield attach

    for name, handler in attached:
        logging.getLogger(name).removeHandler(handler)


@pytest.fixture
def sample_prices():
    """Sample per-lot values for Decimal tests"""
    return {
        "lot-a": Decimal("50.00"),
        "lot-b": Decimal("100.00"),
        "lot-c": Decimal("10.00"),
    }
