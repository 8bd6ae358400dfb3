"""
Critical Path Test Fixtures

Shared fixtures for reconciliation-critical testing.
These fixtures provide minimal, fast setup for critical tests.
"""

import pytest
from decimal import Decimal

from slice_engine import AlignmentValidator, DictSplitItem, SequenceAligner


@pytest.fixture
def aligner(mock_logger):
    """Non-strict aligner logging to the mock logger"""
    return SequenceAligner(strict=False, logger=mock_logger)


@pytest.fixture
def validator(mock_logger):
    return AlignmentValidator(logger=mock_logger)


@pytest.fixture
def purchase_rows():
    """Two purchase lots as ledger rows"""
    return [
        {
            "order_id": "buy-001",
            "size": Decimal("0.5"),
            "cost": Decimal("20000.00"),
        },
        {
            "order_id": "buy-002",
            "size": Decimal("0.5"),
            "cost": Decimal("20500.00"),
        },
    ]


@pytest.fixture
def purchase_lots(purchase_rows):
    return [DictSplitItem(row, 'size', ['cost']) for row in purchase_rows]
