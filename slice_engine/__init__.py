"""
Slice Engine

Reconciles two independently partitioned sequences of quantified records
(purchase lots against shipment lots, one ledger against another) onto a
shared partition of their quantity axis.

Key Components:
- split_item: Splits one record at a quantity offset, sharing its values
  in proportion and conserving them exactly
- SequenceAligner: Walks both sequences and emits pairs of equal quantity
- AlignmentValidator: Validates alignment invariants
- RoundedDecimal: Scaled fixed-point decimal usable as quantity or value
- Models: Aligned segments and tagged alignment results

Architecture:
- Records are owned by the caller and only need get_key / get_values /
  with_key_and_values
- Splitting never mutates a record; it returns two new ones
- Unequal totals are reported (Unbalanced) or raised (strict mode)

Usage:
    from slice_engine import SequenceAligner

    result = SequenceAligner().align(purchase_lots, shipment_lots)
    for purchase, shipment in result.pairs:
        ...
"""

from .aligner import SequenceAligner, align, split_all
from .exceptions import (
    EmptyInputError,
    NonPositiveQuantityError,
    RoundedDecimalParseError,
    ScaleMismatchError,
    SliceEngineError,
    SplitOffsetError,
    UnbalancedSequencesError,
)
from .models import (
    AlignedSegment,
    AlignerState,
    AlignmentResult,
    AlignmentStep,
    FullyReconciled,
    Side,
    Unbalanced,
    ValidationResult,
)
from .records import DictSplitItem, FieldSplitItem, SplitItem
from .rounded_decimal import RoundedDecimal
from .splitter import split_item
from .validator import AlignmentValidator

__all__ = [
    'SequenceAligner',
    'align',
    'split_all',
    'split_item',
    'AlignmentValidator',
    'RoundedDecimal',
    'SplitItem',
    'FieldSplitItem',
    'DictSplitItem',
    'AlignedSegment',
    'AlignerState',
    'AlignmentResult',
    'AlignmentStep',
    'FullyReconciled',
    'Unbalanced',
    'Side',
    'ValidationResult',
    'SliceEngineError',
    'EmptyInputError',
    'NonPositiveQuantityError',
    'SplitOffsetError',
    'UnbalancedSequencesError',
    'ScaleMismatchError',
    'RoundedDecimalParseError',
]

__version__ = '1.0.0'
