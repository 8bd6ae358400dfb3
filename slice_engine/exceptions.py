"""
Exceptions raised by the slice engine.

Every exception keeps the offending data as attributes so callers can report
or correct the upstream records without parsing the message.
"""

from typing import Any, Optional


class SliceEngineError(Exception):
    """Base exception for all slice engine errors."""
    pass


class EmptyInputError(SliceEngineError):
    """Raised when the source or destination sequence has no records."""

    def __init__(self, side: str):
        self.side = side
        super().__init__(f"{side.capitalize()} sequence must not be empty")


class NonPositiveQuantityError(SliceEngineError):
    """Raised when an input record has a quantity of zero or less."""

    def __init__(self, side: str, index: int, quantity: Any):
        self.side = side
        self.index = index
        self.quantity = quantity
        super().__init__(
            f"{side.capitalize()} record #{index} has quantity {quantity}; "
            f"only strictly positive quantities can be aligned\n"
            f"  Suggestion: filter out zero-quantity records before aligning"
        )


class SplitOffsetError(SliceEngineError, ValueError):
    """Raised when a split offset lies outside [0, quantity]."""

    def __init__(self, offset: Any, quantity: Any):
        self.offset = offset
        self.quantity = quantity
        super().__init__(f"Split offset {offset} must be within 0..{quantity}")


class UnbalancedSequencesError(SliceEngineError):
    """Raised in strict mode when source and destination totals differ."""

    def __init__(self, consumed_quantity: Any, remainder_side: str, remainder_quantity: Any):
        self.consumed_quantity = consumed_quantity
        self.remainder_side = remainder_side
        self.remainder_quantity = remainder_quantity
        super().__init__(
            f"Sequences are unbalanced: aligned {consumed_quantity}, "
            f"{remainder_side} has {remainder_quantity} left over"
        )


class ScaleMismatchError(SliceEngineError, ArithmeticError):
    """Raised when two RoundedDecimal values of different scale are combined."""

    def __init__(self, left_places: int, right_places: int, operation: str):
        self.left_places = left_places
        self.right_places = right_places
        self.operation = operation
        super().__init__(
            f"Cannot {operation} decimals with {left_places} and {right_places} places\n"
            f"  Suggestion: rescale one operand first"
        )


class RoundedDecimalParseError(SliceEngineError, ValueError):
    """Raised when a string cannot be parsed as a RoundedDecimal."""

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        self.reason = reason or "Not a number."
        super().__init__(f"({self.reason}) {text!r}")
