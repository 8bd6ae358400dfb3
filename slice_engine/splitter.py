"""
Item Splitter

Splits one record in two at a quantity offset, sharing its value attributes
between the halves in proportion to quantity.
"""

from decimal import Decimal
from typing import Optional, Tuple, TypeVar

from Shared_Utils.precision import is_zero, scale_by_ratio, zero_like
from .exceptions import SplitOffsetError
from .records import SplitItem

T = TypeVar('T', bound=SplitItem)


def split_item(item: T, offset, quantum: Optional[Decimal] = None) -> Tuple[T, T]:
    """
    Split item at offset.

    The left half gets ``offset`` and ``value * offset / quantity`` of every
    value. The right half gets whatever is left, computed by subtraction, so
    ``left + right == value`` holds exactly even when the division truncates.

    Args:
        item: Record to split (left untouched)
        offset: Quantity of the left half, 0 <= offset <= item quantity
        quantum: Optional Decimal step the left values are truncated to

    Returns:
        (left, right) fresh records

    Raises:
        SplitOffsetError: offset outside [0, quantity]

    Examples:
        >>> split_item(Lot(qty=2, price=3), 1)
        (Lot(qty=1, price=1), Lot(qty=1, price=2))
    """
    quantity = item.get_key()
    if offset < zero_like(quantity) or offset > quantity:
        raise SplitOffsetError(offset, quantity)

    values = item.get_values()
    if offset == quantity:
        left_values = list(values)
    elif is_zero(offset):
        left_values = [zero_like(value) for value in values]
    else:
        left_values = [scale_by_ratio(value, offset, quantity, quantum) for value in values]
    right_values = [value - left for value, left in zip(values, left_values)]

    left = item.with_key_and_values(offset, left_values)
    right = item.with_key_and_values(quantity - offset, right_values)
    return left, right
