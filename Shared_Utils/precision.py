"""
Numeric helpers shared by the splitter and the aligner.

Quantities and values are duck-typed: anything with ordering, +, -, * and /
works (int, Decimal, Fraction, RoundedDecimal). These helpers cover the few
places where Python's built-in behaviour differs from fixed-point arithmetic.
"""

import numbers
from decimal import Decimal, ROUND_DOWN, InvalidOperation, localcontext, getcontext
from typing import Any, Optional


def zero_like(value):
    """Return the zero of value's type, keeping any scale the type carries."""
    return value - value


def is_zero(value) -> bool:
    return value == zero_like(value)


def truncating_div(dividend, divisor):
    """
    Divide, truncating toward zero for integers.

    Python's ``/`` turns two ints into a float, so integer operands are divided
    the way fixed-point types do it instead. Every other type uses its own
    ``/`` (RoundedDecimal truncates, Decimal rounds to context precision).
    """
    if isinstance(dividend, numbers.Integral) and isinstance(divisor, numbers.Integral):
        if divisor == 0:
            raise ZeroDivisionError("integer division by zero")
        quotient = abs(dividend) // abs(divisor)
        return quotient if (dividend >= 0) == (divisor > 0) else -quotient
    return dividend / divisor


def scale_by_ratio(value, numerator, denominator, quantum: Optional[Decimal] = None):
    """
    Return ``value * numerator / denominator``.

    Multiplication happens first so that truncating types lose as little as
    possible. A Decimal result is cut down to ``quantum`` when one is given.
    """
    scaled = truncating_div(value * numerator, denominator)
    if quantum is not None and isinstance(scaled, Decimal):
        scaled = safe_quantize(scaled, quantum)
    return scaled


def safe_quantize(value: Decimal, precision: Decimal, rounding=ROUND_DOWN) -> Decimal:
    """
    Quantize value to precision, truncating by default.

    Large integer parts can overflow the context precision; the context is
    widened for that one call instead of failing.
    """
    if not value.is_finite():
        raise InvalidOperation(f"cannot quantize non-finite value {value}")
    try:
        return value.quantize(precision, rounding=rounding)
    except InvalidOperation:
        with localcontext() as ctx:
            int_part = abs(value).to_integral_value(rounding=ROUND_DOWN)
            int_digits = len(int_part.as_tuple().digits) or 1
            # precision exponent is negative: e.g., precision=Decimal('1E-5') -> scale 5
            scale = max(-precision.as_tuple().exponent, 0)
            ctx.prec = max(int_digits + scale, getcontext().prec)
            return value.quantize(precision, rounding=rounding)


def safe_decimal(value: Any) -> Decimal:
    """Convert value to Decimal, going through str for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise ValueError(f"cannot convert {value!r} to Decimal") from e
