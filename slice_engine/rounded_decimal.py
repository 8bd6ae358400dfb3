"""
Scaled fixed-point decimal.

A RoundedDecimal is an integer ``value`` and a number of decimal ``places``:
``RoundedDecimal(10, 2)`` is 0.10. Addition, subtraction and ordering only
combine operands of the same scale; mixing scales raises ScaleMismatchError
instead of silently reinterpreting magnitudes. Plain ints are promoted to the
decimal's scale for arithmetic, ordering and equality. Division truncates
toward zero, which is what the splitter relies on to keep value conservation
exact.

Usage:
    price = RoundedDecimal.from_str("0.51")
    qty = RoundedDecimal.from_int(5)
    left_price = price * RoundedDecimal.from_int(3) / qty   # 0.30
"""

import re
from dataclasses import dataclass
from decimal import Decimal

from Shared_Utils.precision import truncating_div
from .exceptions import RoundedDecimalParseError, ScaleMismatchError


_INTEGER_PART = re.compile(r'[+-]?[0-9]+')
_FRACTION_PART = re.compile(r'[0-9]+')


@dataclass(frozen=True, eq=False)
class RoundedDecimal:
    value: int
    places: int = 0

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"value must be int, got {type(self.value).__name__}")
        if isinstance(self.places, bool) or not isinstance(self.places, int) or self.places < 0:
            raise ValueError(f"places must be a non-negative int, got {self.places!r}")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> 'RoundedDecimal':
        return cls(value, 0)

    @classmethod
    def zero(cls, places: int = 0) -> 'RoundedDecimal':
        return cls(0, places)

    @classmethod
    def from_str(cls, text: str) -> 'RoundedDecimal':
        """
        Parse ``"1"``, ``"-0.5"`` or ``"0.10"``.

        The number of digits after the dot becomes the scale, so ``"0.10"``
        keeps two places.

        Raises:
            RoundedDecimalParseError: text is not an optionally signed
                integer with at most one dot
        """
        parts = text.split('.')
        if len(parts) > 2:
            raise RoundedDecimalParseError(text, "Invalid dot number.")

        whole = parts[0]
        fraction = parts[1] if len(parts) == 2 else ''

        if not _INTEGER_PART.fullmatch(whole):
            raise RoundedDecimalParseError(text)
        if len(parts) == 2 and not _FRACTION_PART.fullmatch(fraction):
            raise RoundedDecimalParseError(text)

        negative = whole.startswith('-')
        places = len(fraction)
        magnitude = abs(int(whole)) * 10 ** places + (int(fraction) if fraction else 0)
        return cls(-magnitude if negative else magnitude, places)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def rescale(self, places: int) -> 'RoundedDecimal':
        """Return the same number at another scale, truncating extra digits."""
        if places >= self.places:
            return RoundedDecimal(self.value * 10 ** (places - self.places), places)
        return RoundedDecimal(truncating_div(self.value, 10 ** (self.places - places)), places)

    def to_decimal(self) -> Decimal:
        return Decimal(self.value).scaleb(-self.places)

    def __str__(self) -> str:
        if self.places == 0:
            return str(self.value)
        sign = '-' if self.value < 0 else ''
        whole, fraction = divmod(abs(self.value), 10 ** self.places)
        return f"{sign}{whole}.{fraction:0{self.places}d}"

    def __repr__(self) -> str:
        return f"RoundedDecimal({self.value}, {self.places})"

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _same_scale(self, other, operation: str):
        """Promote ints to this scale; refuse RoundedDecimals of another scale."""
        if isinstance(other, RoundedDecimal):
            if other.places != self.places:
                raise ScaleMismatchError(self.places, other.places, operation)
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return RoundedDecimal(other * 10 ** self.places, self.places)
        return None

    def __add__(self, other):
        other = self._same_scale(other, 'add')
        if other is None:
            return NotImplemented
        return RoundedDecimal(self.value + other.value, self.places)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._same_scale(other, 'subtract')
        if other is None:
            return NotImplemented
        return RoundedDecimal(self.value - other.value, self.places)

    def __rsub__(self, other):
        other = self._same_scale(other, 'subtract')
        if other is None:
            return NotImplemented
        return RoundedDecimal(other.value - self.value, self.places)

    def __mul__(self, other):
        # Exact: scales add up
        if isinstance(other, RoundedDecimal):
            return RoundedDecimal(self.value * other.value, self.places + other.places)
        if isinstance(other, int) and not isinstance(other, bool):
            return RoundedDecimal(self.value * other, self.places)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            other = RoundedDecimal(other, 0)
        if not isinstance(other, RoundedDecimal):
            return NotImplemented
        places = self.places - other.places
        if places < 0:
            raise ScaleMismatchError(self.places, other.places, 'divide')
        if other.value == 0:
            raise ZeroDivisionError("RoundedDecimal division by zero")
        return RoundedDecimal(truncating_div(self.value, other.value), places)

    def __rtruediv__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            return RoundedDecimal(other, 0) / self
        return NotImplemented

    def __neg__(self):
        return RoundedDecimal(-self.value, self.places)

    def __pos__(self):
        return self

    def __abs__(self):
        return RoundedDecimal(abs(self.value), self.places)

    def __bool__(self):
        return self.value != 0

    # ------------------------------------------------------------------
    # Equality and ordering
    # ------------------------------------------------------------------

    def __eq__(self, other):
        # Structural between RoundedDecimals: 0.1 != 0.10
        if isinstance(other, RoundedDecimal):
            return self.value == other.value and self.places == other.places
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other * 10 ** self.places
        return NotImplemented

    def __hash__(self):
        # Whole numbers hash like the int they equal
        whole, fraction = divmod(self.value, 10 ** self.places)
        if fraction == 0:
            return hash(whole)
        return hash((self.value, self.places))

    def __lt__(self, other):
        other = self._same_scale(other, 'compare')
        if other is None:
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        other = self._same_scale(other, 'compare')
        if other is None:
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        other = self._same_scale(other, 'compare')
        if other is None:
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        other = self._same_scale(other, 'compare')
        if other is None:
            return NotImplemented
        return self.value >= other.value
