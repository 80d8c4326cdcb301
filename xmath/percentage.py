"""
Percentage: a fraction of some other value.

Represented by a unitless number within the interval ``[0, ∞)``, where ``1``
is the whole of the value.

The set of Percentages has the following properties:

- Percentages are totally ordered.
- Percentages are closed under multiplication.
- Percentages have a unique multiplicative identity ``1`` (``MULT_IDEN``):
  for every percentage ``a``, ``a * 1 == 1 * a == a``.
- Percentages have a unique multiplicative absorber ``0`` (``MULT_ABSORB``):
  for every percentage ``a``, ``a * 0 == 0 * a == 0``.
- Multiplication is commutative and associative.
"""

from __future__ import annotations

import math
import re
import string
from decimal import Decimal
from numbers import Real
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .errors import DomainError, FormatError, RangeError
from .value import MathValue, fuzzy_compare

# A decimal number, optionally signed
NUMBER_PATTERN = r"-?(?:\d+(?:\.\d+)?|\.\d+)"

_DIGITS = string.digits + string.ascii_lowercase

# Every integer below this is exactly representable as a double
_MAX_EXACT_INTEGER = 2 ** 53


def format_number(value: float, radix: int = 10) -> str:
    """
    Format a float the way a JavaScript ``Number#toString(radix)`` would.

    Integral values print without a fractional part; decimal output uses the
    shortest round-tripping representation, switching to exponent notation
    below 1e-6 and from 1e21 up. Other radixes print fraction digits until
    they single out the value among its neighbouring doubles, which is the
    exact expansion for power-of-two radixes.

    Raises:
        RangeError: If radix is outside [2, 36]
    """
    if not 2 <= radix <= 36:
        raise RangeError(f"Radix must be between 2 and 36, got {radix}")
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    if radix == 10:
        if value == int(value) and abs(value) < _MAX_EXACT_INTEGER:
            return str(int(value))
        text = repr(value)
        if value == int(value) and abs(value) < 1e21:
            # Digits past the shortest repr are zeros, not the binary expansion
            return format(Decimal(text).to_integral_value(), 'f')
        if 'e' in text:
            if 1e-6 <= abs(value) < 1e21:
                return format(Decimal(text), 'f')
            mantissa, exponent = text.split('e')
            exp = int(exponent)
            return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"
        return text

    sign = "-" if value < 0 else ""
    value = abs(value)
    integer = int(value)
    fraction = value - integer
    # Half the gap to the next double
    delta = max(0.5 * (math.nextafter(value, math.inf) - value), math.nextafter(0.0, 1.0))

    frac_digits: list[int] = []
    if fraction >= delta:
        while True:
            fraction *= radix
            delta *= radix
            digit = int(fraction)
            frac_digits.append(digit)
            fraction -= digit
            if (fraction > 0.5 or (fraction == 0.5 and digit & 1)) and fraction + delta > 1:
                # Round the last digit up, carrying into earlier ones
                while frac_digits and frac_digits[-1] + 1 == radix:
                    frac_digits.pop()
                if frac_digits:
                    frac_digits[-1] += 1
                else:
                    integer += 1
                break
            if fraction < delta:
                break

    int_digits = ""
    while integer:
        integer, digit = divmod(integer, radix)
        int_digits = _DIGITS[digit] + int_digits
    int_digits = int_digits or "0"

    if not frac_digits:
        return f"{sign}{int_digits}"
    return f"{sign}{int_digits}.{''.join(_DIGITS[d] for d in frac_digits)}"


class Percentage(MathValue, BaseModel):
    """
    A fraction of some other value, within ``[0, ∞)``.

    Examples:
        >>> Percentage(0.5).times(Percentage(0.5))
        Percentage(25%)
        >>> Percentage.from_string('50%').conjugate
        Percentage(50%)
    """

    model_config = ConfigDict(frozen=True)

    value: float = Field(default=0.0, description="The numeric value, where 1 is the whole")

    # The multiplicative identity of the monoid of Percentages
    MULT_IDEN: ClassVar[Percentage]
    # The multiplicative absorber of the monoid of Percentages
    MULT_ABSORB: ClassVar[Percentage]

    # A string in Percentage format
    REGEXP: ClassVar[re.Pattern[str]] = re.compile(rf"^{NUMBER_PATTERN}%$")

    def __init__(self, value: Percentage | float | int = 0, **kwargs: Any):
        """
        Construct a new Percentage.

        Args:
            value: The numeric value, or another Percentage

        Raises:
            TypeError: If value is not a real number
            DomainError: If value is negative or not finite
        """
        if isinstance(value, Percentage):
            number = value.value
        elif isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"Cannot convert {type(value).__name__} to Percentage")
        else:
            number = float(value)

        if not math.isfinite(number):
            raise DomainError(f"Percentage must be finite, got {number}")
        if number < 0:
            raise DomainError(f"Percentage must be non-negative, got {number}")

        super().__init__(value=number, **kwargs)

    @classmethod
    def _coerce(cls, pct: Percentage | float | int) -> Percentage:
        return pct if isinstance(pct, Percentage) else cls(pct)

    # Construction helpers

    @staticmethod
    def max(*pcts: Percentage) -> Percentage:
        """
        Return the maximum of two or more Percentages.

        Args:
            pcts: two or more Percentages to compare

        Returns:
            the greatest of all the arguments
        """
        if len(pcts) < 2:
            raise TypeError(f"Percentage.max() expects at least 2 arguments, got {len(pcts)}")
        return Percentage(max(Percentage._coerce(p).value for p in pcts))

    @staticmethod
    def min(*pcts: Percentage) -> Percentage:
        """
        Return the minimum of two or more Percentages.

        Args:
            pcts: two or more Percentages to compare

        Returns:
            the least of all the arguments
        """
        if len(pcts) < 2:
            raise TypeError(f"Percentage.min() expects at least 2 arguments, got {len(pcts)}")
        return Percentage(min(Percentage._coerce(p).value for p in pcts))

    @classmethod
    def from_string(cls, text: str) -> Percentage:
        """
        Parse a string matching ``Percentage.REGEXP``, such as ``'12.5%'``.

        The numeric part is read as base 10 and divided by 100.

        Raises:
            FormatError: If the string does not match
            DomainError: If the string encodes a negative percentage
        """
        if not isinstance(text, str) or not cls.REGEXP.match(text):
            raise FormatError("Invalid percentage format", str(text))
        return cls(float(text[:-1]) / 100)

    # Algebra

    @property
    def conjugate(self) -> Percentage:
        """
        Get the conjugate of this Percentage.

        The conjugate is the remaining Percentage required to add up to one
        whole (1, or 100%). Only defined for percentages up to 100%.

        Raises:
            RangeError: If this Percentage is less than 0% or more than 100%
        """
        if self.value < 0 or 1 < self.value:
            raise RangeError(f"No conjugate exists for {self.to_string()}")
        return Percentage(1 - self.value)

    @property
    def reciprocal(self) -> Percentage:
        """
        Get the multiplicative inverse of this Percentage.

        The reciprocal of ``MULT_ABSORB``, and of any Percentage small enough
        that the division overflows, is an infinite Percentage; it is built
        without validation since no finite value exists.
        """
        if self.value == 0:
            return Percentage.model_construct(value=math.inf)
        result = Percentage.MULT_IDEN.value / self.value
        if math.isinf(result):
            return Percentage.model_construct(value=math.inf)
        return Percentage(result)

    def times(self, multiplier: Percentage | float | int = 1) -> Percentage:
        """
        Multiply this Percentage (the multiplicand) by another (the multiplier).

        Returns:
            a new Percentage representing the product
        """
        return Percentage(self.value * Percentage._coerce(multiplier).value)

    def of(self, x: float) -> float:
        """Return the argument scaled by this Percentage."""
        return self.value * x

    def clamp(
        self,
        min: Percentage | float | int = 0,
        max: Percentage | float | int = 1,
    ) -> Percentage:
        """
        Return this Percentage, clamped between two bounds.

        Returns this unchanged iff it is weakly between ``min`` and ``max``;
        ``min`` iff this is strictly less than ``min``; ``max`` iff this is
        strictly greater than ``max``. If ``min > max`` the bounds are swapped.
        """
        low, high = Percentage._coerce(min), Percentage._coerce(max)
        if high.less_than(low):
            low, high = high, low
        if self.less_than(low):
            return low
        if high.less_than(self):
            return high
        return self

    # Ordering

    def equals(self, pct: Percentage | float | int) -> bool:
        """Return whether this Percentage's value equals the argument's."""
        return self is pct or self.value == Percentage._coerce(pct).value

    def less_than(self, pct: Percentage | float | int) -> bool:
        """Return whether this Percentage is strictly less than the argument."""
        return self.value < Percentage._coerce(pct).value

    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """Fuzzy comparison of percentages."""
        if isinstance(other, Percentage):
            other_value = other.value
        elif isinstance(other, Real) and not isinstance(other, bool):
            other_value = float(other)
        else:
            return False
        return fuzzy_compare(self.value, other_value, tolerance, mode)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Percentage):
            return self.value == other.value
        if isinstance(other, Real) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, (Percentage, Real)):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, (Percentage, Real)):
            return NotImplemented
        return self.less_than(other) or self.equals(other)

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, (Percentage, Real)):
            return NotImplemented
        return Percentage._coerce(other).less_than(self)

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, (Percentage, Real)):
            return NotImplemented
        return self.__gt__(other) or self.equals(other)

    def __mul__(self, other: Any) -> Percentage:
        if not isinstance(other, (Percentage, Real)):
            return NotImplemented
        return self.times(other)

    def __rmul__(self, other: Any) -> Percentage:
        return self.__mul__(other)

    def __float__(self) -> float:
        return self.value

    # Output formats

    def to_string(self, radix: int = 10) -> str:
        """
        Format as ``<value * radix**2 in the given radix>%``.

        >>> Percentage(0.5).to_string()
        '50%'
        >>> Percentage(0.5).to_string(16)
        '80%'
        """
        return f"{format_number(radix ** 2 * self.value, radix)}%"

    def to_tex(self) -> str:
        """Convert to LaTeX (percent sign escaped)."""
        return f"{format_number(100 * self.value)}\\%"

    def to_python(self) -> float:
        """Convert to Python float."""
        return self.value


Percentage.MULT_IDEN = Percentage(1)
Percentage.MULT_ABSORB = Percentage(0)
