"""
Base MathValue class for the xmath value types.

This module provides the foundation shared by every value object:
- Fuzzy comparison with context-controlled tolerances
- Multiple output formats (string, TeX, Python natives)
- Numeric coercion of raw Python inputs
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any

from .errors import DomainError


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol


# Floor for floating point comparisons
EPSILON = 1e-12


def fuzzy_compare(
    a: float,
    b: float,
    tolerance: float | None = None,
    mode: str | None = None,
) -> bool:
    """
    Compare two floats with tolerance.

    Missing settings are read from the flags of the current context.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value (None = context ``tolerance``)
        mode: Comparison mode, relative or absolute (None = context ``tolType``)

    Returns:
        True if values are equal within tolerance
    """
    if a == b:
        return True

    from .context import get_current_context

    flags = get_current_context().flags
    if tolerance is None:
        tolerance = flags.get('tolerance', 0.001)
    if mode is None:
        mode = flags.get('tolType', ToleranceMode.RELATIVE)

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance + EPSILON

    # Values this close to zero are compared absolutely
    max_abs = max(abs(a), abs(b))
    if max_abs < flags.get('zeroLevel', 1e-14):
        return abs(a - b) <= flags.get('zeroLevelTol', 1e-12)
    if max_abs == 0:
        return abs(a - b) <= tolerance + EPSILON
    return abs(a - b) / max_abs <= tolerance + EPSILON


def coerce_real(value: Any, what: str = "value") -> float:
    """
    Convert a Python number to a finite float.

    Raises:
        TypeError: If value is not a real number
        DomainError: If value is NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        # numpy scalars register as numbers.Real; anything else is rejected
        raise TypeError(f"Cannot convert {type(value).__name__} to a real {what}")
    number = float(value)
    if not math.isfinite(number):
        raise DomainError(f"{what.capitalize()} must be finite, got {number}")
    return number


def format_real(value: float) -> str:
    """Format a number, dropping the fractional part of integral values."""
    if value == int(value) and abs(value) < 1e10:
        return str(int(value))
    return str(value)


class MathValue(ABC):
    """
    Base class for all mathematical value objects.

    Subclasses must implement:
    - compare: fuzzy equality
    - to_string, to_tex, to_python: output formats

    Note: Concrete subclasses inherit from both MathValue and BaseModel,
    e.g., `class Percentage(MathValue, BaseModel):`, so that __str__ and
    __repr__ below win over the BaseModel versions. MathValue itself is
    abstract and does not inherit from BaseModel to avoid MRO conflicts.
    """

    @abstractmethod
    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """
        Fuzzy comparison with tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance for comparison (None = context default)
            mode: Tolerance mode (None = context default)

        Returns:
            True if values are equal within tolerance
        """

    # String representations

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python native type."""

    def __str__(self) -> str:
        """String representation (uses to_string)."""
        return self.to_string()

    def __repr__(self) -> str:
        """Debug representation."""
        return f"{self.__class__.__name__}({self.to_string()})"
