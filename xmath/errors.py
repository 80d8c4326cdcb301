"""
Exception hierarchy for xmath value types.

Every error carries a human-readable ``message``. Each kind also derives from
the builtin exception a caller would naturally catch for it, so
``except ValueError`` keeps working for domain violations.
"""

from __future__ import annotations


class MathValueError(Exception):
    """Base exception for all xmath errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DomainError(MathValueError, ValueError):
    """A value lies outside the domain a type accepts."""


class DimensionMismatchError(MathValueError, ValueError):
    """Operand shapes are incompatible for the requested operation."""

    def __init__(self, message: str, expected: object = None, actual: object = None):
        self.expected = expected
        self.actual = actual
        if expected is not None or actual is not None:
            message = f"{message} (expected {expected}, got {actual})"
        super().__init__(message)


class RangeError(MathValueError, ValueError):
    """An operation is only defined on a bounded input and the bound was exceeded."""


class IndexRangeError(RangeError, IndexError):
    """A row, column or component index is out of range."""


class FormatError(MathValueError, ValueError):
    """A string does not match the expected format."""

    def __init__(self, message: str, text: str):
        self.text = text
        super().__init__(f"{message}: '{text}'")


class UndefinedOperationError(MathValueError, TypeError):
    """The operation has no defined result for this value (e.g. inverse of a singular matrix)."""
