"""
xmath - immutable mathematical value types for geometry, graphics and layout code.

Value types with:
- Immutability (frozen pydantic models)
- Fuzzy comparison controlled by a named Context
- Multiple output formats

Types: Percentage, Vector, Matrix, MatrixSquare, Color.
"""

from .color import Color
from .context import Context, ContextFlags, get_context, get_current_context, set_context
from .errors import (
    DimensionMismatchError,
    DomainError,
    FormatError,
    IndexRangeError,
    MathValueError,
    RangeError,
    UndefinedOperationError,
)
from .geometric import Vector
from .matrix import Matrix, MatrixSquare
from .percentage import Percentage
from .value import MathValue, ToleranceMode, fuzzy_compare

__version__ = "0.1.0"

__all__ = [
    "MathValue",
    "ToleranceMode",
    "fuzzy_compare",
    "Percentage",
    "Vector",
    "Matrix",
    "MatrixSquare",
    "Color",
    "Context",
    "ContextFlags",
    "get_context",
    "get_current_context",
    "set_context",
    "MathValueError",
    "DomainError",
    "DimensionMismatchError",
    "RangeError",
    "IndexRangeError",
    "FormatError",
    "UndefinedOperationError",
]
