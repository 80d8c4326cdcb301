"""
Geometric value types: Vector.

A Vector is a fixed-dimension tuple of finite reals supporting dot and cross
products, magnitude and component-wise arithmetic.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Iterable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .errors import DimensionMismatchError, IndexRangeError, UndefinedOperationError
from .value import MathValue, coerce_real, format_real, fuzzy_compare


class Vector(MathValue, BaseModel):
    """
    Vector in n-dimensional space.

    Supports vector operations: dot product, cross product, magnitude, etc.

    Examples:
        >>> Vector(1, 0, 0).cross(Vector(0, 1, 0))
        Vector(<0, 0, 1>)
        >>> Vector([3, 4]).magnitude
        5.0
    """

    model_config = ConfigDict(frozen=True)

    components: tuple[float, ...] = Field(default_factory=tuple)

    def __init__(
        self,
        *args: Any,
        components: Iterable[Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a Vector from positional components, one iterable, or ``components=``."""
        if components is not None and args:
            raise ValueError("Vector accepts either components or positional arguments, not both")

        if components is None:
            components = self._parse_arguments(args)

        super().__init__(components=self._coerce_components(components), **kwargs)

    @staticmethod
    def _parse_arguments(args: tuple[Any, ...]) -> Iterable[Any]:
        """Parse constructor arguments into vector components."""
        if len(args) == 1:
            single = args[0]
            if isinstance(single, Vector):
                return single.components
            if isinstance(single, np.ndarray):
                return single.tolist()
            if isinstance(single, (list, tuple)):
                return single
        return args

    @staticmethod
    def _coerce_components(raw_components: Iterable[Any]) -> tuple[float, ...]:
        """Convert raw component values into finite floats."""
        return tuple(coerce_real(comp, "vector component") for comp in raw_components)

    @property
    def raw(self) -> tuple[float, ...]:
        """The components as a plain tuple."""
        return self.components

    @property
    def dimension(self) -> int:
        """Number of components."""
        return len(self.components)

    def __len__(self) -> int:
        """Dimension of the vector."""
        return len(self.components)

    def __getitem__(self, index: int) -> float:
        """Get component by index; negative indices are out of range, as for Matrix."""
        if not 0 <= index < self.dimension:
            raise IndexRangeError(
                f"Component index {index} out of range for dimension {self.dimension}"
            )
        return self.components[index]

    def __iter__(self):
        return iter(self.components)

    def _require_same_dimension(self, other: Vector, operation: str) -> None:
        if self.dimension != other.dimension:
            raise DimensionMismatchError(
                f"Vectors must have same dimension for {operation}",
                expected=self.dimension,
                actual=other.dimension,
            )

    # Vector operations

    @property
    def magnitude(self) -> float:
        """Euclidean norm ||v||."""
        return math.sqrt(sum(c ** 2 for c in self.components))

    def unit(self) -> Vector:
        """
        Return the unit vector (normalized).

        Raises:
            UndefinedOperationError: For the zero vector
        """
        magnitude = self.magnitude
        if magnitude == 0:
            raise UndefinedOperationError("Cannot normalize zero vector")
        return Vector([c / magnitude for c in self.components])

    def dot(self, other: Vector) -> float:
        """
        Dot product with another vector.

        Raises:
            DimensionMismatchError: If the dimensions differ
        """
        self._require_same_dimension(other, "dot product")
        return sum(a * b for a, b in zip(self.components, other.components))

    def cross(self, other: Vector) -> Vector:
        """
        Cross product with another vector (3D only).

        Returns:
            Vector perpendicular to both

        Raises:
            DimensionMismatchError: Unless both vectors are 3-dimensional
        """
        if self.dimension != 3 or other.dimension != 3:
            raise DimensionMismatchError(
                "Cross product only defined for 3D vectors",
                expected=(3, 3),
                actual=(self.dimension, other.dimension),
            )
        a1, a2, a3 = self.components
        b1, b2, b3 = other.components
        return Vector(a2 * b3 - a3 * b2, a3 * b1 - a1 * b3, a1 * b2 - a2 * b1)

    # Comparison

    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """Compare vectors component-wise."""
        if not isinstance(other, Vector) or self.dimension != other.dimension:
            return False
        return all(
            fuzzy_compare(a, b, tolerance, mode) for a, b in zip(self.components, other.components)
        )

    def equals(self, other: Vector) -> bool:
        """Exact component-wise equality."""
        return isinstance(other, Vector) and self.components == other.components

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.components)

    # Output formats

    def to_string(self) -> str:
        """Convert to string."""
        comps_str = ", ".join(format_real(c) for c in self.components)
        return f"<{comps_str}>"

    def to_tex(self) -> str:
        """Convert to LaTeX."""
        comps_str = ", ".join(format_real(c) for c in self.components)
        return f"\\left\\langle {comps_str} \\right\\rangle"

    def to_python(self) -> list[float]:
        """Convert to Python list."""
        return list(self.components)

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array."""
        return np.array(self.components)

    # Arithmetic operators

    def __add__(self, other: Any) -> Vector:
        """Vector addition."""
        if not isinstance(other, Vector):
            return NotImplemented
        self._require_same_dimension(other, "addition")
        return Vector([a + b for a, b in zip(self.components, other.components)])

    def __sub__(self, other: Any) -> Vector:
        """Vector subtraction."""
        if not isinstance(other, Vector):
            return NotImplemented
        self._require_same_dimension(other, "subtraction")
        return Vector([a - b for a, b in zip(self.components, other.components)])

    def __mul__(self, other: Any) -> Vector:
        """Scalar multiplication."""
        if isinstance(other, bool) or not isinstance(other, Real):
            return NotImplemented
        return Vector([c * other for c in self.components])

    def __rmul__(self, other: Any) -> Vector:
        """Right scalar multiplication."""
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Vector:
        """Scalar division."""
        if isinstance(other, bool) or not isinstance(other, Real):
            return NotImplemented
        if other == 0:
            raise UndefinedOperationError("Cannot divide vector by zero")
        return Vector([c / other for c in self.components])

    def __neg__(self) -> Vector:
        """Unary negation."""
        return Vector([-c for c in self.components])

    def __pos__(self) -> Vector:
        """Unary positive."""
        return self

    def __abs__(self) -> float:
        """Magnitude (norm)."""
        return self.magnitude
