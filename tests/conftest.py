"""
Shared pytest fixtures and utilities for testing the xmath value types.

This module provides:
- Context isolation between tests
- Fixtures for comparing matrices within a tolerance
- Utilities for testing Pydantic serialization
"""

import pytest
from typing import Any, Type, TypeVar
from pydantic import BaseModel

from xmath.context import reset_contexts
from xmath.value import ToleranceMode


T = TypeVar('T', bound=BaseModel)


@pytest.fixture(autouse=True)
def fresh_context():
    """Start every test from the default Numeric context."""
    reset_contexts()
    yield
    reset_contexts()


@pytest.fixture
def assert_matrix_close():
    """Helper to assert that two matrices agree cell by cell within an absolute tolerance."""
    def _assert_close(actual: Any, expected: Any, tolerance: float = 1e-9) -> None:
        """
        Assert that two matrices are equal within tolerance.

        Args:
            actual: Matrix or MatrixSquare under test
            expected: Matrix, MatrixSquare or nested list of expected cells
            tolerance: Absolute tolerance per cell
        """
        from xmath.matrix import Matrix

        if isinstance(expected, list):
            expected = Matrix(expected)
        assert actual.compare(expected, tolerance, ToleranceMode.ABSOLUTE), (
            f"Matrices not close:\n{actual.to_string()}\n!=\n{expected.to_string()}"
        )

    return _assert_close


@pytest.fixture
def assert_serializable():
    """Helper to assert that a model can be serialized and validated back."""
    def _assert_serialization(model: BaseModel, model_class: Type[T]) -> T:
        """
        Assert that a model can be dumped to a dict and validated back.

        Args:
            model: The model instance to test
            model_class: The model class for reconstruction

        Returns:
            The reconstructed model
        """
        serialized = model.model_dump()
        reconstructed = model_class.model_validate(serialized)

        assert reconstructed.model_dump() == serialized
        assert reconstructed == model

        return reconstructed

    return _assert_serialization


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
