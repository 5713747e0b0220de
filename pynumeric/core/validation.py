"""
Input validation utilities for PyNumeric.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Element dtype is preserved: the dtype IS the element domain
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import inspect
import numbers
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumeric.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[Any]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Unlike a statistics front end, integer data is NOT promoted: the dtype
    selects the element domain and therefore the kernel.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with numeric dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (bool, strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """Verify array is 1-dimensional (a Sequence)."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional (a Grid)."""
    check_ndim(array, 2, name)


def check_conformable(
    left: tuple[int, ...],
    right: tuple[int, ...],
    inner: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify the contracted dimensions of two operands agree.

    Args:
        left: Shape of the left operand
        right: Shape of the right operand
        inner: Lengths of the contracted axes (left, right)
        operation: Operation name for error messages

    Raises:
        DimensionError: If the contracted axes differ in length
    """
    if inner[0] != inner[1]:
        raise DimensionError(
            f"{operation}: shapes {left} and {right} not conformable "
            f"({inner[0]} != {inner[1]})"
        )


def check_count(value: Any, name: str, minimum: int = 0) -> int:
    """
    Verify a size or count is an integer no smaller than minimum.

    Booleans are rejected even though bool subclasses int.

    Args:
        value: Candidate count
        name: Parameter name for error messages
        minimum: Smallest accepted value

    Returns:
        The count as a Python int

    Raises:
        ValidationError: If value is not an integer or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}"
        )
    if value < minimum:
        raise ValidationError(f"{name}: must be >= {minimum}, got {value}")
    return int(value)


def check_arity(func: Callable[..., Any], arity: int, name: str) -> None:
    """
    Verify a generator can be called with exactly `arity` positional arguments.

    Callables without an introspectable signature (some builtins and
    ufuncs) are accepted as-is.

    Args:
        func: Generator function
        arity: Required number of positional arguments
        name: Parameter name for error messages

    Raises:
        ValidationError: If func is not callable or its signature rejects
            `arity` positional arguments
    """
    if not callable(func):
        raise ValidationError(f"{name}: expected a callable, got {type(func).__name__}")
    try:
        signature = inspect.signature(func)
    except (ValueError, TypeError):
        return
    try:
        signature.bind(*range(arity))
    except TypeError as e:
        raise ValidationError(
            f"{name}: generator must accept {arity} positional "
            f"argument{'s' if arity != 1 else ''}, signature is {signature}"
        ) from e
