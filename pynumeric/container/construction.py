"""
Element-wise construction: konst, build, linspace.

The result shape is chosen by the type of the shape descriptor alone:

    n            (an integer)          -> sequence of length n
    (rows, cols) (a tuple of integers) -> grid of rows x cols

Also provides the reshaping primitives the product and solve relations
use to promote a sequence to a one-row or one-column grid and back.
"""

import numbers
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pynumeric.core.capabilities import CAPABILITY_FRACTIONAL
from pynumeric.core.exceptions import ResolutionError, ValidationError
from pynumeric.core.traits import (
    REAL64,
    SHAPE_GRID,
    SHAPE_SEQUENCE,
    Shape,
    domain_of,
    supports,
)
from pynumeric.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_arity,
    check_count,
)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_representable(values: NDArray[Any], dtype: np.dtype, name: str) -> None:
    """
    Verify that casting real values to an integral dtype changes none of them.

    Raises:
        ValidationError: On fractional, non-finite or out-of-range values
    """
    if dtype.kind not in ('i', 'u') or values.dtype.kind not in ('i', 'u', 'f'):
        return
    if values.size == 0:
        return
    if values.dtype.kind == 'f' and not np.all(np.isfinite(values) & (values == np.trunc(values))):
        raise ValidationError(
            f"{name}: fractional or non-finite values for integral dtype {dtype}"
        )
    info = np.iinfo(dtype)
    low, high = values.min(), values.max()
    if low < info.min or high > info.max:
        raise ValidationError(
            f"{name}: values in [{low}, {high}] outside the range of {dtype} "
            f"([{info.min}, {info.max}])"
        )


def classify_descriptor(shape: Any, operation: str) -> tuple[Shape, tuple[int, ...]]:
    """
    Map a shape descriptor to a container shape and its dimensions.

    Args:
        shape: An integer length, or a (rows, cols) tuple of integers
        operation: Operation name for error messages

    Returns:
        (container shape, dimensions)

    Raises:
        ResolutionError: If the descriptor is neither form
        ValidationError: If a dimension is negative
    """
    if _is_integer(shape):
        return SHAPE_SEQUENCE, (check_count(shape, f"{operation}: length"),)

    if isinstance(shape, tuple) and len(shape) == 2 and all(_is_integer(d) for d in shape):
        rows = check_count(shape[0], f"{operation}: rows")
        cols = check_count(shape[1], f"{operation}: cols")
        return SHAPE_GRID, (rows, cols)

    raise ResolutionError(
        f"{operation}: shape descriptor must be an integer (sequence) or an "
        f"(int, int) tuple (grid), got {type(shape).__name__} {shape!r}",
        relation=operation,
    )


def konst(value: Any, shape: int | tuple[int, int], dtype: DTypeLike = None) -> NDArray[Any]:
    """
    Container of the given shape with every element equal to `value`.

    Args:
        value: Fill value (a scalar)
        shape: Integer length (sequence) or (rows, cols) tuple (grid)
        dtype: Element dtype; inferred from `value` when None

    Returns:
        New 1-D or 2-D array

    Raises:
        ResolutionError: Bad descriptor, or dtype with no element domain
        ValidationError: Non-scalar value, negative size, a complex
            value for a real dtype, or a value the integral dtype cannot
            hold exactly

    Example:
        >>> konst(7, 3)
        array([7, 7, 7])
        >>> konst(1j, (2, 2)).shape
        (2, 2)
    """
    _, dims = classify_descriptor(shape, 'konst')

    value_arr = check_array(value, 'konst: value')
    if value_arr.ndim != 0:
        raise ValidationError(
            f"konst: value must be a scalar, got array with shape {value_arr.shape}"
        )

    dtype = value_arr.dtype if dtype is None else np.dtype(dtype)
    domain = domain_of(dtype)
    if np.iscomplexobj(value_arr) and not domain.is_complex:
        raise ValidationError(f"konst: complex value {value!r} for real dtype {dtype}")
    _check_representable(value_arr, dtype, 'konst: value')

    return np.full(dims, value_arr, dtype=dtype)


def build(
    shape: int | tuple[int, int],
    f: Callable[..., Any],
    dtype: DTypeLike = np.float64,
) -> NDArray[Any]:
    """
    Container whose elements are produced by a generator of the indices.

    For a sequence, f(i) is evaluated for i = 0..n-1. For a grid,
    f(i, j) is evaluated for every row i and column j. Indices are cast
    to the element dtype before the call, so f sees 0.0, 1.0, ... for a
    real container.

    Args:
        shape: Integer length (sequence) or (rows, cols) tuple (grid)
        f: Generator taking one index (sequence) or two (grid)
        dtype: Element dtype of the result

    Returns:
        New 1-D or 2-D array of the requested size

    Raises:
        ResolutionError: Bad descriptor, or dtype with no element domain
        ValidationError: Generator arity does not match the descriptor
            rank, the generator returned non-scalars, or values the
            integral dtype cannot hold exactly

    Example:
        >>> build(5, lambda x: x ** 2)
        array([ 0.,  1.,  4.,  9., 16.])
        >>> hilbert = build((3, 3), lambda i, j: 1 / (i + j + 1))
    """
    kind, dims = classify_descriptor(shape, 'build')
    dtype = np.dtype(dtype)
    domain_of(dtype)  # rejects dtypes with no element domain
    check_arity(f, len(dims), 'build: f')

    if kind == SHAPE_SEQUENCE:
        indices = np.arange(dims[0]).astype(dtype)
        values: list[Any] = [f(i) for i in indices]
    else:
        rows = np.arange(dims[0]).astype(dtype)
        cols = np.arange(dims[1]).astype(dtype)
        values = [f(i, j) for i in rows for j in cols]

    _check_representable(np.array(values), dtype, 'build: f')
    result = np.array(values, dtype=dtype)
    if result.size != int(np.prod(dims)):
        raise ValidationError(
            f"build: generator must return scalars, got {result.size} values "
            f"for shape {dims}"
        )
    return result.reshape(dims)


def linspace(n: int, interval: tuple[Any, Any], dtype: DTypeLike = None) -> NDArray[Any]:
    """
    Sequence of n evenly spaced values from a to b inclusive.

    Element k is a + k * (b - a) / (n - 1). A single point is the
    midpoint (a + b) / 2, not a.

    Integral endpoints are promoted to float64. Complex endpoints give a
    complex sequence along the straight line between them.

    Args:
        n: Number of points, at least 1
        interval: (a, b) endpoints
        dtype: Element dtype; inferred from the endpoints when None

    Returns:
        New 1-D array of length n

    Raises:
        ValidationError: n < 1, malformed interval, or complex endpoints
            with a real dtype
        ResolutionError: dtype cannot hold fractional values

    Example:
        >>> linspace(5, (-3, 7))
        array([-3. , -0.5,  2. ,  4.5,  7. ])
        >>> linspace(1, (0, 1))
        array([0.5])
    """
    n = check_count(n, 'linspace: n', minimum=1)

    if not isinstance(interval, tuple) or len(interval) != 2:
        raise ValidationError(f"linspace: interval must be an (a, b) tuple, got {interval!r}")
    a_arr = check_array(interval[0], 'linspace: a')
    b_arr = check_array(interval[1], 'linspace: b')
    if a_arr.ndim != 0 or b_arr.ndim != 0:
        raise ValidationError(
            f"linspace: endpoints must be scalars, got shapes {a_arr.shape} and {b_arr.shape}"
        )

    if dtype is None:
        dtype = np.result_type(a_arr, b_arr)
        if not supports(domain_of(dtype), CAPABILITY_FRACTIONAL):
            dtype = REAL64.dtype
    else:
        dtype = np.dtype(dtype)
        domain = domain_of(dtype)
        if not supports(domain, CAPABILITY_FRACTIONAL):
            raise ResolutionError(
                f"linspace: element domain {domain} cannot hold fractional values",
                relation='linspace',
                domains=(domain.name,),
            )

    if (np.iscomplexobj(a_arr) or np.iscomplexobj(b_arr)) and not domain_of(dtype).is_complex:
        raise ValidationError(f"linspace: complex endpoints for real dtype {dtype}")

    a = a_arr.astype(dtype)[()]
    b = b_arr.astype(dtype)[()]
    if n == 1:
        return np.array([(a + b) / 2], dtype=dtype)

    step = (b - a) / (n - 1)
    return (a + step * np.arange(n, dtype=dtype)).astype(dtype, copy=False)


def as_row(v: ArrayLike) -> NDArray[Any]:
    """Sequence of length n as a 1 x n grid."""
    v = np.asarray(v)
    check_1d(v, 'as_row: v')
    return v.reshape(1, -1)


def as_column(v: ArrayLike) -> NDArray[Any]:
    """Sequence of length n as an n x 1 grid."""
    v = np.asarray(v)
    check_1d(v, 'as_column: v')
    return v.reshape(-1, 1)


def flatten(m: ArrayLike) -> NDArray[Any]:
    """Grid as a sequence, row by row."""
    m = np.asarray(m)
    check_2d(m, 'flatten: m')
    return m.reshape(-1)
