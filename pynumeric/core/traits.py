"""
Shape and element-domain traits.

Every operand crossing a dispatch boundary is classified along two axes:

    shape:  'scalar' (0-d), 'sequence' (1-d) or 'grid' (2-d)
    domain: real32, real64, complex64, complex128 or integral

The pair selects a kernel; nothing else about the operand is inspected.
Domains are frozen constants carrying their capabilities and the
precision/complexity conversions between them (real-of, complex-of,
single-of, double-of).

Usage:
    >>> from pynumeric.core.traits import domain_of, shape_of, COMPLEX64
    >>> shape_of(np.ones((2, 3)))
    'grid'
    >>> domain_of(np.ones(3, dtype=np.complex64)) is COMPLEX64
    True
    >>> COMPLEX64.real_of.name
    'real32'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from pynumeric.core.capabilities import (
    CAPABILITY_PRODUCT,
    CAPABILITY_FIELD,
    CAPABILITY_FRACTIONAL,
)
from pynumeric.core.exceptions import ResolutionError, ValidationError


Shape = Literal['scalar', 'sequence', 'grid']

SHAPE_SCALAR: Shape = 'scalar'
SHAPE_SEQUENCE: Shape = 'sequence'
SHAPE_GRID: Shape = 'grid'

_SHAPE_BY_NDIM: dict[int, Shape] = {
    0: SHAPE_SCALAR,
    1: SHAPE_SEQUENCE,
    2: SHAPE_GRID,
}


@dataclass(frozen=True)
class Domain:
    """
    Element domain of a container.

    Attributes:
        name: Domain identifier ('real64', 'complex64', 'integral', ...)
        dtype: Canonical NumPy dtype for values constructed in this domain
        capabilities: Capability strings from pynumeric.core.capabilities
        is_complex: True for complex domains (conjugation is not identity)
        real_name: Name of the matching real domain
        complex_name: Name of the matching complex domain
        single_name: Name of the single-precision counterpart
        double_name: Name of the double-precision counterpart
    """
    name: str
    dtype: np.dtype
    capabilities: frozenset[str]
    is_complex: bool
    real_name: str
    complex_name: str
    single_name: str
    double_name: str

    def __str__(self) -> str:
        return self.name

    @property
    def is_field(self) -> bool:
        """True if the domain supports division (least squares)."""
        return CAPABILITY_FIELD in self.capabilities

    @property
    def real_of(self) -> Domain:
        return DOMAINS[self.real_name]

    @property
    def complex_of(self) -> Domain:
        return DOMAINS[self.complex_name]

    @property
    def single_of(self) -> Domain:
        return DOMAINS[self.single_name]

    @property
    def double_of(self) -> Domain:
        return DOMAINS[self.double_name]


_FLOATING = frozenset({CAPABILITY_PRODUCT, CAPABILITY_FIELD, CAPABILITY_FRACTIONAL})

REAL32 = Domain(
    name='real32',
    dtype=np.dtype(np.float32),
    capabilities=_FLOATING,
    is_complex=False,
    real_name='real32',
    complex_name='complex64',
    single_name='real32',
    double_name='real64',
)

REAL64 = Domain(
    name='real64',
    dtype=np.dtype(np.float64),
    capabilities=_FLOATING,
    is_complex=False,
    real_name='real64',
    complex_name='complex128',
    single_name='real32',
    double_name='real64',
)

COMPLEX64 = Domain(
    name='complex64',
    dtype=np.dtype(np.complex64),
    capabilities=_FLOATING,
    is_complex=True,
    real_name='real32',
    complex_name='complex64',
    single_name='complex64',
    double_name='complex128',
)

COMPLEX128 = Domain(
    name='complex128',
    dtype=np.dtype(np.complex128),
    capabilities=_FLOATING,
    is_complex=True,
    real_name='real64',
    complex_name='complex128',
    single_name='complex64',
    double_name='complex128',
)

# Integers multiply exactly but do not divide: no least squares, no linspace
INTEGRAL = Domain(
    name='integral',
    dtype=np.dtype(np.int64),
    capabilities=frozenset({CAPABILITY_PRODUCT}),
    is_complex=False,
    real_name='integral',
    complex_name='complex128',
    single_name='integral',
    double_name='integral',
)

DOMAINS: dict[str, Domain] = {
    d.name: d for d in (REAL32, REAL64, COMPLEX64, COMPLEX128, INTEGRAL)
}

FLOATING_DOMAINS = frozenset({REAL32, REAL64, COMPLEX64, COMPLEX128})

# (dtype.kind, itemsize) -> domain; byte order does not matter
_DOMAIN_BY_KIND: dict[tuple[str, int], Domain] = {
    ('f', 4): REAL32,
    ('f', 8): REAL64,
    ('c', 8): COMPLEX64,
    ('c', 16): COMPLEX128,
}


def domain_of(value: Any) -> Domain:
    """
    Classify an array, scalar or dtype into its element domain.

    Args:
        value: ndarray, scalar, dtype, scalar type or dtype string

    Returns:
        The element Domain

    Raises:
        ResolutionError: If the dtype has no domain (float16, longdouble,
            bool, strings, ...)
    """
    if isinstance(value, (np.dtype, type, str)):
        dtype = np.dtype(value)
    else:
        dtype = np.asarray(value).dtype
    if dtype.kind in ('i', 'u'):
        return INTEGRAL
    domain = _DOMAIN_BY_KIND.get((dtype.kind, dtype.itemsize))
    if domain is None:
        raise ResolutionError(f"dtype {dtype} has no element domain")
    return domain


def shape_of(value: ArrayLike) -> Shape:
    """
    Classify a value by rank: scalar, sequence or grid.

    Raises:
        ResolutionError: If the rank is above 2
    """
    ndim = np.ndim(value)
    if ndim not in _SHAPE_BY_NDIM:
        raise ResolutionError(
            f"{ndim}D array with shape {np.shape(value)} has no container shape"
        )
    return _SHAPE_BY_NDIM[ndim]


def describe(value: ArrayLike) -> str:
    """Short 'shape[domain]' label used in error messages."""
    return f"{shape_of(value)}[{domain_of(value)}]"


def supports(domain: Domain, capability: str) -> bool:
    """
    Check whether a domain has a capability.

    Unknown capabilities return False, never raise.
    """
    return capability in domain.capabilities


def conj(value: np.ndarray) -> np.ndarray:
    """
    Conjugate elements: identity for real and integral domains.

    Real inputs are returned as-is (not copied).
    """
    if domain_of(value).is_complex:
        return np.conj(value)
    return value


def to_domain(value: ArrayLike, domain: Domain | DTypeLike) -> np.ndarray:
    """
    Convert a container to another element domain.

    Converting complex to real discards the imaginary part explicitly
    (take np.real first) rather than relying on NumPy's ComplexWarning.
    """
    if not isinstance(domain, Domain):
        domain = domain_of(domain)
    array = np.asarray(value)
    if np.iscomplexobj(array) and not domain.is_complex:
        array = np.real(array)
    return array.astype(domain.dtype)


def as_integral(value: ArrayLike, name: str) -> np.ndarray:
    """
    Widen an integral container to the domain dtype (int64).

    Every integer width belongs to the one integral domain, so operands
    are brought to a single element type before any kernel runs. Narrow
    widths would otherwise wrap in products, and uint64 would promote to
    float64 against a signed operand.

    Args:
        value: Integer array
        name: Parameter name for error messages

    Returns:
        The array itself if already int64, else an int64 copy

    Raises:
        ValidationError: If a uint64 value does not fit in int64
    """
    array = np.asarray(value)
    if array.dtype == INTEGRAL.dtype:
        return array
    if (array.dtype.kind == 'u' and array.dtype.itemsize == INTEGRAL.dtype.itemsize
            and array.size and array.max() > np.uint64(np.iinfo(INTEGRAL.dtype).max)):
        raise ValidationError(
            f"{name}: value {array.max()} exceeds the integral domain range "
            f"(max {np.iinfo(INTEGRAL.dtype).max})"
        )
    return array.astype(INTEGRAL.dtype)
