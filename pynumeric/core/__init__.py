"""
Core infrastructure for PyNumeric.

This module provides the shared abstractions every public operation is
built from: the shape/domain trait set, dispatch relations, the kernel
protocol, the exception hierarchy and input validators.

Key components:
    traits: Shape and element-domain classification, conjugation
    dispatch: DispatchRelation tables (shape pair -> kernel)
    protocols: Kernels protocol implemented by each kernel set
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Hardware detection
"""

from pynumeric.core.protocols import Kernels
from pynumeric.core.dispatch import DispatchRelation, Instance, Resolution
from pynumeric.core.traits import (
    Domain,
    Shape,
    SHAPE_SCALAR,
    SHAPE_SEQUENCE,
    SHAPE_GRID,
    REAL32,
    REAL64,
    COMPLEX64,
    COMPLEX128,
    INTEGRAL,
    DOMAINS,
    conj,
    domain_of,
    shape_of,
    supports,
    to_domain,
)
from pynumeric.core.exceptions import (
    PyNumericError,
    ValidationError,
    DimensionError,
    ResolutionError,
    DispatchConflictError,
    NumericalError,
    SingularMatrixError,
    RankDeficiencyWarning,
)

__all__ = [
    # Protocols
    "Kernels",
    # Dispatch
    "DispatchRelation",
    "Instance",
    "Resolution",
    # Traits
    "Domain",
    "Shape",
    "SHAPE_SCALAR",
    "SHAPE_SEQUENCE",
    "SHAPE_GRID",
    "REAL32",
    "REAL64",
    "COMPLEX64",
    "COMPLEX128",
    "INTEGRAL",
    "DOMAINS",
    "conj",
    "domain_of",
    "shape_of",
    "supports",
    "to_domain",
    # Exceptions
    "PyNumericError",
    "ValidationError",
    "DimensionError",
    "ResolutionError",
    "DispatchConflictError",
    "NumericalError",
    "SingularMatrixError",
    "RankDeficiencyWarning",
]
