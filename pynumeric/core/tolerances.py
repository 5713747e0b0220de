"""
Tolerance tiers for numerical validation.

Defines precision expectations per element domain:
- Double precision (real64, complex128): near machine precision
- Single precision (real32, complex64): relaxed for 24-bit mantissas
- Integral: exact

Used by the test suite and by anyone comparing kernel output across
backends.
"""

from dataclasses import dataclass

from pynumeric.core.traits import Domain, INTEGRAL


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


DOUBLE = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='double',
    description='Double precision: products and solves agree to ~1e-10',
)

# Least-squares solves amplify error by cond(A)
DOUBLE_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='double_ill_conditioned',
    description='Double precision, ill-conditioned (cond > 1e4)',
)

SINGLE = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='single',
    description='Single precision: BLAS s/c routines',
)

SINGLE_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='single_ill_conditioned',
    description='Single precision, ill-conditioned',
)

EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Integral domain: exact arithmetic',
)


def select_tolerance(
    domain: Domain,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given element domain."""
    if domain is INTEGRAL:
        return EXACT
    if domain.single_of is domain:
        if is_ill_conditioned:
            return SINGLE_ILL_CONDITIONED
        return SINGLE
    if is_ill_conditioned:
        return DOUBLE_ILL_CONDITIONED
    return DOUBLE
