"""
Capability string constants for PyNumeric.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pynumeric.core.capabilities import CAPABILITY_FIELD
    from pynumeric.core.traits import supports

    if supports(domain, CAPABILITY_FIELD):
        x = lsdiv(m, b)
"""

# Contraction-style products (dot, matrix-vector, matrix-matrix)
CAPABILITY_PRODUCT = 'product'

# Element domain supports division: required by least squares
CAPABILITY_FIELD = 'field'

# Elements can represent fractional values: required by linspace
CAPABILITY_FRACTIONAL = 'fractional'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_PRODUCT,
    CAPABILITY_FIELD,
    CAPABILITY_FRACTIONAL,
})

__all__ = [
    'CAPABILITY_PRODUCT',
    'CAPABILITY_FIELD',
    'CAPABILITY_FRACTIONAL',
    'ALL_CAPABILITIES',
]
