"""
Exception hierarchy for PyNumeric.

All exceptions inherit from PyNumericError to allow catching any
library-specific error.

Two families matter to callers:
    - ResolutionError: no dispatch instance exists for the operand
      shapes/domains. Raised at the call boundary, before any kernel runs.
    - NumericalError / ValidationError: run-time failures reported by a
      kernel (dimension mismatch, singular systems, degenerate requests).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyNumericError(Exception):
    """Base exception for all PyNumeric errors."""
    pass


class ValidationError(PyNumericError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when operand shapes are not conformable (e.g. a 3x4 matrix
    times a length-5 vector).
    """
    pass


class ResolutionError(PyNumericError):
    """
    No dispatch instance matches the operands.

    Raised when a shape or domain combination has no entry in a dispatch
    relation, when operands come from different element domains, or when
    a required capability (e.g. 'field' for least squares) is missing.

    Attributes:
        relation: Name of the dispatch relation that failed to resolve
        shapes: Operand shapes, if classified
        domains: Operand domain names, if classified
    """

    def __init__(
        self,
        message: str,
        relation: str | None = None,
        shapes: tuple[str, ...] | None = None,
        domains: tuple[str, ...] | None = None,
    ):
        super().__init__(message)
        self.relation = relation
        self.shapes = shapes
        self.domains = domains


class DispatchConflictError(ResolutionError):
    """
    Two instances were registered for the same shape pair.

    Raised while a dispatch table is being built, so an ambiguous table
    can never be imported.
    """
    pass


class NumericalError(PyNumericError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised by the least-squares solve when rank checking is requested and
    the system matrix is numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (min(rows, cols))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class RankDeficiencyWarning(UserWarning):
    """Least-squares system was rank-deficient; minimum-norm solution returned."""
    pass
