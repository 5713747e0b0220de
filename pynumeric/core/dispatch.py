"""
Dispatch relations.

A dispatch relation maps a pair of operand shapes to exactly one result
shape and one kernel:

    (shape A, shape B) -> (result shape, kernel)

The table is filled once, at import time, through the `instance`
decorator. Registering a second instance for a pair that is already
present raises DispatchConflictError immediately, so an ambiguous table
cannot be imported.

Calling a relation goes through three steps, in order:

    1. resolve:  classify both operands (shape, domain), check that both
                 share one domain with the required capabilities, and
                 look the shape pair up. Any failure is a ResolutionError
                 and no kernel runs. Integral operands are widened to
                 int64 so both share one element type.
    2. select:   pick a kernel set that can execute the domain.
    3. execute:  run the kernel; a result whose shape disagrees with the
                 table row is a NumericalError, never a return value.

Example:
    >>> product = DispatchRelation('product', select=select_kernels)
    >>> @product.instance(SHAPE_GRID, SHAPE_GRID, SHAPE_GRID)
    ... def _grid_grid(kernels, a, b):
    ...     return kernels.mxm(a, b)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike

from pynumeric.core.capabilities import CAPABILITY_PRODUCT
from pynumeric.core.exceptions import (
    DispatchConflictError,
    NumericalError,
    ResolutionError,
)
from pynumeric.core.protocols import Kernels
from pynumeric.core.traits import (
    INTEGRAL,
    Domain,
    Shape,
    as_integral,
    domain_of,
    shape_of,
)
from pynumeric.core.validation import check_array


# (kernels, a, b, **options) -> result
KernelFunction = Callable[..., Any]
KernelSelector = Callable[[str, Domain], Kernels]


@dataclass(frozen=True)
class Instance:
    """One row of a dispatch table."""
    shape_a: Shape
    shape_b: Shape
    result: Shape
    kernel: KernelFunction


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving a call against a relation.

    Attributes:
        instance: The selected table row
        domain: The shared element domain of both operands
        a: Left operand as an ndarray
        b: Right operand as an ndarray
    """
    instance: Instance
    domain: Domain
    a: np.ndarray
    b: np.ndarray


class DispatchRelation:
    """
    Total, non-overlapping mapping from operand shapes to a kernel.

    Args:
        name: Relation name, used in error messages
        select: Returns a kernel set for (backend choice, domain)
        requires: Capabilities the shared element domain must have
        operand_names: Names of the two operands in error messages
        doc: Docstring for the relation object
    """

    def __init__(
        self,
        name: str,
        select: KernelSelector,
        *,
        requires: frozenset[str] = frozenset({CAPABILITY_PRODUCT}),
        operand_names: tuple[str, str] = ('a', 'b'),
        doc: str | None = None,
    ):
        self._name = name
        self._select = select
        self._requires = frozenset(requires)
        self._operand_names = operand_names
        self._instances: dict[tuple[Shape, Shape], Instance] = {}
        self.__doc__ = doc

    def __repr__(self) -> str:
        return f"<DispatchRelation {self._name}: {len(self._instances)} instances>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def requires(self) -> frozenset[str]:
        return self._requires

    @property
    def table(self) -> dict[tuple[Shape, Shape], Shape]:
        """Shape pair -> result shape, in registration order."""
        return {key: inst.result for key, inst in self._instances.items()}

    def instance(
        self,
        shape_a: Shape,
        shape_b: Shape,
        result: Shape,
    ) -> Callable[[KernelFunction], KernelFunction]:
        """
        Decorator registering a kernel function for one shape pair.

        Raises:
            DispatchConflictError: If the shape pair is already registered
        """
        def register(kernel: KernelFunction) -> KernelFunction:
            key = (shape_a, shape_b)
            if key in self._instances:
                existing = self._instances[key]
                raise DispatchConflictError(
                    f"{self._name}: ({shape_a}, {shape_b}) already resolves to "
                    f"{existing.result} via {existing.kernel.__name__}; "
                    f"cannot also register {kernel.__name__}",
                    relation=self._name,
                    shapes=key,
                )
            self._instances[key] = Instance(
                shape_a=shape_a,
                shape_b=shape_b,
                result=result,
                kernel=kernel,
            )
            return kernel
        return register

    def resolve(self, a: ArrayLike, b: ArrayLike) -> Resolution:
        """
        Select the table row for two operands without running any kernel.

        Raises:
            ValidationError: If an operand is not numeric, or a uint64 value
                does not fit the integral domain
            ResolutionError: If the shapes have no row, the domains differ,
                or the domain lacks a required capability
        """
        name_a, name_b = self._operand_names
        a_arr = check_array(a, f"{self._name}: {name_a}")
        b_arr = check_array(b, f"{self._name}: {name_b}")

        shapes = (shape_of(a_arr), shape_of(b_arr))
        domains = (domain_of(a_arr), domain_of(b_arr))
        domain_names = (domains[0].name, domains[1].name)

        instance = self._instances.get(shapes)
        if instance is None:
            defined = ", ".join(f"({sa}, {sb})" for sa, sb in self._instances)
            raise ResolutionError(
                f"{self._name}: no instance for ({shapes[0]}, {shapes[1]}); "
                f"defined for {defined}",
                relation=self._name,
                shapes=shapes,
                domains=domain_names,
            )

        if domains[0] is not domains[1]:
            raise ResolutionError(
                f"{self._name}: operands differ in element domain "
                f"({name_a}={domains[0]}, {name_b}={domains[1]})",
                relation=self._name,
                shapes=shapes,
                domains=domain_names,
            )

        domain = domains[0]
        missing = self._requires - domain.capabilities
        if missing:
            raise ResolutionError(
                f"{self._name}: element domain {domain} lacks required "
                f"capabilities {sorted(missing)}",
                relation=self._name,
                shapes=shapes,
                domains=domain_names,
            )

        if domain is INTEGRAL:
            a_arr = as_integral(a_arr, f"{self._name}: {name_a}")
            b_arr = as_integral(b_arr, f"{self._name}: {name_b}")

        return Resolution(instance=instance, domain=domain, a=a_arr, b=b_arr)

    def __call__(
        self,
        a: ArrayLike,
        b: ArrayLike,
        *,
        backend: str = 'cpu',
        **options: Any,
    ) -> Any:
        """
        Resolve, select kernels for `backend`, and execute.

        Extra keyword options are passed through to the kernel function.
        """
        resolution = self.resolve(a, b)
        kernels = self._select(backend, resolution.domain)
        result = resolution.instance.kernel(
            kernels, resolution.a, resolution.b, **options
        )

        expected = resolution.instance.result
        if shape_of(result) != expected:
            raise NumericalError(
                f"{self._name}: kernel set {kernels.name} returned a "
                f"{shape_of(result)} for ({resolution.instance.shape_a}, "
                f"{resolution.instance.shape_b}), expected {expected}"
            )
        return result
