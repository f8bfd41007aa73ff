"""The degree-two algebra over the Goldilocks quadratic extension.

Elements are ``a0 + a1 * Y`` with ``Y^2 = W`` and coefficients in the
quadratic extension field.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from . import base
from .extension import W, QuadraticExtension, inner_product_extension

D: int = 2
"""The degree of the algebra over the extension field."""


@dataclass(frozen=True, slots=True)
class ExtensionAlgebra:
    """An element ``a0 + a1 * Y`` of the extension algebra."""

    a0: QuadraticExtension
    a1: QuadraticExtension

    @property
    def coefficients(self) -> tuple[QuadraticExtension, QuadraticExtension]:
        return self.a0, self.a1

    @staticmethod
    def zero() -> ExtensionAlgebra:
        """The additive identity."""
        return ExtensionAlgebra.from_extension(QuadraticExtension.zero())

    @staticmethod
    def one() -> ExtensionAlgebra:
        """The multiplicative identity."""
        return ExtensionAlgebra.from_extension(QuadraticExtension.one())

    @staticmethod
    def from_extension(value: QuadraticExtension) -> ExtensionAlgebra:
        """Embed an extension field element."""
        return ExtensionAlgebra(value, QuadraticExtension.zero())

    def __add__(self, other: object) -> ExtensionAlgebra:
        if not isinstance(other, ExtensionAlgebra):
            return NotImplemented
        return ExtensionAlgebra(self.a0 + other.a0, self.a1 + other.a1)

    def __sub__(self, other: object) -> ExtensionAlgebra:
        if not isinstance(other, ExtensionAlgebra):
            return NotImplemented
        return ExtensionAlgebra(self.a0 - other.a0, self.a1 - other.a1)

    def __mul__(self, other: object) -> ExtensionAlgebra:
        if not isinstance(other, ExtensionAlgebra):
            return NotImplemented
        inner: list[list[tuple[QuadraticExtension, QuadraticExtension]]] = [[] for _ in range(D)]
        inner_w: list[list[tuple[QuadraticExtension, QuadraticExtension]]] = [[] for _ in range(D)]
        for i, left in enumerate(self.coefficients):
            for j, right in enumerate(other.coefficients):
                target = inner if i + j < D else inner_w
                target[(i + j) % D].append((left, right))
        low, high = (
            inner_product_extension(
                base.ONE,
                inner_product_extension(W, QuadraticExtension.zero(), wrapped),
                direct,
            )
            for direct, wrapped in zip(inner, inner_w)
        )
        return ExtensionAlgebra(low, high)

    def scale(self, scalar: QuadraticExtension) -> ExtensionAlgebra:
        """Multiply every coefficient by an extension field element."""
        return ExtensionAlgebra(scalar * self.a0, scalar * self.a1)


def partial_interpolate_ext_algebra(
    domain: Sequence[int],
    values: Sequence[ExtensionAlgebra],
    barycentric_weights: Sequence[int],
    point: ExtensionAlgebra,
    initial_eval: ExtensionAlgebra,
    initial_partial_prod: ExtensionAlgebra,
) -> tuple[ExtensionAlgebra, ExtensionAlgebra]:
    """Fold barycentric interpolation terms into a running evaluation.

    Returns the updated evaluation and the updated product of
    ``point - x`` over the domain points seen so far.
    """
    if not values:
        raise ValueError("cannot interpolate with no values")
    if len(values) != len(domain):
        raise ValueError("domain and values must have the same length")
    if len(values) != len(barycentric_weights):
        raise ValueError("domain and barycentric weights must have the same length")

    evaluation = initial_eval
    partial_prod = initial_partial_prod
    for value, x, weight in zip(values, domain, barycentric_weights):
        x_algebra = ExtensionAlgebra.from_extension(QuadraticExtension.from_base(x))
        term = point - x_algebra
        weighted = value.scale(QuadraticExtension.from_base(weight))
        evaluation = evaluation * term + weighted * partial_prod
        partial_prod = partial_prod * term
    return evaluation, partial_prod