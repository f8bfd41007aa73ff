"""The quadratic extension of the Goldilocks field, F_p[X] / (X^2 - 7).

Elements are immutable pairs ``c0 + c1 * X`` of canonical base field
elements. All operations return canonical results and raise
:class:`~plonkfri.goldilocks.base.FieldError` on invalid input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from . import base
from .base import FieldError

W: int = 7
"""The non-residue defining the extension: X^2 = W."""

DTH_ROOT: int = 18446744069414584320
"""The Frobenius twist factor, W ** ((p - 1) / 2), equal to -1."""


def _raw_product(a: QuadraticExtension, b: QuadraticExtension) -> tuple[int, int]:
    """Multiply without reducing the coefficients."""
    c0 = a.c0 * b.c0 + W * a.c1 * b.c1
    c1 = a.c0 * b.c1 + a.c1 * b.c0
    return c0, c1


def _reduce_pair(c0: int, c1: int) -> QuadraticExtension:
    return QuadraticExtension(base.reduce(c0), base.reduce(c1))


@dataclass(frozen=True, slots=True)
class QuadraticExtension:
    """An element ``c0 + c1 * X`` of the quadratic extension field."""

    c0: int
    c1: int

    def __post_init__(self) -> None:
        base.check_canonical(self.c0)
        base.check_canonical(self.c1)

    @staticmethod
    def zero() -> QuadraticExtension:
        """The additive identity."""
        return QuadraticExtension(base.ZERO, base.ZERO)

    @staticmethod
    def one() -> QuadraticExtension:
        """The multiplicative identity."""
        return QuadraticExtension(base.ONE, base.ZERO)

    @staticmethod
    def from_base(value: int) -> QuadraticExtension:
        """Embed a base field element."""
        return QuadraticExtension(value, base.ZERO)

    @staticmethod
    def from_pair(values: Sequence[int]) -> QuadraticExtension:
        """Build an element from the first two entries of ``values``."""
        if len(values) < 2:
            raise ValueError("an extension element needs two coefficients")
        return QuadraticExtension(values[0], values[1])

    def __add__(self, other: object) -> QuadraticExtension:
        if not isinstance(other, QuadraticExtension):
            return NotImplemented
        return QuadraticExtension(base.add(self.c0, other.c0), base.add(self.c1, other.c1))

    def __sub__(self, other: object) -> QuadraticExtension:
        if not isinstance(other, QuadraticExtension):
            return NotImplemented
        return QuadraticExtension(base.sub(self.c0, other.c0), base.sub(self.c1, other.c1))

    def __mul__(self, other: object) -> QuadraticExtension:
        if not isinstance(other, QuadraticExtension):
            return NotImplemented
        return _reduce_pair(*_raw_product(self, other))

    def __truediv__(self, other: object) -> QuadraticExtension:
        if not isinstance(other, QuadraticExtension):
            return NotImplemented
        return self * other.inverse()

    def __pow__(self, exponent: object) -> QuadraticExtension:
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            raise ValueError("negative exponents are not supported")
        if exponent == 0:
            return QuadraticExtension.one()
        if exponent == 1:
            return self
        if exponent == 2:
            return self * self
        current = self
        product = QuadraticExtension.one()
        for i in range(exponent.bit_length()):
            if i:
                current = current * current
            if (exponent >> i) & 1:
                product = product * current
        return product

    def scalar_mul(self, scalar: int) -> QuadraticExtension:
        """Multiply both coefficients by a base field element."""
        return QuadraticExtension(base.mul(self.c0, scalar), base.mul(self.c1, scalar))

    def inverse(self) -> QuadraticExtension:
        """Return the multiplicative inverse; zero has none."""
        if self.is_zero():
            raise FieldError("zero has no multiplicative inverse")
        a_pow_r_minus_1 = QuadraticExtension(self.c0, base.mul(self.c1, DTH_ROOT))
        a_pow_r = a_pow_r_minus_1 * self
        return a_pow_r_minus_1.scalar_mul(base.inverse(a_pow_r.c0))

    def is_zero(self) -> bool:
        """Whether both coefficients are zero."""
        return self.c0 == 0 and self.c1 == 0


def mul_add_extension(
    a: QuadraticExtension, b: QuadraticExtension, c: QuadraticExtension
) -> QuadraticExtension:
    """Return ``a * b + c``, reducing once at the end."""
    c0, c1 = _raw_product(a, b)
    return _reduce_pair(c0 + c.c0, c1 + c.c1)


def sub_mul_extension(
    a: QuadraticExtension, b: QuadraticExtension, c: QuadraticExtension
) -> QuadraticExtension:
    """Return ``(a - b) * c``, reducing once at the end."""
    d0 = a.c0 + b.c0 * base.NEG_ONE
    d1 = a.c1 + b.c1 * base.NEG_ONE
    c0 = d0 * c.c0 + W * d1 * c.c1
    c1 = d0 * c.c1 + d1 * c.c0
    return _reduce_pair(c0, c1)


def inner_product_extension(
    constant: int,
    starting_acc: QuadraticExtension,
    pairs: Iterable[tuple[QuadraticExtension, QuadraticExtension]],
) -> QuadraticExtension:
    """Return ``starting_acc + sum(constant * a * b for a, b in pairs)``."""
    acc0, acc1 = starting_acc.c0, starting_acc.c1
    for a, b in pairs:
        p0, p1 = _raw_product(a.scalar_mul(constant), b)
        acc0 += p0
        acc1 += p1
    return _reduce_pair(acc0, acc1)


def reduce_with_powers(
    terms: Sequence[QuadraticExtension], scalar: QuadraticExtension
) -> QuadraticExtension:
    """Return ``sum(term * scalar**i for i, term in enumerate(terms))``."""
    total = QuadraticExtension.zero()
    for term in reversed(terms):
        total = mul_add_extension(total, scalar, term)
    return total


def lookup(bit: int, x: QuadraticExtension, y: QuadraticExtension) -> QuadraticExtension:
    """Return ``x`` when ``bit`` is 0 and ``y`` when it is 1."""
    if bit not in (0, 1):
        raise ValueError(f"selector bit must be 0 or 1, got {bit!r}")
    return y if bit else x


def lookup2(
    b0: int,
    b1: int,
    qe0: QuadraticExtension,
    qe1: QuadraticExtension,
    qe2: QuadraticExtension,
    qe3: QuadraticExtension,
) -> QuadraticExtension:
    """Select ``qe[b0 + 2 * b1]`` from four candidates."""
    low = lookup(b0, qe0, qe1)
    high = lookup(b0, qe2, qe3)
    return lookup(b1, low, high)


def extensions_from_pairs(values: Iterable[Sequence[int]]) -> list[QuadraticExtension]:
    """Build a list of extension elements from coefficient pairs."""
    return [QuadraticExtension.from_pair(pair) for pair in values]