"""Arithmetic in the Goldilocks prime field, p = 2**64 - 2**32 + 1.

Field elements are plain Python integers. A canonical element lies in
``[0, MODULUS)``. The checked operations raise :class:`FieldError` whenever
an operand or an intermediate value leaves the range the field admits.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

MODULUS: int = 2**64 - 2**32 + 1
"""The Goldilocks prime."""

MULTIPLICATIVE_GROUP_GENERATOR: int = 7
"""A generator of the multiplicative group of the field."""

TWO_ADICITY: int = 32
"""The largest ``k`` such that ``2**k`` divides ``MODULUS - 1``."""

POWER_OF_TWO_GENERATOR: int = 1753635133440165772
"""A primitive ``2**TWO_ADICITY``-th root of unity."""

REDUCE_NB_BITS_THRESHOLD: int = 254 - 64
"""Bit width at which an unreduced value must be reduced."""

RANGE_CHECK_NB_BITS: int = 140
"""Bit bound on the quotient accepted by :func:`reduce`."""

ZERO: int = 0
ONE: int = 1
NEG_ONE: int = MODULUS - 1

_LIMB_BITS = 32
_LIMB_MASK = (1 << _LIMB_BITS) - 1


class FieldError(ValueError):
    """Raised when a value is not a valid Goldilocks field element."""


def check_canonical(x: int) -> int:
    """Return ``x`` if it is a canonical field element, else raise FieldError."""
    if not 0 <= x < MODULUS:
        raise FieldError(f"{x} is not in the field")
    return x


def _reduce_bounded(x: int, max_quotient_bits: int) -> int:
    if x < 0:
        raise FieldError(f"cannot reduce negative value {x}")
    quotient, remainder = divmod(x, MODULUS)
    if quotient >= 1 << max_quotient_bits:
        raise FieldError(
            f"quotient of {x} does not fit in {max_quotient_bits} bits"
        )
    return remainder


def reduce(x: int) -> int:
    """Reduce ``x`` modulo p; its quotient must fit in RANGE_CHECK_NB_BITS bits."""
    return _reduce_bounded(x, RANGE_CHECK_NB_BITS)


def reduce_with_max_bits(x: int, max_nb_bits: int) -> int:
    """Reduce ``x`` modulo p; its quotient must fit in ``max_nb_bits`` bits."""
    if max_nb_bits < 0:
        raise ValueError("max_nb_bits must be non-negative")
    return _reduce_bounded(x, max_nb_bits)


def mul_add(a: int, b: int, c: int) -> int:
    """Return ``a * b + c`` in the field; all operands must be canonical."""
    for operand in (a, b, c):
        check_canonical(operand)
    return (a * b + c) % MODULUS


def add(a: int, b: int) -> int:
    """Return ``a + b`` in the field."""
    return mul_add(a, ONE, b)


def sub(a: int, b: int) -> int:
    """Return ``a - b`` in the field."""
    return mul_add(b, NEG_ONE, a)


def mul(a: int, b: int) -> int:
    """Return ``a * b`` in the field."""
    return mul_add(a, b, ZERO)


def inverse(x: int) -> int:
    """Return the multiplicative inverse of ``x``; zero has none."""
    check_canonical(x)
    if x == 0:
        raise FieldError("zero has no multiplicative inverse")
    return pow(x, -1, MODULUS)


def exp(x: int, k: int) -> int:
    """Return ``x ** k`` in the field for a non-negative exponent ``k``."""
    if k == 0:
        return ONE
    if k < 0:
        raise ValueError("negative exponents are not supported")
    check_canonical(x)
    return pow(x, k, MODULUS)


def split_limbs(x: int) -> tuple[int, int]:
    """Split a field element into its (most, least) significant 32-bit limbs."""
    check_canonical(x)
    return x >> _LIMB_BITS, x & _LIMB_MASK


def range_check(x: int) -> int:
    """Check that ``x`` is below the modulus and return it.

    The value must split into two 32-bit limbs, and when the high limb is all
    ones the low limb must be zero.
    """
    if not 0 <= x < 1 << 64:
        raise FieldError(f"{x} does not fit in 64 bits")
    high, low = x >> _LIMB_BITS, x & _LIMB_MASK
    if high == _LIMB_MASK and low != 0:
        raise FieldError(f"{x} is not in the field")
    return x


def primitive_root_of_unity(n_log: int) -> int:
    """Return a primitive ``2**n_log``-th root of unity."""
    if n_log < 0:
        raise ValueError("n_log must be non-negative")
    if n_log > TWO_ADICITY:
        raise ValueError("n_log is greater than TWO_ADICITY")
    return pow(POWER_OF_TWO_GENERATOR, 1 << (TWO_ADICITY - n_log), MODULUS)


def _subgroup_powers(root: int, count: int) -> Iterator[int]:
    value = ONE
    yield value
    for _ in range(count):
        value = value * root % MODULUS
        yield value


def two_adic_subgroup(n_log: int) -> list[int]:
    """Return successive powers ``g**0 .. g**(2**n_log)`` of the ``2**n_log``-th root.

    The list holds ``2**n_log + 1`` entries; the last wraps around to one.
    """
    root = primitive_root_of_unity(n_log)
    return list(_subgroup_powers(root, 1 << n_log))


def parse_decimal_elements(values: Iterable[str]) -> list[int]:
    """Parse decimal strings into integers."""
    return [int(value, 10) for value in values]