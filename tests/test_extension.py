import pytest
from hypothesis import given
from hypothesis import strategies as st

from plonkfri.goldilocks.base import MODULUS, FieldError
from plonkfri.goldilocks.extension import (
    QuadraticExtension,
    extensions_from_pairs,
    inner_product_extension,
    lookup,
    lookup2,
    mul_add_extension,
    reduce_with_powers,
    sub_mul_extension,
)

elements = st.integers(min_value=0, max_value=MODULUS - 1)
extensions = st.builds(QuadraticExtension, elements, elements)
nonzero_extensions = extensions.filter(lambda e: not e.is_zero())


def test_mul_matches_reference():
    a = QuadraticExtension(4994088319481652598, 16489566008211790727)
    b = QuadraticExtension(3797605683985595697, 13424401189265534004)
    assert a * b == QuadraticExtension(15052319864161058789, 16841416332519902625)


def test_div_matches_reference():
    a = QuadraticExtension(4994088319481652598, 16489566008211790727)
    b = QuadraticExtension(7166004739148609569, 14655965871663555016)
    assert a / b == QuadraticExtension(15052319864161058789, 16841416332519902625)


def test_generator_squares_to_w():
    x = QuadraticExtension(0, 1)
    assert x * x == QuadraticExtension(7, 0)


def test_non_canonical_coefficient_rejected():
    with pytest.raises(FieldError):
        QuadraticExtension(MODULUS, 0)
    with pytest.raises(FieldError):
        QuadraticExtension(0, -1)


def test_from_pair_and_from_base():
    assert QuadraticExtension.from_pair([3, 4]) == QuadraticExtension(3, 4)
    assert QuadraticExtension.from_base(9) == QuadraticExtension(9, 0)
    with pytest.raises(ValueError):
        QuadraticExtension.from_pair([1])


def test_extensions_from_pairs():
    assert extensions_from_pairs([[1, 2], [3, 4]]) == [
        QuadraticExtension(1, 2),
        QuadraticExtension(3, 4),
    ]


def test_sub_wraps_around():
    result = QuadraticExtension(0, 1) - QuadraticExtension(1, 2)
    assert result == QuadraticExtension(MODULUS - 1, MODULUS - 1)


@given(nonzero_extensions)
def test_inverse_is_multiplicative_inverse(x):
    assert x * x.inverse() == QuadraticExtension.one()


def test_inverse_of_zero_raises():
    with pytest.raises(FieldError):
        QuadraticExtension.zero().inverse()
    with pytest.raises(FieldError):
        QuadraticExtension.one() / QuadraticExtension.zero()


@given(extensions, extensions, extensions)
def test_ring_laws(a, b, c):
    zero = QuadraticExtension.zero()
    assert mul_add_extension(a, b, zero) == mul_add_extension(b, a, zero)
    assert a * (b + c) == mul_add_extension(a, b, a * c)
    assert (a + b) - b == a


@given(extensions)
def test_pow_small_exponents(x):
    assert x**0 == QuadraticExtension.one()
    assert x**1 == x
    assert x**2 == x * x
    assert x**5 == x * x * x * x * x


def test_pow_negative_raises():
    with pytest.raises(ValueError):
        QuadraticExtension(2, 3) ** -1


@given(nonzero_extensions)
def test_fermat_for_extension(x):
    assert x ** (MODULUS**2 - 1) == QuadraticExtension.one()


@given(extensions, elements)
def test_scalar_mul_matches_embedded_mul(x, s):
    assert x.scalar_mul(s) == x * QuadraticExtension.from_base(s)


def test_is_zero():
    assert QuadraticExtension.zero().is_zero() is True
    assert QuadraticExtension(0, 1).is_zero() is False


@given(extensions, extensions, extensions)
def test_mul_add_and_sub_mul(a, b, c):
    assert mul_add_extension(a, b, c) == a * b + c
    assert sub_mul_extension(a, b, c) == (a - b) * c


@given(extensions, extensions, extensions, extensions)
def test_inner_product(acc, a, b, d):
    result = inner_product_extension(7, acc, [(a, b), (d, b)])
    assert result == acc + (a * b).scalar_mul(7) + (d * b).scalar_mul(7)


def test_inner_product_of_nothing_is_accumulator():
    acc = QuadraticExtension(5, 6)
    assert inner_product_extension(3, acc, []) == acc


@given(extensions, extensions, extensions, extensions)
def test_reduce_with_powers(t0, t1, t2, s):
    assert reduce_with_powers([t0, t1, t2], s) == t0 + s * t1 + s * s * t2


def test_reduce_with_powers_empty_is_zero():
    assert reduce_with_powers([], QuadraticExtension(1, 1)) == QuadraticExtension.zero()


def test_lookup():
    x, y = QuadraticExtension(1, 0), QuadraticExtension(2, 0)
    assert lookup(0, x, y) == x
    assert lookup(1, x, y) == y
    with pytest.raises(ValueError):
        lookup(2, x, y)


@pytest.mark.parametrize(
    "b0, b1, index",
    [(0, 0, 0), (1, 0, 1), (0, 1, 2), (1, 1, 3)],
)
def test_lookup2(b0, b1, index):
    candidates = [QuadraticExtension(i, i + 10) for i in range(4)]
    assert lookup2(b0, b1, *candidates) == candidates[index]