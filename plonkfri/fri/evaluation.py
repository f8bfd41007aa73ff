"""FRI query evaluation: instance layout, initial combination and folding.

These functions compute, for a single FRI query, the values that the
verifier compares: the combined initial evaluation at the queried point,
the interpolated value after each folding step and the final polynomial
evaluation. Index bits are given little-endian, as lists of 0 and 1.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import chain

from ..goldilocks import base as gl
from ..goldilocks.extension import (
    QuadraticExtension,
    lookup2,
    mul_add_extension,
    reduce_with_powers,
    sub_mul_extension,
)
from .oracles import (
    BatchInfo,
    CircuitLayout,
    InstanceInfo,
    OpeningBatch,
    Openings,
    fri_all_polys,
    fri_oracles,
    fri_zs_polys,
)

_MAX_ARITY_BITS = 8
_COSET_LOOKUP_BITS = 4


class VerificationError(Exception):
    """Raised when a proof value fails a verification check."""


def _checked_bit(bit: int) -> int:
    if bit not in (0, 1):
        raise ValueError(f"expected a bit, got {bit!r}")
    return bit


def _reverse8(value: int) -> int:
    return int(f"{value:08b}"[::-1], 2)


def get_instance(
    layout: CircuitLayout, zeta: QuadraticExtension, degree_bits: int
) -> InstanceInfo:
    """Describe the two opening batches: all polynomials at ``zeta``, the Zs at ``g * zeta``."""
    zeta_batch = BatchInfo(zeta, tuple(fri_all_polys(layout)))
    g = gl.primitive_root_of_unity(degree_bits)
    zeta_next = QuadraticExtension.from_base(g) * zeta
    zeta_next_batch = BatchInfo(zeta_next, tuple(fri_zs_polys(layout)))
    return InstanceInfo(tuple(fri_oracles(layout)), (zeta_batch, zeta_next_batch))


def to_openings(
    constants: Iterable[QuadraticExtension],
    plonk_sigmas: Iterable[QuadraticExtension],
    wires: Iterable[QuadraticExtension],
    plonk_zs: Iterable[QuadraticExtension],
    partial_products: Iterable[QuadraticExtension],
    quotient_polys: Iterable[QuadraticExtension],
    plonk_zs_next: Iterable[QuadraticExtension],
) -> Openings:
    """Group the claimed opening values into the zeta batch and the zeta-next batch."""
    zeta_values = tuple(
        chain(constants, plonk_sigmas, wires, plonk_zs, partial_products, quotient_polys)
    )
    return Openings((OpeningBatch(zeta_values), OpeningBatch(tuple(plonk_zs_next))))


def assert_leading_zeros(pow_witness: int, proof_of_work_bits: int) -> int:
    """Check that the reduced witness has ``proof_of_work_bits`` leading zeros in 64 bits.

    Returns the reduced witness.
    """
    if not 0 <= proof_of_work_bits <= 64:
        raise ValueError("proof_of_work_bits must lie in [0, 64]")
    max_pow_witness = (1 << (64 - proof_of_work_bits)) - 1
    reduced = gl.reduce(pow_witness)
    if reduced > max_pow_witness:
        raise VerificationError(
            f"proof of work response {reduced} exceeds {max_pow_witness}"
        )
    return reduced


def reduced_openings(
    openings: Openings, alpha: QuadraticExtension
) -> list[QuadraticExtension]:
    """Fold each batch of opened values with powers of ``alpha``."""
    return [reduce_with_powers(batch.values, alpha) for batch in openings.batches]


def exp_from_bits_const_base(base: int, exponent_bits: Iterable[int]) -> int:
    """Return ``base ** e`` where ``e`` is given by its little-endian bits."""
    gl.check_canonical(base)
    product = gl.ONE
    base_pow = base
    for bit in exponent_bits:
        factor = gl.mul(gl.sub(base_pow, gl.ONE), product)
        product = gl.add(gl.mul(factor, _checked_bit(bit)), product)
        base_pow = gl.mul(base_pow, base_pow)
    return product


def calculate_subgroup_x(x_index_bits: Sequence[int], n_log: int) -> int:
    """Return the LDE domain point for a query index, ``g * w ** rev(index)``."""
    root = gl.primitive_root_of_unity(n_log)
    product = exp_from_bits_const_base(root, reversed(x_index_bits))
    return gl.mul(gl.MULTIPLICATIVE_GROUP_GENERATOR, product)


def fri_combine_initial(
    instance: InstanceInfo,
    initial_evals: Sequence[Sequence[int]],
    fri_alpha: QuadraticExtension,
    subgroup_x: QuadraticExtension,
    precomputed_reduced_evals: Sequence[QuadraticExtension],
) -> QuadraticExtension:
    """Combine the initial oracle evaluations into a single quotient value.

    ``initial_evals`` holds, per oracle, the leaf values opened at the
    queried point.
    """
    if len(instance.batches) != len(precomputed_reduced_evals):
        raise ValueError("number of batches does not match the precomputed reduced evaluations")

    total = QuadraticExtension.zero()
    for batch, reduced_opening in zip(instance.batches, precomputed_reduced_evals):
        evals = [
            QuadraticExtension.from_base(
                initial_evals[poly.oracle_index][poly.polynomial_index]
            )
            for poly in batch.polynomials
        ]
        numerator = reduce_with_powers(evals, fri_alpha) - reduced_opening
        denominator = subgroup_x - batch.point
        total = fri_alpha ** len(evals) * total
        total = mul_add_extension(numerator, denominator.inverse(), total)
    return total


def final_poly_eval(
    coeffs: Sequence[QuadraticExtension], point: QuadraticExtension
) -> QuadraticExtension:
    """Evaluate a polynomial given by its coefficients, lowest degree first."""
    result = QuadraticExtension.zero()
    for coeff in reversed(coeffs):
        result = mul_add_extension(result, point, coeff)
    return result


def interpolate(
    x: QuadraticExtension,
    x_points: Sequence[QuadraticExtension],
    y_points: Sequence[QuadraticExtension],
    barycentric_weights: Sequence[QuadraticExtension],
) -> QuadraticExtension:
    """Barycentric interpolation at ``x``; ``x`` must not be one of ``x_points``."""
    if not len(x_points) == len(y_points) == len(barycentric_weights):
        raise ValueError(
            "length of x_points, y_points, and barycentric_weights are inconsistent"
        )

    l_x = QuadraticExtension.one()
    for point in x_points:
        l_x = sub_mul_extension(x, point, l_x)

    total = QuadraticExtension.zero()
    for point, value, weight in zip(x_points, y_points, barycentric_weights):
        total = (weight / (x - point)) * value + total
    return l_x * total


def compute_evaluation(
    x: int,
    x_index_within_coset_bits: Sequence[int],
    arity_bits: int,
    evals: Sequence[QuadraticExtension],
    beta: QuadraticExtension,
) -> QuadraticExtension:
    """Interpolate the coset evaluations and evaluate the result at ``beta``."""
    arity = 1 << arity_bits
    if len(evals) != arity:
        raise ValueError(f"expected {arity} evaluations, got {len(evals)}")
    if arity_bits > _MAX_ARITY_BITS:
        raise ValueError(f"arity_bits must be at most {_MAX_ARITY_BITS}")

    g = gl.primitive_root_of_unity(arity_bits)
    g_inv = gl.exp(g, arity - 1)

    permuted: list[QuadraticExtension | None] = [None] * arity
    for i, value in enumerate(evals):
        new_index = _reverse8(i) >> arity_bits
        if new_index >= arity or permuted[new_index] is not None:
            raise ValueError(f"unsupported arity_bits {arity_bits} for evaluation reordering")
        permuted[new_index] = value
    y_points = [value for value in permuted if value is not None]

    start = exp_from_bits_const_base(g_inv, reversed(x_index_within_coset_bits))
    coset_start = gl.mul(start, x)

    g_ext = QuadraticExtension.from_base(g)
    x_points = [QuadraticExtension.from_base(coset_start)]
    for _ in range(arity - 1):
        x_points.append(x_points[-1] * g_ext)

    weights = []
    for i, xi in enumerate(x_points):
        weight = QuadraticExtension.one()
        for j, xj in enumerate(x_points):
            if i != j:
                weight = sub_mul_extension(xi, xj, weight)
        weights.append(weight.inverse())

    return interpolate(beta, x_points, y_points, weights)


def select_coset_eval(
    x_index_within_coset_bits: Sequence[int], evals: Sequence[QuadraticExtension]
) -> QuadraticExtension:
    """Pick the evaluation at the queried position of an arity-16 coset."""
    if len(x_index_within_coset_bits) != _COSET_LOOKUP_BITS:
        raise ValueError("assuming arity bits is 4")
    arity = 1 << _COSET_LOOKUP_BITS
    if len(evals) != arity:
        raise ValueError(f"expected {arity} evaluations, got {len(evals)}")
    b0, b1, b2, b3 = x_index_within_coset_bits
    leaves = [lookup2(b0, b1, *evals[i : i + 4]) for i in range(0, arity, 4)]
    return lookup2(b2, b3, *leaves)