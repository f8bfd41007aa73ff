# plonkfri

Plain-integer arithmetic over the Goldilocks field (p = 2^64 - 2^32 + 1), its
quadratic extension and a degree-two algebra over that extension, plus the
pieces of a FRI verifier for Plonky2-style proofs that work on values alone:
oracle layouts, opening batches, proof-of-work checks, initial combination,
coset interpolation and final-polynomial evaluation.

The package has no third-party dependencies.

## Install

```
pip install .
pip install ".[test]"   # with pytest and hypothesis
```

## Goldilocks field

`plonkfri.goldilocks.base` works on Python integers. Canonical elements lie in
`[0, MODULUS)`.

```python
from plonkfri.goldilocks.base import add, mul, mul_add, inverse, exp, primitive_root_of_unity

mul_add(1, 2, 3)                 # 5
x = inverse(7)
mul(x, 7)                        # 1
g = primitive_root_of_unity(4)   # generator of the order-16 subgroup
exp(g, 16)                       # 1
```

The arithmetic functions (`add`, `sub`, `mul`, `mul_add`, `inverse`, `exp`)
raise `FieldError` when an operand is not canonical; `inverse(0)` raises it
too. `check_canonical` and `range_check` reject values outside `[0, p)`.
`reduce` and `reduce_with_max_bits` reduce a non-negative integer modulo p and
raise `FieldError` when the quotient does not fit the allowed bit width.
`split_limbs` returns the high and low 32-bit limbs, `two_adic_subgroup(n)`
lists the powers of the `2**n`-th root of unity (`2**n + 1` entries, ending
back at one), and `parse_decimal_elements` turns decimal strings into integers.

## Quadratic extension

`plonkfri.goldilocks.extension.QuadraticExtension` is an immutable element
`c0 + c1 * X` with `X^2 = 7`. It supports `+`, `-`, `*`, `/`, `**` with a
non-negative integer, `scalar_mul`, `inverse` and `is_zero`.

```python
from plonkfri.goldilocks.extension import QuadraticExtension

a = QuadraticExtension.from_pair([4994088319481652598, 16489566008211790727])
b = QuadraticExtension.from_pair([3797605683985595697, 13424401189265534004])
a * b
(a * b) / b == a                 # True
```

The module also provides `mul_add_extension`, `sub_mul_extension`,
`inner_product_extension`, `reduce_with_powers`, the selectors `lookup` and
`lookup2`, and `extensions_from_pairs`.

## Extension algebra

`plonkfri.goldilocks.algebra.ExtensionAlgebra` is an element `a0 + a1 * Y`
over the quadratic extension, with `+`, `-`, `*` and `scale`.
`partial_interpolate_ext_algebra` folds barycentric terms into a running
evaluation and returns the new evaluation and partial product.

## FRI helpers

`plonkfri.fri.oracles` describes the four committed oracles of a circuit
(`PlonkOracle`), given its dimensions as a `CircuitLayout`: `fri_oracles`,
`fri_all_polys`, `fri_zs_polys` and the per-oracle lists and counts. It also
holds the data classes `PolynomialInfo`, `OracleInfo`, `BatchInfo`,
`InstanceInfo`, `OpeningBatch` and `Openings`, and
`assert_noncanonical_indices_ok`, which raises `ValueError` when the rate is
too small.

`plonkfri.fri.evaluation` builds the instance (`get_instance`), groups claimed
openings (`to_openings`, `reduced_openings`), checks the proof-of-work response
(`assert_leading_zeros`, which raises `VerificationError`), and computes the
values compared in a query round: `calculate_subgroup_x`,
`fri_combine_initial`, `select_coset_eval`, `compute_evaluation`,
`interpolate` and `final_poly_eval`. Index bits are passed little-endian as
lists of 0 and 1. Malformed inputs raise `ValueError` or `FieldError`.

## What it does not do

The package computes values; it does not verify a whole proof. It has no
hashing, no Merkle-path checks, no Fiat-Shamir challenger, no reading of proof
or circuit files, no proving or key setup, and no command-line tool. Comparing
the values from a query round is left to the caller.

## Tests

```
pytest
```