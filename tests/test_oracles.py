import pytest
from hypothesis import given
from hypothesis import strategies as st

from plonkfri.fri.oracles import (
    BatchInfo,
    CircuitLayout,
    InstanceInfo,
    OpeningBatch,
    OracleInfo,
    Openings,
    PlonkOracle,
    PolynomialInfo,
    assert_noncanonical_indices_ok,
    fri_all_polys,
    fri_oracles,
    fri_preprocessed_polys,
    fri_quotient_polys,
    fri_wire_polys,
    fri_zs_partial_products_polys,
    fri_zs_polys,
    num_preprocessed_polys,
    num_quotient_polys,
    num_zs_partial_products_polys,
    sigmas_range,
)
from plonkfri.goldilocks.extension import QuadraticExtension

LAYOUT = CircuitLayout(
    num_constants=4,
    num_routed_wires=80,
    num_wires=135,
    num_challenges=2,
    num_partial_products=9,
    quotient_degree_factor=8,
)

small = st.integers(min_value=0, max_value=40)
layouts = st.builds(
    CircuitLayout,
    num_constants=small,
    num_routed_wires=small,
    num_wires=small,
    num_challenges=small,
    num_partial_products=small,
    quotient_degree_factor=small,
)


def test_oracle_indices_and_blinding():
    assert [o.index for o in PlonkOracle] == [0, 1, 2, 3]
    assert PlonkOracle.CONSTANTS_SIGMAS.blinding() is False
    assert all(o.blinding() for o in PlonkOracle if o is not PlonkOracle.CONSTANTS_SIGMAS)


def test_sigmas_range_is_inclusive():
    rng = sigmas_range(LAYOUT)
    assert rng[0] == LAYOUT.num_constants
    assert rng[-1] == LAYOUT.num_constants + LAYOUT.num_routed_wires
    assert len(rng) == LAYOUT.num_routed_wires + 1


def test_counts_follow_layout():
    assert num_preprocessed_polys(LAYOUT) == LAYOUT.num_constants + LAYOUT.num_routed_wires
    assert num_zs_partial_products_polys(LAYOUT) == LAYOUT.num_challenges * (
        1 + LAYOUT.num_partial_products
    )
    assert num_quotient_polys(LAYOUT) == LAYOUT.num_challenges * LAYOUT.quotient_degree_factor


def test_fri_oracles_match_poly_lists():
    oracles = fri_oracles(LAYOUT)
    lists = [
        fri_preprocessed_polys(LAYOUT),
        fri_wire_polys(LAYOUT),
        fri_zs_partial_products_polys(LAYOUT),
        fri_quotient_polys(LAYOUT),
    ]
    assert [o.num_polys for o in oracles] == [len(polys) for polys in lists]
    assert [o.blinding for o in oracles] == [False, True, True, True]


def test_zs_polys_are_prefix_of_partial_products():
    zs = fri_zs_polys(LAYOUT)
    assert zs == fri_zs_partial_products_polys(LAYOUT)[: LAYOUT.num_challenges]
    assert all(p.oracle_index == PlonkOracle.ZS_PARTIAL_PRODUCTS.index for p in zs)


@given(layouts)
def test_all_polys_cover_every_oracle_in_order(layout):
    polys = fri_all_polys(layout)
    assert len(polys) == sum(o.num_polys for o in fri_oracles(layout))
    assert [p.oracle_index for p in polys] == sorted(p.oracle_index for p in polys)
    for oracle in PlonkOracle:
        indices = [p.polynomial_index for p in polys if p.oracle_index == oracle.index]
        assert indices == list(range(len(indices)))


def test_layout_rejects_negative_values():
    with pytest.raises(ValueError):
        CircuitLayout(-1, 0, 0, 0, 0, 0)


def test_noncanonical_indices_ok_for_normal_rate():
    rate = 1 / 8
    p_ambiguous = assert_noncanonical_indices_ok(rate)
    assert 0 < p_ambiguous < rate * 1e-5


def test_noncanonical_indices_rejected_for_tiny_rate():
    with pytest.raises(ValueError):
        assert_noncanonical_indices_ok(1e-9)


def test_instance_and_openings_hold_values():
    point = QuadraticExtension(3, 5)
    batch = BatchInfo(point, tuple(fri_zs_polys(LAYOUT)))
    instance = InstanceInfo(tuple(fri_oracles(LAYOUT)), (batch,))
    assert instance.batches[0].point == point
    assert instance.oracles[1] == OracleInfo(LAYOUT.num_wires, True)
    assert instance.batches[0].polynomials[1] == PolynomialInfo(2, 1)
    openings = Openings((OpeningBatch((point, QuadraticExtension.one())),))
    assert openings.batches[0].values[1] == QuadraticExtension.one()