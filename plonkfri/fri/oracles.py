"""Oracle and polynomial layout of a PLONK proof as seen by FRI.

The prover commits to four oracles: preprocessed constants and sigmas,
wires, the Z and partial product polynomials, and the quotient chunks.
The helpers here describe which polynomials live in which oracle and in
what order they are opened.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields

from ..goldilocks import base
from ..goldilocks.extension import QuadraticExtension


@dataclass(frozen=True, slots=True)
class CircuitLayout:
    """The circuit dimensions that fix how polynomials are laid out."""

    num_constants: int
    num_routed_wires: int
    num_wires: int
    num_challenges: int
    num_partial_products: int
    quotient_degree_factor: int

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if value < 0:
                raise ValueError(f"{field.name} must be non-negative, got {value}")


class PlonkOracle(enum.IntEnum):
    """The committed oracles, valued by their index in the proof."""

    CONSTANTS_SIGMAS = 0
    WIRES = 1
    ZS_PARTIAL_PRODUCTS = 2
    QUOTIENT = 3

    @property
    def index(self) -> int:
        return int(self)

    def blinding(self) -> bool:
        """Whether the oracle's leaves carry salt when hiding is enabled."""
        return self is not PlonkOracle.CONSTANTS_SIGMAS


@dataclass(frozen=True, slots=True)
class PolynomialInfo:
    """A polynomial identified by its oracle and its position inside it."""

    oracle_index: int
    polynomial_index: int


@dataclass(frozen=True, slots=True)
class OracleInfo:
    """How many polynomials an oracle holds and whether it is blinded."""

    num_polys: int
    blinding: bool


@dataclass(frozen=True, slots=True)
class BatchInfo:
    """Polynomials opened together at a single point."""

    point: QuadraticExtension
    polynomials: tuple[PolynomialInfo, ...]


@dataclass(frozen=True, slots=True)
class InstanceInfo:
    """The oracles of a proof and the batches in which they are opened."""

    oracles: tuple[OracleInfo, ...]
    batches: tuple[BatchInfo, ...]


@dataclass(frozen=True, slots=True)
class OpeningBatch:
    """Claimed values of one batch of polynomials at its point."""

    values: tuple[QuadraticExtension, ...]


@dataclass(frozen=True, slots=True)
class Openings:
    """Claimed values for every opening batch."""

    batches: tuple[OpeningBatch, ...]


def _polynomials(oracle: PlonkOracle, count: int) -> list[PolynomialInfo]:
    return [PolynomialInfo(oracle.index, i) for i in range(count)]


def sigmas_range(layout: CircuitLayout) -> list[int]:
    """Indices from ``num_constants`` to ``num_constants + num_routed_wires`` inclusive."""
    start = layout.num_constants
    return list(range(start, start + layout.num_routed_wires + 1))


def num_preprocessed_polys(layout: CircuitLayout) -> int:
    """Number of polynomials in the constants and sigmas oracle."""
    return sigmas_range(layout)[-1]


def num_zs_partial_products_polys(layout: CircuitLayout) -> int:
    """Number of polynomials in the Z and partial products oracle."""
    return layout.num_challenges * (1 + layout.num_partial_products)


def num_quotient_polys(layout: CircuitLayout) -> int:
    """Number of polynomials in the quotient oracle."""
    return layout.num_challenges * layout.quotient_degree_factor


def fri_preprocessed_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """All polynomials of the constants and sigmas oracle."""
    return _polynomials(PlonkOracle.CONSTANTS_SIGMAS, num_preprocessed_polys(layout))


def fri_wire_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """All polynomials of the wires oracle."""
    return _polynomials(PlonkOracle.WIRES, layout.num_wires)


def fri_zs_partial_products_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """All polynomials of the Z and partial products oracle."""
    return _polynomials(PlonkOracle.ZS_PARTIAL_PRODUCTS, num_zs_partial_products_polys(layout))


def fri_quotient_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """All polynomials of the quotient oracle."""
    return _polynomials(PlonkOracle.QUOTIENT, num_quotient_polys(layout))


def fri_zs_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """The Z polynomials, one per challenge, opened at the next point."""
    return _polynomials(PlonkOracle.ZS_PARTIAL_PRODUCTS, layout.num_challenges)


def fri_oracles(layout: CircuitLayout) -> list[OracleInfo]:
    """Size and blinding of each oracle, in oracle index order."""
    sizes = {
        PlonkOracle.CONSTANTS_SIGMAS: num_preprocessed_polys(layout),
        PlonkOracle.WIRES: layout.num_wires,
        PlonkOracle.ZS_PARTIAL_PRODUCTS: num_zs_partial_products_polys(layout),
        PlonkOracle.QUOTIENT: num_quotient_polys(layout),
    }
    return [OracleInfo(sizes[oracle], oracle.blinding()) for oracle in PlonkOracle]


def fri_all_polys(layout: CircuitLayout) -> list[PolynomialInfo]:
    """Every committed polynomial, oracle by oracle."""
    return [
        *fri_preprocessed_polys(layout),
        *fri_wire_polys(layout),
        *fri_zs_partial_products_polys(layout),
        *fri_quotient_polys(layout),
    ]


def assert_noncanonical_indices_ok(rate: float) -> float:
    """Check that non-canonical query indices are negligible for ``rate``.

    Returns the probability that a random 64-bit value has an ambiguous
    encoding; raises ValueError if it is not negligible against the rate.
    """
    max_u64 = (1 << 64) - 1
    num_ambiguous = max_u64 - base.MODULUS + 1
    p_ambiguous = float(num_ambiguous) / float(base.MODULUS)
    if p_ambiguous >= rate * 1e-5:
        raise ValueError(
            "a non-negligible portion of field elements are in the range that "
            "permits non-canonical encodings"
        )
    return p_ambiguous