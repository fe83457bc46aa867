"""Size-indexed commitment bases shared by every table of one size."""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from primitives.curve import BN254, PairingEngine, Point
from primitives.msm import best_multiexp
from primitives.ntt import EvaluationDomain
from primitives.pow2 import is_pow_2
from static_lookup.errors import BasisLengthMismatch, InvalidTableSize, ReferenceStringTooShort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TableConfig:
    """Lagrange and opening-at-zero bases for tables of `size` rows.

    Attributes:
        size: Number of rows (power of 2)
        lagrange_basis: [L_i(tau)]_1 for i in 0..size-1
        opening_basis: [(L_i(tau) - L_i(0)) / tau]_1 for i in 0..size-1
    """
    size: int
    lagrange_basis: Tuple[Point, ...]
    opening_basis: Tuple[Point, ...]

    def __post_init__(self) -> None:
        if not is_pow_2(self.size):
            raise InvalidTableSize(self.size)
        object.__setattr__(self, "lagrange_basis", tuple(self.lagrange_basis))
        object.__setattr__(self, "opening_basis", tuple(self.opening_basis))
        if len(self.lagrange_basis) != self.size:
            raise BasisLengthMismatch("lagrange_basis", self.size, len(self.lagrange_basis))
        if len(self.opening_basis) != self.size:
            raise BasisLengthMismatch("opening_basis", self.size, len(self.opening_basis))

    @classmethod
    def from_srs(cls, size: int, srs_g1: Sequence[Point], engine: PairingEngine = BN254) -> "TableConfig":
        """Compute both bases from [tau^j]_1, j < size.

        L_i has coefficients w^(-ij) / n, so [L_i(tau)]_1 is their MSM against
        srs_g1[:n]; dropping the constant term and shifting down by one gives
        the opening-at-zero element against srs_g1[:n-1].
        """
        if not is_pow_2(size):
            raise InvalidTableSize(size)
        if len(srs_g1) < size:
            raise ReferenceStringTooShort("G1", size, len(srs_g1))

        FF = engine.scalar_field
        domain = EvaluationDomain(FF, size)
        identity = engine.g1_identity()

        lagrange = []
        opening = []
        for i in range(size):
            unit = FF.Zeros(size)
            unit[i] = 1
            coeffs = domain.ifft(unit)
            lagrange.append(best_multiexp(engine, coeffs, srs_g1[:size], identity=identity))
            opening.append(best_multiexp(engine, coeffs[1:], srs_g1[:size - 1], identity=identity))

        logger.debug("Computed %s table config for size %d", engine.name, size)
        return cls(size, tuple(lagrange), tuple(opening))
