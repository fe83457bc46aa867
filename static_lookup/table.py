"""Static lookup tables: preprocessing, public commitment and wire format.

A static table is a fixed set of distinct field elements, one per row of a
power-of-two domain. The registrant preprocesses it once into TableValues
(the value -> row bijection plus one quotient commitment per root of unity)
and publishes the much smaller CommittedTable.

Root enumeration: row i corresponds to w^i, w the domain's primitive root, in
the order 1, w, w^2, ... Quotients are stored in that order.
"""

import logging
import struct
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from primitives.curve import BN254, PairingEngine, Point, get_engine
from primitives.msm import best_multiexp
from primitives.ntt import EvaluationDomain
from primitives.polynomial import kate_division
from primitives.pow2 import is_pow_2
from static_lookup.errors import DuplicateTableValue, InvalidTableSize, ReferenceStringTooShort

logger = logging.getLogger(__name__)


# --- Table Identifier ---

@dataclass(frozen=True, order=True)
class TableId:
    """Key of a table in a circuit's table registry.

    Equality, hashing and ordering are those of the wrapped value.
    """
    value: Any

    @property
    def id(self) -> Any:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


# --- Committed Table ---

@dataclass(frozen=True, eq=False)
class CommittedTable:
    """Public commitment to a static table; everything the verifier needs.

    Attributes:
        vanishing_commitment: [tau^n - 1]_2 for table size n
        table_commitment: [T(tau)]_2, T the table polynomial
        bound_element: [tau^(R-1-(D-2))]_2, bounds the degree of a polynomial
                       built later by the opening protocol
        reference_size: R, the G1 reference string length used
    """
    vanishing_commitment: Point
    table_commitment: Point
    bound_element: Point
    reference_size: int
    engine: PairingEngine = field(default=BN254, repr=False)

    def as_tuple(self) -> Tuple[Point, Point, Point, int]:
        """Fixed wire order."""
        return (self.vanishing_commitment, self.table_commitment, self.bound_element, self.reference_size)

    def to_bytes(self) -> bytes:
        """Three canonical G2 encodings followed by reference_size as '<Q'."""
        points = b"".join(self.engine.encode_g2(p) for p in self.as_tuple()[:3])
        return points + struct.pack("<Q", self.reference_size)

    @classmethod
    def from_bytes(cls, data: bytes, engine: PairingEngine = BN254) -> "CommittedTable":
        k = engine.g2_size
        expected = 3 * k + 8
        if len(data) != expected:
            raise ValueError(f"CommittedTable encoding must be {expected} bytes, got {len(data)}")
        zv, t, bound = (engine.decode_g2(data[i * k:(i + 1) * k]) for i in range(3))
        (reference_size,) = struct.unpack("<Q", data[3 * k:])
        return cls(zv, t, bound, reference_size, engine)

    def to_json(self) -> dict[str, Any]:
        return {
            "curve": self.engine.name,
            "vanishing_commitment": self.engine.encode_g2(self.vanishing_commitment).hex(),
            "table_commitment": self.engine.encode_g2(self.table_commitment).hex(),
            "bound_element": self.engine.encode_g2(self.bound_element).hex(),
            "reference_size": self.reference_size,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CommittedTable":
        engine = get_engine(data.get("curve", BN254.name))
        return cls(
            vanishing_commitment=engine.decode_g2(bytes.fromhex(data["vanishing_commitment"])),
            table_commitment=engine.decode_g2(bytes.fromhex(data["table_commitment"])),
            bound_element=engine.decode_g2(bytes.fromhex(data["bound_element"])),
            reference_size=int(data["reference_size"]),
            engine=engine,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommittedTable):
            return NotImplemented
        return self.engine.name == other.engine.name and self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


# --- Table Values ---

@dataclass(frozen=True)
class TableValues:
    """Prover-side preprocessed table.

    Attributes:
        size: Number of rows (power of 2)
        value_index_mapping: Read-only mapping value -> original row index,
                             iterated in ascending value order
        quotients: One G1 commitment per root, quotients[i] belongs to w^i
        engine: Curve everything is committed on
    """
    size: int
    value_index_mapping: Mapping[int, int]
    quotients: Tuple[Point, ...]
    engine: PairingEngine = field(default=BN254, repr=False)

    def __hash__(self) -> int:
        return hash((self.engine.name, self.size, tuple(self.value_index_mapping.items())))

    @classmethod
    def new(cls, values: Iterable, srs_g1: Sequence[Point], engine: PairingEngine = BN254) -> "TableValues":
        """Preprocess raw table values.

        For each root g_i the quotient (T(X) - T(g_i)) / (X - g_i) is scaled by
        g_i / n and committed against srs_g1. This is quadratic in the table
        size; a multi-point quotient algorithm would be a drop-in replacement as
        long as it yields the same commitments.

        Args:
            values: Distinct field elements (ints or scalar field elements)
            srs_g1: G1 reference string prefix, at least size - 1 elements
            engine: Pairing engine

        Raises:
            InvalidTableSize: len(values) is not a power of 2
            DuplicateTableValue: a value repeats
            ReferenceStringTooShort: srs_g1 cannot hold a quotient
        """
        FF = engine.scalar_field
        ints = [int(v) % FF.order for v in values]
        size = len(ints)
        if not is_pow_2(size):
            raise InvalidTableSize(size)

        value_index_mapping = _build_value_index_mapping(ints)
        if len(srs_g1) < size - 1:
            raise ReferenceStringTooShort("G1", size - 1, len(srs_g1))

        domain = EvaluationDomain(FF, size)
        n_inv = domain.ifft_divisor

        # T(X) from the values in their original order
        table_coeffs = domain.ifft(FF(ints), domain.omega_inv, domain.ifft_divisor)

        identity = engine.g1_identity()
        quotients = []
        for g_i in domain.roots():
            quotient = kate_division(table_coeffs, g_i) * (g_i * n_inv)
            quotients.append(best_multiexp(engine, quotient, srs_g1[:len(quotient)], identity=identity))

        logger.debug("Preprocessed %s table of size %d (%d quotient commitments)",
                     engine.name, size, len(quotients))
        return cls(size, MappingProxyType(value_index_mapping), tuple(quotients), engine)

    def commit(self, srs_g1_len: int, srs_g2: Sequence[Point], circuit_domain: int) -> CommittedTable:
        """Derive the public CommittedTable.

        The table polynomial is interpolated from the values in ascending value
        order, not their original row order (see DESIGN.md, open questions).

        Args:
            srs_g1_len: Length R of the full G1 reference string
            srs_g2: G2 reference string
            circuit_domain: Size D of the circuit's evaluation domain

        Raises:
            InvalidTableSize: size is not a power of 2
            ReferenceStringTooShort: srs_g2 lacks [tau^size]_2 or the bound element
            ValueError: circuit_domain is smaller than 2
        """
        if not is_pow_2(self.size):
            raise InvalidTableSize(self.size)
        if len(srs_g2) < self.size + 1:
            raise ReferenceStringTooShort("G2", self.size + 1, len(srs_g2))
        if circuit_domain < 2:
            raise ValueError(f"Circuit domain must have at least 2 rows, got {circuit_domain}")

        bound_index = srs_g1_len - 1 - (circuit_domain - 2)
        if bound_index < 0:
            raise ReferenceStringTooShort("G1", circuit_domain - 1, srs_g1_len)
        if bound_index >= len(srs_g2):
            raise ReferenceStringTooShort("G2", bound_index + 1, len(srs_g2))

        engine = self.engine
        FF = engine.scalar_field
        domain = EvaluationDomain(FF, self.size)

        # zv = x^n - 1
        zv = engine.sub(srs_g2[self.size], srs_g2[0])

        table_coeffs = domain.ifft(FF(self.sorted_values()), domain.omega_inv, domain.ifft_divisor)
        t = best_multiexp(engine, table_coeffs, srs_g2[:self.size], identity=engine.g2_identity())

        logger.debug("Committed table of size %d: reference size %d, bound index %d",
                     self.size, srs_g1_len, bound_index)
        return CommittedTable(
            vanishing_commitment=zv,
            table_commitment=t,
            bound_element=srs_g2[bound_index],
            reference_size=srs_g1_len,
            engine=engine,
        )

    # --- Accessors ---

    def __len__(self) -> int:
        return self.size

    def __contains__(self, value) -> bool:
        return int(value) % self.engine.scalar_field.order in self.value_index_mapping

    def index_of(self, value) -> int:
        """Original row of value; KeyError if it is not in the table."""
        key = int(value) % self.engine.scalar_field.order
        try:
            return self.value_index_mapping[key]
        except KeyError:
            raise KeyError(f"Value {key} is not in the table") from None

    def quotient(self, i: int) -> Point:
        """Quotient commitment for root w^i."""
        return self.quotients[i]

    def sorted_values(self) -> list[int]:
        return list(self.value_index_mapping.keys())

    def original_values(self) -> list[int]:
        ordered = [0] * self.size
        for value, index in self.value_index_mapping.items():
            ordered[index] = value
        return ordered

    def table_coefficients(self):
        """Coefficients of T(X), interpolated from the original row order."""
        FF = self.engine.scalar_field
        return EvaluationDomain(FF, self.size).ifft(FF(self.original_values()))


def _build_value_index_mapping(values: Sequence[int]) -> dict[int, int]:
    """Ascending value -> index mapping; rejects repeated values."""
    seen: dict[int, int] = {}
    for i, value in enumerate(values):
        if value in seen:
            raise DuplicateTableValue(value, seen[value], i)
        seen[value] = i
    return dict(sorted(seen.items()))


# --- Static Table ---

@dataclass(frozen=True)
class StaticTable:
    """A table as held by one party.

    The registrant holds both halves; a verifier only ever gets `committed`.
    """
    opened: Optional[TableValues] = None
    committed: Optional[CommittedTable] = None

    @classmethod
    def from_values(cls, values: Iterable, srs, circuit_domain: int) -> "StaticTable":
        """Preprocess and commit in one go from a ReferenceString."""
        opened = TableValues.new(values, srs.g1, srs.engine)
        return cls(opened=opened, committed=opened.commit(srs.g1_len, srs.g2, circuit_domain))

    @property
    def is_opened(self) -> bool:
        return self.opened is not None

    @property
    def is_committed(self) -> bool:
        return self.committed is not None

    def without_opened(self) -> "StaticTable":
        """Verifier view: drop the prover-side data."""
        return StaticTable(opened=None, committed=self.committed)
