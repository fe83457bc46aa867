"""Pairing engines: scalar field, G1, G2 and the pairing, behind one interface.

Table preprocessing is written against PairingEngine so that it does not care
which curve it runs on. PyEccEngine backs the interface with py_ecc's
optimized curve modules, whose points are projective (x, y, z) tuples.

Canonical affine encoding (used for anything that leaves the process):
    G1: x || y
    G2: x.c1 || x.c0 || y.c1 || y.c0
Each coordinate is a big-endian integer of fq_bytes bytes. The identity is
encoded as all zero bytes.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from py_ecc import optimized_bls12_381, optimized_bn128

from primitives.field import FR_BLS12_381, FR_BN254

Point = Tuple[Any, ...]


class PairingEngine(ABC):
    """Uniform interface over a pairing-friendly curve."""

    name: str
    scalar_field: Any
    fq_bytes: int

    @abstractmethod
    def g1_generator(self) -> Point:
        pass

    @abstractmethod
    def g2_generator(self) -> Point:
        pass

    @abstractmethod
    def g1_identity(self) -> Point:
        pass

    @abstractmethod
    def g2_identity(self) -> Point:
        pass

    @abstractmethod
    def add(self, p: Point, q: Point) -> Point:
        pass

    @abstractmethod
    def neg(self, p: Point) -> Point:
        pass

    @abstractmethod
    def mul(self, p: Point, scalar) -> Point:
        """Scalar multiplication; scalar is an int or a scalar field element."""

    @abstractmethod
    def eq(self, p: Point, q: Point) -> bool:
        pass

    @abstractmethod
    def is_identity(self, p: Point) -> bool:
        pass

    @abstractmethod
    def identity_like(self, p: Point) -> Point:
        pass

    @abstractmethod
    def pairing(self, p1: Point, q2: Point):
        """e(p1, q2) with p1 in G1 and q2 in G2."""

    @abstractmethod
    def to_affine(self, p: Point) -> Optional[Tuple[Any, Any]]:
        """Affine (x, y), or None for the identity."""

    @abstractmethod
    def encode_g1(self, p: Point) -> bytes:
        pass

    @abstractmethod
    def encode_g2(self, p: Point) -> bytes:
        pass

    @abstractmethod
    def decode_g1(self, data: bytes) -> Point:
        pass

    @abstractmethod
    def decode_g2(self, data: bytes) -> Point:
        pass

    def sub(self, p: Point, q: Point) -> Point:
        return self.add(p, self.neg(q))

    @property
    def g1_size(self) -> int:
        return 2 * self.fq_bytes

    @property
    def g2_size(self) -> int:
        return 4 * self.fq_bytes

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PyEccEngine(PairingEngine):
    """PairingEngine backed by a py_ecc optimized curve module."""

    def __init__(self, name: str, curve, scalar_field, fq_bytes: int) -> None:
        self.name = name
        self.scalar_field = scalar_field
        self.fq_bytes = fq_bytes
        self._curve = curve
        assert curve.curve_order == scalar_field.order, "scalar field does not match curve order"

    # --- Group operations ---

    def g1_generator(self) -> Point:
        return self._curve.G1

    def g2_generator(self) -> Point:
        return self._curve.G2

    def g1_identity(self) -> Point:
        return self._curve.Z1

    def g2_identity(self) -> Point:
        return self._curve.Z2

    def add(self, p: Point, q: Point) -> Point:
        return self._curve.add(p, q)

    def neg(self, p: Point) -> Point:
        return self._curve.neg(p)

    def mul(self, p: Point, scalar) -> Point:
        n = int(scalar) % self._curve.curve_order
        if n == 0:
            return self.identity_like(p)
        return self._curve.multiply(p, n)

    def eq(self, p: Point, q: Point) -> bool:
        return self._curve.eq(p, q)

    def is_identity(self, p: Point) -> bool:
        return self._curve.is_inf(p)

    def pairing(self, p1: Point, q2: Point):
        # py_ecc takes the G2 argument first
        return self._curve.pairing(q2, p1)

    def to_affine(self, p: Point):
        if self.is_identity(p):
            return None
        return self._curve.normalize(p)

    def identity_like(self, p: Point) -> Point:
        """Identity of the group p belongs to."""
        coord = p[2]
        return (coord.one(), coord.one(), coord.zero())

    # --- Encoding ---

    def _fq_to_bytes(self, value) -> bytes:
        return int(value).to_bytes(self.fq_bytes, "big")

    def _fq_from_bytes(self, data: bytes) -> int:
        n = int.from_bytes(data, "big")
        if n >= self._curve.FQ.field_modulus:
            raise ValueError("Coordinate is not a canonical base field element")
        return n

    def encode_g1(self, p: Point) -> bytes:
        affine = self.to_affine(p)
        if affine is None:
            return bytes(self.g1_size)
        x, y = affine
        return self._fq_to_bytes(x) + self._fq_to_bytes(y)

    def encode_g2(self, p: Point) -> bytes:
        affine = self.to_affine(p)
        if affine is None:
            return bytes(self.g2_size)
        x, y = affine
        x0, x1 = x.coeffs
        y0, y1 = y.coeffs
        return b"".join(self._fq_to_bytes(c) for c in (x1, x0, y1, y0))

    def decode_g1(self, data: bytes) -> Point:
        if len(data) != self.g1_size:
            raise ValueError(f"G1 encoding must be {self.g1_size} bytes, got {len(data)}")
        if not any(data):
            return self.g1_identity()
        k = self.fq_bytes
        FQ = self._curve.FQ
        point = (FQ(self._fq_from_bytes(data[:k])), FQ(self._fq_from_bytes(data[k:])), FQ.one())
        self._check_point(point, self._curve.b, "G1")
        return point

    def decode_g2(self, data: bytes) -> Point:
        if len(data) != self.g2_size:
            raise ValueError(f"G2 encoding must be {self.g2_size} bytes, got {len(data)}")
        if not any(data):
            return self.g2_identity()
        k = self.fq_bytes
        x1, x0, y1, y0 = (self._fq_from_bytes(data[i * k:(i + 1) * k]) for i in range(4))
        FQ2 = self._curve.FQ2
        point = (FQ2([x0, x1]), FQ2([y0, y1]), FQ2.one())
        self._check_point(point, self._curve.b2, "G2")
        return point

    def _check_point(self, point: Point, b, group: str) -> None:
        if not self._curve.is_on_curve(point, b):
            raise ValueError(f"Decoded {group} point is not on the curve")
        if not self.is_identity(self._curve.multiply(point, self._curve.curve_order)):
            raise ValueError(f"Decoded {group} point is not in the prime-order subgroup")


# --- Engines ---

BN254 = PyEccEngine("bn254", optimized_bn128, FR_BN254, fq_bytes=32)
BLS12_381 = PyEccEngine("bls12_381", optimized_bls12_381, FR_BLS12_381, fq_bytes=48)

_ENGINES = {engine.name: engine for engine in (BN254, BLS12_381)}


def get_engine(name: str) -> PairingEngine:
    """Look an engine up by name ("bn254" or "bls12_381")."""
    try:
        return _ENGINES[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown curve '{name}', expected one of {sorted(_ENGINES)}") from None
