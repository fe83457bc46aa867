"""Pairing-friendly scalar fields GF(r).

Uses galois library for all field arithmetic. FR_BN254 and FR_BLS12_381 are the
field types. Both are built with their known multiplicative generator and
verify=False: galois would otherwise factor r - 1 to find a primitive element,
which is slow for 255-bit primes.
"""

from typing import Iterable

import galois

# --- Field Construction ---

BN254_SCALAR_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BLS12_381_SCALAR_PRIME = 52435875175126190479447740508185965837690552500527637822603658699938581184513

FR_BN254 = galois.GF(BN254_SCALAR_PRIME, primitive_element=7, verify=False)
"""Scalar field of BN254 (alt_bn128). Two-adicity 28, generator 7.

The 2^28-th root of unity is 7^((r-1)/2^28); every smaller power-of-two
domain root is a repeated square of it.
"""

FR_BLS12_381 = galois.GF(BLS12_381_SCALAR_PRIME, primitive_element=7, verify=False)
"""Scalar field of BLS12-381. Two-adicity 32."""


def two_adicity(field_type) -> int:
    """Largest s such that 2^s divides r - 1."""
    t = field_type.order - 1
    s = 0
    while t % 2 == 0:
        t //= 2
        s += 1
    return s


def to_field(field_type, values: Iterable[int]):
    """Build a galois array from integers, reducing them into [0, r)."""
    return field_type([int(v) % field_type.order for v in values])


def root_of_unity(field_type, n: int):
    """Return the primitive n-th root of unity g^((r-1)/n)."""
    if n <= 0 or (field_type.order - 1) % n != 0:
        raise ValueError(f"No {n}-th root of unity in GF({field_type.order})")
    return field_type.primitive_root_of_unity(n) if n > 1 else field_type(1)
