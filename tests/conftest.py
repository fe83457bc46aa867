"""
Shared fixtures: toy reference strings with a known trapdoor.

Real reference strings come from a setup ceremony and nobody knows tau. Here
tau is fixed so that tests can compute [p(tau)] directly and compare it with
what the multi-scalar multiplications produce.
"""

import pytest

from primitives.curve import BLS12_381, BN254
from static_lookup.srs import ReferenceString

TAU = 0x5EED_CAFE_F00D_1234_5678_9ABC_DEF0
SRS_SIZE = 16


def make_srs(engine, tau: int, n_g1: int, n_g2: int) -> ReferenceString:
    """[tau^i]_1 for i < n_g1 and [tau^i]_2 for i < n_g2."""
    r = engine.scalar_field.order
    powers = [pow(tau, i, r) for i in range(max(n_g1, n_g2))]
    g1 = [engine.mul(engine.g1_generator(), p) for p in powers[:n_g1]]
    g2 = [engine.mul(engine.g2_generator(), p) for p in powers[:n_g2]]
    return ReferenceString(g1=tuple(g1), g2=tuple(g2), engine=engine)


@pytest.fixture(scope="session")
def engine():
    return BN254


@pytest.fixture(scope="session")
def tau():
    return TAU


@pytest.fixture(scope="session")
def srs():
    """BN254 reference string with 16 G1 and 16 G2 powers."""
    return make_srs(BN254, TAU, SRS_SIZE, SRS_SIZE)


@pytest.fixture(scope="session")
def small_bls_srs():
    """BLS12-381 reference string, G1 only is long enough for size-4 tables."""
    return make_srs(BLS12_381, TAU, 4, 2)


@pytest.fixture(scope="session")
def table_values_8():
    """Eight distinct values, deliberately not in ascending order."""
    return [42, 7, 1000003, 3, 99, 2**200 + 17, 5, 123456789]


@pytest.fixture(scope="session")
def large_srs():
    """BN254 reference string long enough to preprocess and commit a 64-row table."""
    return make_srs(BN254, TAU, 64, 65)
