"""
Committed Table Tests
=====================

Covers TableValues.commit(), the CommittedTable wire format and StaticTable.

All expected commitments are derived from the toy trapdoor tau in conftest,
e.g. the vanishing commitment must equal [tau^n - 1]_2.
"""

import struct

import pytest

from primitives.curve import BN254
from primitives.ntt import EvaluationDomain
from primitives.polynomial import evaluate
from static_lookup.errors import InvalidTableSize, ReferenceStringTooShort
from static_lookup.table import CommittedTable, StaticTable, TableValues

FF = BN254.scalar_field
CIRCUIT_DOMAIN = 4


def _g2(scalar):
    return BN254.mul(BN254.g2_generator(), scalar)


def _poly_at(values, x):
    """Evaluate the interpolant of values over the size-len(values) domain."""
    domain = EvaluationDomain(FF, len(values))
    return evaluate(domain.ifft(FF(values)), x)


@pytest.fixture(scope="module")
def table(srs, table_values_8):
    return TableValues.new(table_values_8, srs.g1)


@pytest.fixture(scope="module")
def committed(table, srs):
    return table.commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)


class TestCommit:
    """Field-by-field checks of the public commitment."""

    def test_reference_size(self, committed, table) -> None:
        assert committed.reference_size == 16
        assert len(table.quotients) == 8

    def test_vanishing_commitment(self, committed, tau) -> None:
        t = FF(tau)
        assert BN254.eq(committed.vanishing_commitment, _g2(t ** 8 - FF(1)))

    def test_table_commitment(self, committed, table_values_8, tau) -> None:
        expected = _poly_at(sorted(table_values_8), FF(tau))
        assert BN254.eq(committed.table_commitment, _g2(expected))

    def test_bound_element(self, committed, srs) -> None:
        """R = 16, D = 4 selects srs_g2[16 - 1 - (4 - 2)] = srs_g2[13]."""
        assert BN254.eq(committed.bound_element, srs.g2[13])

    @pytest.mark.parametrize("reference_size,circuit_domain,index", [
        (16, 2, 15),
        (16, 16, 1),
        (10, 8, 3),
        (9, 10, 0),
    ])
    def test_bound_index(self, table, srs, reference_size, circuit_domain, index) -> None:
        committed = table.commit(reference_size, srs.g2, circuit_domain)
        assert BN254.eq(committed.bound_element, srs.g2[index])
        assert committed.reference_size == reference_size

    def test_deterministic(self, table, srs, committed) -> None:
        again = table.commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)
        assert again == committed
        assert again.to_bytes() == committed.to_bytes()
        assert hash(again) == hash(committed)


class TestCommitErrors:

    def test_g2_too_short(self, table, srs) -> None:
        with pytest.raises(ReferenceStringTooShort) as exc:
            table.commit(srs.g1_len, srs.g2[:8], CIRCUIT_DOMAIN)
        assert exc.value.needed == 9

    def test_negative_bound_index(self, table, srs) -> None:
        with pytest.raises(ReferenceStringTooShort):
            table.commit(4, srs.g2, 8)

    def test_bound_index_past_g2(self, table, srs) -> None:
        with pytest.raises(ReferenceStringTooShort):
            table.commit(100, srs.g2, CIRCUIT_DOMAIN)

    @pytest.mark.parametrize("circuit_domain", [0, 1])
    def test_circuit_domain_too_small(self, table, srs, circuit_domain: int) -> None:
        """With R = 8 the bound index would land inside srs_g2 instead of failing."""
        with pytest.raises(ValueError, match="Circuit domain"):
            table.commit(8, srs.g2, circuit_domain)

    def test_non_power_of_two_size(self, table, srs) -> None:
        broken = TableValues(6, table.value_index_mapping, table.quotients[:6])
        with pytest.raises(InvalidTableSize):
            broken.commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)


class TestCommitmentOrder:
    """commit() interpolates from ascending values, new() from the original order."""

    def test_ascending_input_agrees(self, srs, tau) -> None:
        values = [2, 3, 5, 7]
        tv = TableValues.new(values, srs.g1)
        committed = tv.commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)

        assert tv.sorted_values() == tv.original_values()
        assert BN254.eq(committed.table_commitment, _g2(_poly_at(values, FF(tau))))

    def test_shuffled_input_commits_to_sorted_polynomial(self, committed, table_values_8, tau) -> None:
        t = FF(tau)
        sorted_commitment = _g2(_poly_at(sorted(table_values_8), t))
        original_commitment = _g2(_poly_at(table_values_8, t))

        assert BN254.eq(committed.table_commitment, sorted_commitment)
        assert not BN254.eq(committed.table_commitment, original_commitment)


class TestPairingConsistency:
    """For a table given in ascending order, quotients open the committed polynomial."""

    @pytest.fixture(scope="class")
    def ascending(self, srs):
        values = [1, 4, 9, 16, 25, 36, 49, 64]
        tv = TableValues.new(values, srs.g1)
        return values, tv, tv.commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)

    @pytest.mark.parametrize("i", [0, 3, 7])
    def test_quotient_opens_table_commitment(self, srs, ascending, i: int) -> None:
        values, tv, committed = ascending
        domain = EvaluationDomain(FF, 8)
        g = domain.element(i)
        # quotients[i] carries a g_i / n factor; undo it
        q = BN254.mul(tv.quotient(i), FF(8) * g ** -1)

        lhs = BN254.pairing(q, BN254.sub(srs.g2[1], _g2(g)))
        rhs = BN254.pairing(
            BN254.g1_generator(),
            BN254.sub(committed.table_commitment, _g2(FF(values[i]))),
        )
        assert lhs == rhs

    def test_single_value_table(self, srs) -> None:
        """A one-row table commits to [x]_2, so e([1/x]_1, t) == e([1]_1, [1]_2)."""
        x = FF(987654321)
        committed = TableValues.new([x], srs.g1).commit(srs.g1_len, srs.g2, CIRCUIT_DOMAIN)

        assert BN254.eq(committed.table_commitment, _g2(x))
        lhs = BN254.pairing(BN254.mul(BN254.g1_generator(), x ** -1), committed.table_commitment)
        assert lhs == BN254.pairing(BN254.g1_generator(), BN254.g2_generator())


class TestWireFormat:

    def test_layout(self, committed) -> None:
        data = committed.to_bytes()
        k = BN254.g2_size
        assert len(data) == 3 * k + 8
        assert data[:k] == BN254.encode_g2(committed.vanishing_commitment)
        assert data[k:2 * k] == BN254.encode_g2(committed.table_commitment)
        assert data[2 * k:3 * k] == BN254.encode_g2(committed.bound_element)
        assert data[3 * k:] == struct.pack("<Q", 16)

    def test_as_tuple_order(self, committed) -> None:
        zv, t, bound, reference_size = committed.as_tuple()
        assert zv is committed.vanishing_commitment
        assert t is committed.table_commitment
        assert bound is committed.bound_element
        assert reference_size == 16

    def test_bytes_roundtrip(self, committed) -> None:
        assert CommittedTable.from_bytes(committed.to_bytes()) == committed

    def test_json_roundtrip(self, committed) -> None:
        data = committed.to_json()
        assert data["curve"] == "bn254"
        assert data["reference_size"] == 16
        assert CommittedTable.from_json(data) == committed

    def test_rejects_wrong_length(self, committed) -> None:
        with pytest.raises(ValueError):
            CommittedTable.from_bytes(committed.to_bytes()[:-1])


class TestStaticTable:

    def test_from_values(self, srs, table_values_8, committed) -> None:
        table = StaticTable.from_values(table_values_8, srs, CIRCUIT_DOMAIN)
        assert table.is_opened
        assert table.is_committed
        assert table.committed == committed

    def test_without_opened(self, srs) -> None:
        table = StaticTable.from_values([5, 6], srs, CIRCUIT_DOMAIN)
        verifier_view = table.without_opened()
        assert not verifier_view.is_opened
        assert verifier_view.committed is table.committed

    def test_empty(self) -> None:
        table = StaticTable()
        assert not table.is_opened
        assert not table.is_committed

    def test_hashable(self, srs, table_values_8) -> None:
        first = StaticTable.from_values(table_values_8, srs, CIRCUIT_DOMAIN)
        second = StaticTable.from_values(table_values_8, srs, CIRCUIT_DOMAIN)

        assert first == second
        assert hash(first.opened) == hash(second.opened)
        assert hash(first) == hash(second)
        assert len({first, second, first.without_opened()}) == 2
