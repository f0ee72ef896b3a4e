import pytest # type: ignore
import numpy as np # type: ignore
from minsketch.lib.hashfamily import HashFamily, XXHash64, MASK64
from minsketch.lib.errors import ConfigurationError

@pytest.mark.quick
class TestHashFamilyQuick:
    """Quick tests for HashFamily."""

    def test_init(self):
        """Test HashFamily initialization."""
        family = HashFamily.from_seed(16)
        assert family.k == 16
        assert family.h1 == XXHash64(42)
        assert family.h2 == XXHash64(43)

    def test_missing_base_hash(self):
        """A missing base hash is a configuration error."""
        with pytest.raises(ConfigurationError):
            HashFamily(8, None)
        with pytest.raises(ConfigurationError):
            HashFamily(8, XXHash64(1), "not callable")

    @pytest.mark.parametrize("k", [0, -3, 2.5, True])
    def test_invalid_k(self, k):
        """Signature length must be a positive integer."""
        with pytest.raises(ConfigurationError):
            HashFamily(k, XXHash64(1))

    def test_slot_formula(self):
        """Slot i hashes to h1 + i * h2 modulo 2**64."""
        family = HashFamily(4, lambda b: 10, lambda b: 3)
        assert [family.hash(b"x", i) for i in range(1, 5)] == [13, 16, 19, 22]

    def test_slot_wraparound(self):
        """Slot arithmetic wraps around 64 bits."""
        family = HashFamily(2, lambda b: MASK64, lambda b: 1)
        assert family.hash(b"x", 1) == 0
        assert family.hash(b"x", 2) == 1
        np.testing.assert_array_equal(family.hash_all(b"x"), np.array([0, 1], dtype=np.uint64))

    def test_slot_bounds(self):
        """Only slots 1..k exist."""
        family = HashFamily.from_seed(4)
        with pytest.raises(IndexError):
            family.hash(b"x", 0)
        with pytest.raises(IndexError):
            family.hash(b"x", 5)

    def test_hash_all_matches_hash(self):
        """The vectorized path agrees with the per-slot path."""
        family = HashFamily.from_seed(32, seed=7)
        for data in [b"a", b"hello", b"\x00" * 8]:
            values = family.hash_all(data)
            assert values.dtype == np.uint64
            assert [int(v) for v in values] == [family.hash(data, i) for i in range(1, 33)]

    def test_single_base_hash(self):
        """With one base hash the second value is a rehash of the first."""
        h = XXHash64(5)
        family = HashFamily(8, h)
        first, second = family.base_pair(b"abc")
        assert first == h(b"abc")
        assert second == h(first.to_bytes(8, byteorder='little'))
        assert [int(v) for v in family.hash_all(b"abc")] == [family.hash(b"abc", i) for i in range(1, 9)]

    def test_deterministic(self):
        """Independently built families hash identically."""
        assert np.array_equal(HashFamily.from_seed(8).hash_all(b"x"),
                              HashFamily.from_seed(8).hash_all(b"x"))

    def test_compatibility(self):
        """Families are equivalent when k and base hashes match."""
        assert HashFamily.from_seed(8) == HashFamily.from_seed(8)
        assert HashFamily.from_seed(8) != HashFamily.from_seed(16)
        assert HashFamily.from_seed(8, seed=1) != HashFamily.from_seed(8, seed=2)
        assert hash(HashFamily.from_seed(8)) == hash(HashFamily.from_seed(8))

    def test_base_hash_reduced_to_64_bits(self):
        """Base hash outputs are reduced modulo 2**64."""
        family = HashFamily(1, lambda b: -1)
        assert family.base_hash(b"x") == MASK64

    def test_hash_all_into_buffer(self):
        """hash_all writes into a caller-supplied buffer without allocating a result."""
        family = HashFamily.from_seed(16, seed=3)
        buf = np.empty(16, dtype=np.uint64)
        result = family.hash_all(b"abc", out=buf)
        assert result is buf
        np.testing.assert_array_equal(buf, family.hash_all(b"abc"))
