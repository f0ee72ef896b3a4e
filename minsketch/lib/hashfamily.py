"""
Derivation of k virtual hash functions from one or two base hashes.

Slot i (1-based) of an element x hashes to

    h1(x) + i * h2(x)  (mod 2**64)

so each element costs two base hash evaluations regardless of k.
"""
from __future__ import annotations
import numpy as np # type: ignore
import xxhash # type: ignore
from typing import Callable, Optional, Tuple

from minsketch.lib.errors import ConfigurationError

MASK64 = (1 << 64) - 1

BaseHash = Callable[[bytes], int]


class XXHash64:
    """Seeded 64-bit xxHash usable as a base hash.

    Instances with the same seed compare equal, which lets hash families
    built independently be recognized as equivalent.
    """

    __slots__ = ('seed',)

    def __init__(self, seed: int = 0):
        self.seed = seed

    def __call__(self, data: bytes) -> int:
        return xxhash.xxh64_intdigest(data, seed=self.seed)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XXHash64):
            return NotImplemented
        return self.seed == other.seed

    def __hash__(self) -> int:
        return hash((XXHash64, self.seed))

    def __repr__(self) -> str:
        return f"XXHash64(seed={self.seed})"


class HashFamily:
    def __init__(self, k: int, h1: Optional[BaseHash], h2: Optional[BaseHash] = None):
        """Initialize a family of k virtual hash functions.

        Args:
            k: Number of virtual hash functions (signature length)
            h1: Base hash mapping bytes to a 64-bit value
            h2: Optional second base hash. When omitted the second value is
                h1 applied to the little-endian bytes of the first value.

        Raises:
            ConfigurationError: If k is not positive or a base hash is not callable
        """
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k <= 0:
            raise ConfigurationError(f"Number of hash functions must be a positive integer, got {k!r}")
        if h1 is None or not callable(h1):
            raise ConfigurationError("A base hash function is required")
        if h2 is not None and not callable(h2):
            raise ConfigurationError("Second base hash function must be callable")

        self._k = int(k)
        self._h1 = h1
        self._h2 = h2
        self._multipliers = np.arange(1, self._k + 1, dtype=np.uint64)
        self._multipliers.setflags(write=False)

    @classmethod
    def from_seed(cls, k: int, seed: int = 42) -> 'HashFamily':
        """Build a family from two xxHash64 base hashes seeded with seed and seed + 1."""
        return cls(k, XXHash64(seed), XXHash64(seed + 1))

    @property
    def k(self) -> int:
        return self._k

    @property
    def h1(self) -> BaseHash:
        return self._h1

    @property
    def h2(self) -> Optional[BaseHash]:
        return self._h2

    def base_hash(self, data: bytes) -> int:
        """Hash data with the first base hash."""
        return self._h1(data) & MASK64

    def base_pair(self, data: bytes) -> Tuple[int, int]:
        """Return the two base values (h1, h2) the slot functions combine."""
        first = self._h1(data) & MASK64
        if self._h2 is None:
            second = self._h1(first.to_bytes(8, byteorder='little')) & MASK64
        else:
            second = self._h2(data) & MASK64
        return first, second

    def hash(self, data: bytes, slot: int) -> int:
        """Hash data with the virtual hash function of a single slot.

        Args:
            data: Element bytes
            slot: Slot index in 1..k

        Returns:
            64-bit hash value
        """
        if not 1 <= slot <= self._k:
            raise IndexError(f"Slot {slot} is outside 1..{self._k}")
        first, second = self.base_pair(data)
        return (first + slot * second) & MASK64

    def hash_all(self, data: bytes, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Hash data with every virtual hash function.

        Element i - 1 of the result equals ``hash(data, i)``.

        Args:
            data: Element bytes
            out: Optional uint64 array of length k to write into instead of
                allocating. The family keeps no buffer of its own, so callers
                own the scratch space and sharing stays thread-safe.

        Returns:
            The uint64 hash values (out, when given)
        """
        first, second = self.base_pair(data)
        if out is None:
            out = np.empty(self._k, dtype=np.uint64)
        # uint64 array arithmetic wraps modulo 2**64
        np.multiply(self._multipliers, np.uint64(second), out=out)
        np.add(out, np.uint64(first), out=out)
        return out

    def compatible_with(self, other: 'HashFamily') -> bool:
        """True when signatures from both families may be merged or compared."""
        if self is other:
            return True
        return (isinstance(other, HashFamily)
                and self._k == other._k
                and self._h1 == other._h1
                and self._h2 == other._h2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashFamily):
            return NotImplemented
        return self.compatible_with(other)

    def __hash__(self) -> int:
        return hash((self._k, self._h1, self._h2))

    def __repr__(self) -> str:
        return f"HashFamily(k={self._k}, h1={self._h1!r}, h2={self._h2!r})"
