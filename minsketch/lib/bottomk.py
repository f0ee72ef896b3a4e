from __future__ import annotations
import numpy as np # type: ignore
from typing import Iterable

from minsketch.lib.abstractsketch import AbstractSketch
from minsketch.lib.estimators import cardinality_from_bottomk, bottomk_similarity
from minsketch.lib.hashfamily import HashFamily
from minsketch.lib.signature import (SENTINEL, empty_signature, as_signature,
                                     filled_values)

class BottomK(AbstractSketch):
    def __init__(self, family: HashFamily, debug: bool = False):
        """Initialize an empty Bottom-K sketch.

        Keeps the k smallest distinct values of the family's first base hash,
        in ascending order, with unused slots holding the sentinel.

        Args:
            family: Hash family shared with every sketch this one is compared to;
                its k is the number of retained values
            debug: Whether to print debug information
        """
        super().__init__()
        self.family = family
        self.debug = debug
        self.min_hashes = empty_signature(family.k)
        if self.debug:
            print(f"\nDebug BottomK init:")
            print(f"Retained values: {family.k}")

    @classmethod
    def from_signature(cls, values: Iterable[int], family: HashFamily,
                       debug: bool = False) -> 'BottomK':
        """Restore a sketch from an exported signature to resume streaming.

        The values are sorted on restore; duplicates are not checked for.
        """
        sketch = cls(family, debug=debug)
        sketch.min_hashes = np.sort(as_signature(values, family.k))
        return sketch

    def add(self, data: bytes) -> None:
        """Add the bytes of one element to the sketch."""
        value = np.uint64(self.family.base_hash(data))
        if value >= self.min_hashes[-1]:
            return
        pos = int(np.searchsorted(self.min_hashes, value))
        if self.min_hashes[pos] == value:
            return
        self.min_hashes[pos + 1:] = self.min_hashes[pos:-1].copy()
        self.min_hashes[pos] = value

    def merge(self, other: 'BottomK') -> None:
        """Merge another BottomK sketch into this one.

        Keeps the k smallest distinct values of both signatures, which is the
        signature of the union of both element streams.
        """
        self._check_compatible(other)
        combined = np.union1d(filled_values(self.min_hashes), filled_values(other.min_hashes))
        combined = combined[:self.num_hashes]
        merged = empty_signature(self.num_hashes)
        merged[:len(combined)] = combined
        self.min_hashes[:] = merged

    def estimate_cardinality(self) -> int:
        """Estimate cardinality from the k-th smallest value, exact below k elements."""
        return cardinality_from_bottomk(self.min_hashes)

    def estimate_jaccard(self, other: 'BottomK') -> float:
        """Estimate Jaccard similarity from the bottom-k of the union."""
        self._check_compatible(other)
        return bottomk_similarity(self.min_hashes, other.min_hashes)

    def copy(self) -> 'BottomK':
        """Return an independent sketch with the same family and signature."""
        return BottomK.from_signature(self.min_hashes, self.family, debug=self.debug)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BottomK):
            return NotImplemented
        return (self.family.compatible_with(other.family)
                and np.array_equal(self.min_hashes, other.min_hashes))

    __hash__ = None # type: ignore

    def __repr__(self) -> str:
        filled = len(self.min_hashes) - int(np.count_nonzero(self.min_hashes == np.uint64(SENTINEL)))
        return f"BottomK(num_hashes={self.num_hashes}, filled={filled})"
