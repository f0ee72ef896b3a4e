from __future__ import annotations
import numpy as np # type: ignore
from typing import Iterable

from minsketch.lib.abstractsketch import AbstractSketch
from minsketch.lib.estimators import cardinality_from_minima, minwise_similarity
from minsketch.lib.hashfamily import HashFamily
from minsketch.lib.signature import SENTINEL, empty_signature, as_signature

class MinWise(AbstractSketch):
    def __init__(self, family: HashFamily, debug: bool = False):
        """Initialize an empty MinWise sketch.

        Slot i holds the minimum of virtual hash function i over every
        element added so far.

        Args:
            family: Hash family shared with every sketch this one is compared to
            debug: Whether to print debug information
        """
        super().__init__()
        self.family = family
        self.debug = debug
        self.min_hashes = empty_signature(family.k)
        self._scratch = np.empty(family.k, dtype=np.uint64)
        if self.debug:
            print(f"\nDebug MinWise init:")
            print(f"Number of hashes: {family.k}")
            print(f"Sentinel value: {SENTINEL}")

    @classmethod
    def from_signature(cls, values: Iterable[int], family: HashFamily,
                       debug: bool = False) -> 'MinWise':
        """Restore a sketch from an exported signature to resume streaming.

        Args:
            values: Signature previously returned by ``signature()``
            family: Hash family that produced the signature
            debug: Whether to print debug information

        Returns:
            Sketch whose signature is a copy of values
        """
        sketch = cls(family, debug=debug)
        sketch.min_hashes = as_signature(values, family.k)
        return sketch

    def add(self, data: bytes) -> None:
        """Add the bytes of one element to the sketch."""
        self.family.hash_all(data, out=self._scratch)
        np.minimum(self.min_hashes, self._scratch, out=self.min_hashes)

    def merge(self, other: 'MinWise') -> None:
        """Merge another MinWise sketch into this one.

        The result equals the signature of the union of both element streams.
        Nothing is modified if the sketches are incompatible.
        """
        self._check_compatible(other)
        np.minimum(self.min_hashes, other.min_hashes, out=self.min_hashes)

    def estimate_cardinality(self) -> int:
        """Estimate cardinality from the k minima."""
        return cardinality_from_minima(self.min_hashes)

    def estimate_jaccard(self, other: 'MinWise') -> float:
        """Estimate Jaccard similarity as the fraction of matching slots."""
        self._check_compatible(other)
        similarity = minwise_similarity(self.min_hashes, other.min_hashes)
        if self.debug:
            print(f"\nJaccard estimation:")
            print(f"Matching slots: {int(round(similarity * self.num_hashes))} of {self.num_hashes}")
            print(f"First few hashes sketch1: {self.min_hashes[:5]}")
            print(f"First few hashes sketch2: {other.min_hashes[:5]}")
        return similarity

    def copy(self) -> 'MinWise':
        """Return an independent sketch with the same family and signature."""
        return MinWise.from_signature(self.min_hashes, self.family, debug=self.debug)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MinWise):
            return NotImplemented
        return (self.family.compatible_with(other.family)
                and np.array_equal(self.min_hashes, other.min_hashes))

    __hash__ = None # type: ignore

    def __repr__(self) -> str:
        return f"MinWise(num_hashes={self.num_hashes}, empty={self.is_empty()})"
