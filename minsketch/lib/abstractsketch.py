from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List
import numpy as np # type: ignore

from minsketch.lib.elements import (ElementKind, to_bytes, text_to_bytes,
                                    int64_to_bytes)
from minsketch.lib.errors import IncompatibleSketchError
from minsketch.lib.estimators import intersection_size
from minsketch.lib.hashfamily import HashFamily
from minsketch.lib.signature import is_empty_signature

class AbstractSketch(ABC):
    """Base class for all sketch types.

    A sketch owns one signature buffer (``min_hashes``) and shares a
    HashFamily with every sketch it must stay comparable with. Only ``add``
    and ``merge`` mutate the signature; estimates are recomputed on demand.
    Instances are not synchronized: a single writer at a time, and no reads
    concurrent with a write.
    """

    family: HashFamily
    min_hashes: np.ndarray
    debug: bool

    @abstractmethod
    def add(self, data: bytes) -> None:
        """Add the bytes of one element to the sketch."""
        pass

    @abstractmethod
    def merge(self, other: 'AbstractSketch') -> None:
        """Merge another sketch of the same variant into this one, in place.

        Raises:
            TypeError: If other is a different sketch variant
            IncompatibleSketchError: If the signatures are not comparable
        """
        pass

    @abstractmethod
    def estimate_cardinality(self) -> int:
        """Estimate the number of distinct elements added."""
        pass

    @abstractmethod
    def estimate_jaccard(self, other: 'AbstractSketch') -> float:
        """Estimate Jaccard similarity with another sketch of the same variant.

        Returns:
            Similarity in [0, 1]
        """
        pass

    @property
    def num_hashes(self) -> int:
        return self.family.k

    def signature(self) -> List[int]:
        """Return the signature as plain integers, safe to persist."""
        return [int(v) for v in self.min_hashes]

    def is_empty(self) -> bool:
        """True when nothing has been added or merged in."""
        return is_empty_signature(self.min_hashes)

    def add_element(self, value: Any, kind: ElementKind) -> None:
        """Convert value according to kind and add it."""
        self.add(to_bytes(value, kind))

    def add_string(self, s: str) -> None:
        """Add a string to the sketch."""
        self.add(text_to_bytes(s))

    def add_int(self, value: int) -> None:
        """Add a signed 64-bit integer to the sketch."""
        self.add(int64_to_bytes(value))

    def add_batch(self, values: Iterable[Any], kind: ElementKind = ElementKind.BYTES) -> None:
        """Add multiple elements of the same kind to the sketch.

        Args:
            values: Elements to add
            kind: How each element is converted to bytes
        """
        for value in values:
            self.add(to_bytes(value, kind))

    def similarity_values(self, other: 'AbstractSketch') -> Dict[str, float]:
        """Estimate similarity with another sketch.

        Returns:
            Dictionary with the Jaccard estimate, the implied intersection
            size and both cardinality estimates
        """
        jaccard = self.estimate_jaccard(other)
        card_a = self.estimate_cardinality()
        card_b = other.estimate_cardinality()
        return {
            'jaccard': jaccard,
            'intersection': float(intersection_size(jaccard, card_a, card_b)),
            'cardinality_a': float(card_a),
            'cardinality_b': float(card_b)
        }

    def _check_compatible(self, other: 'AbstractSketch') -> None:
        """Validate that other can be merged into or compared with this sketch."""
        if type(other) is not type(self):
            raise TypeError(f"Can only combine {type(self).__name__} with another "
                            f"{type(self).__name__}, got {type(other).__name__}")
        if len(self.min_hashes) != len(other.min_hashes):
            raise IncompatibleSketchError(
                f"Signature lengths differ ({len(self.min_hashes)} and {len(other.min_hashes)})")
        if not self.family.compatible_with(other.family):
            raise IncompatibleSketchError("Sketches were built with different hash families")


def similarity(sketch_a: AbstractSketch, sketch_b: AbstractSketch) -> float:
    """Estimate the Jaccard similarity of two sketches using sketch_a's estimator."""
    return sketch_a.estimate_jaccard(sketch_b)
