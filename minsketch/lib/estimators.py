"""
Similarity, intersection and cardinality estimators over raw signatures.

These are pure functions of their arguments; the sketch classes delegate to
them and never cache the results.
"""
from __future__ import annotations
import math
import numpy as np # type: ignore
from typing import Sequence, Union

from minsketch.lib.errors import IncompatibleSketchError
from minsketch.lib.signature import SENTINEL, HASH_RANGE, filled_values

SignatureLike = Union[np.ndarray, Sequence[int]]

# Largest float strictly below 1.0, caps normalized minima so log1p stays finite
_MAX_NORMALIZED = float(np.nextafter(1.0, 0.0))


def _as_array(signature: SignatureLike) -> np.ndarray:
    return np.asarray(signature, dtype=np.uint64)


def _check_pair(sig_a: np.ndarray, sig_b: np.ndarray) -> int:
    if len(sig_a) != len(sig_b):
        raise IncompatibleSketchError(
            f"Cannot compare signatures of different lengths ({len(sig_a)} and {len(sig_b)})")
    if len(sig_a) == 0:
        raise ValueError("Similarity of empty signatures is undefined")
    return len(sig_a)


def minwise_similarity(sig_a: SignatureLike, sig_b: SignatureLike) -> float:
    """Estimate the Jaccard index from two MinWise signatures.

    The fraction of slots holding the same minimum is an unbiased estimate
    of |A & B| / |A | B|. Slots still holding the sentinel never count as a
    match, so two empty signatures have similarity 0.

    Note:
        Both signatures must come from equivalent hash families (same k and
        base hashes). Raw signatures carry no family id, so this is not
        checked here; MinWise.estimate_jaccard checks it.

    Raises:
        IncompatibleSketchError: If the signatures differ in length
        ValueError: If the signatures are empty
    """
    sig_a = _as_array(sig_a)
    sig_b = _as_array(sig_b)
    k = _check_pair(sig_a, sig_b)
    matches = np.count_nonzero((sig_a == sig_b) & (sig_a != np.uint64(SENTINEL)))
    return float(matches) / k


def bottomk_similarity(sig_a: SignatureLike, sig_b: SignatureLike) -> float:
    """Estimate the Jaccard index from two Bottom-K signatures.

    Takes the k smallest values of the union of both signatures and returns
    the fraction of them retained by both. Once the union holds at least k
    distinct values the denominator is k; below that it is the union size,
    which makes the estimate exact for small sets.
    """
    sig_a = _as_array(sig_a)
    sig_b = _as_array(sig_b)
    k = _check_pair(sig_a, sig_b)
    values_a = filled_values(sig_a)
    values_b = filled_values(sig_b)
    union_bottom = np.union1d(values_a, values_b)[:k]
    if len(union_bottom) == 0:
        return 0.0
    shared = np.intersect1d(values_a, values_b)
    matches = np.count_nonzero(np.isin(union_bottom, shared))
    return float(matches) / len(union_bottom)


def intersection_size(similarity: float, size_a: float, size_b: float) -> int:
    """Estimate |A & B| from the Jaccard index and the sizes of A and B.

    With n, m, i, u the sizes of A, B, A & B and A | B, J = i / u and
    u = n + m - i, so 1/J = (n + m)/i - 1 and i = (n + m) / (1/J + 1).

    A similarity of 0 yields 0 even for non-empty sets, which biases very
    small intersections towards zero.

    Raises:
        ValueError: If similarity is outside [0, 1] or a size is negative
    """
    if not 0.0 <= similarity <= 1.0:
        raise ValueError(f"Similarity must be in [0, 1], got {similarity}")
    if size_a < 0 or size_b < 0:
        raise ValueError("Set sizes must be non-negative")
    if similarity == 0:
        return 0
    return int(math.floor((size_a + size_b) / ((1.0 / similarity) + 1)))


def cardinality_from_minima(signature: SignatureLike) -> int:
    """Estimate the number of distinct elements behind a MinWise signature.

    Each normalized minimum u of n uniform hashes gives -ln(1 - u) ~ Exp(n),
    so (k - 1) / sum(-ln(1 - u)) is unbiased for n. A single slot uses 1 as
    the numerator. The estimate is rounded to the nearest integer and is at
    least 1 whenever any slot is filled.
    """
    signature = _as_array(signature)
    if len(signature) == 0 or np.all(signature == np.uint64(SENTINEL)):
        return 0
    normalized = np.minimum(signature.astype(np.float64) / HASH_RANGE, _MAX_NORMALIZED)
    total = float(np.sum(-np.log1p(-normalized)))
    if total <= 0.0:
        return len(signature)
    return max(int(round(max(len(signature) - 1, 1) / total)), 1)


def cardinality_from_bottomk(signature: SignatureLike) -> int:
    """Estimate the number of distinct elements behind a Bottom-K signature.

    While fewer than k slots are filled the count is exact. Otherwise the
    k-th smallest normalized value u_k gives the estimate (k - 1) / u_k.
    """
    signature = _as_array(signature)
    values = filled_values(signature)
    k = len(signature)
    if len(values) < k:
        return len(values)
    kth = float(values.max()) / HASH_RANGE
    if kth <= 0.0:
        return k
    return max(int(round(max(k - 1, 1) / kth)), 1)
