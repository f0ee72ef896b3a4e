"""
Signature buffers shared by all sketch variants.

A signature is a fixed-length numpy uint64 array. Slot i of every signature
built from the same hash family corresponds to the same virtual hash
function, so index order is meaningful.
"""
from __future__ import annotations
import numpy as np # type: ignore
from typing import Iterable, Optional

from minsketch.lib.errors import ConfigurationError

# Marks a slot in which no element has been observed yet
SENTINEL = (1 << 64) - 1

# Size of the hash value domain, used to normalize minima into [0, 1)
HASH_RANGE = float(1 << 64)


def empty_signature(k: int) -> np.ndarray:
    """Return a signature of length k with every slot unset."""
    if k <= 0:
        raise ConfigurationError(f"Signature length must be positive, got {k}")
    return np.full(k, SENTINEL, dtype=np.uint64)


def as_signature(values: Iterable[int], k: Optional[int] = None) -> np.ndarray:
    """Copy externally supplied values into a signature buffer.

    Values are trusted to be plausible minima; only their range and count
    are checked.

    Args:
        values: Ordered unsigned 64-bit values
        k: Required signature length, if known

    Returns:
        New uint64 array holding the values

    Raises:
        ConfigurationError: If a value is out of range or the length differs from k
    """
    checked = []
    for value in values:
        value = int(value)
        if not 0 <= value <= SENTINEL:
            raise ConfigurationError(f"Signature value {value} is not an unsigned 64-bit integer")
        checked.append(value)
    if k is not None and len(checked) != k:
        raise ConfigurationError(f"Expected a signature of length {k}, got {len(checked)}")
    if not checked:
        raise ConfigurationError("Signature must not be empty")
    return np.array(checked, dtype=np.uint64)


def is_empty_signature(signature: np.ndarray) -> bool:
    """True when no slot has been set."""
    return bool(np.all(signature == np.uint64(SENTINEL)))


def filled_values(signature: np.ndarray) -> np.ndarray:
    """Return the slots that hold an observed value."""
    return signature[signature != np.uint64(SENTINEL)]
