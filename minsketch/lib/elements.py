"""
Conversion of input values into the byte sequences fed to a hash family.

Each accepted input kind has its own conversion function. Callers either
call the function for the kind they hold or pass the kind explicitly to
``to_bytes``; the value's runtime type is never inspected to pick a path.

Integers are encoded as 8 bytes, little-endian, so that hashes are stable
across calls and across processes sharing the convention.
"""
from __future__ import annotations
import warnings
from enum import Enum
from typing import Union

from minsketch.lib.errors import NumericTextFallbackWarning

UINT64_MAX = (1 << 64) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

BytesLike = Union[bytes, bytearray, memoryview]

# Prefix of numeric text that failed to parse; 0xFF never occurs in UTF-8
FALLBACK_TAG = b"\xff"


class ElementKind(Enum):
    BYTES = "bytes"
    TEXT = "text"
    NUMERIC_TEXT = "numeric_text"
    UINT64 = "uint64"
    INT64 = "int64"


def bytes_to_bytes(value: BytesLike) -> bytes:
    """Return an immutable copy of a raw byte sequence."""
    return bytes(value)


def text_to_bytes(value: str) -> bytes:
    """Encode text as UTF-8."""
    return value.encode("utf-8")


def uint64_to_bytes(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes.

    Raises:
        OverflowError: If value is outside [0, 2**64 - 1]
    """
    value = int(value)
    if not 0 <= value <= UINT64_MAX:
        raise OverflowError(f"{value} does not fit in an unsigned 64-bit integer")
    return value.to_bytes(8, byteorder='little')


def int64_to_bytes(value: int) -> bytes:
    """Encode a signed 64-bit integer as 8 little-endian two's complement bytes.

    Non-negative values produce the same bytes as ``uint64_to_bytes``.

    Raises:
        OverflowError: If value is outside [-2**63, 2**63 - 1]
    """
    value = int(value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise OverflowError(f"{value} does not fit in a signed 64-bit integer")
    return value.to_bytes(8, byteorder='little', signed=True)


def numeric_text_to_bytes(value: str) -> bytes:
    """Encode text holding a decimal unsigned integer as that integer.

    Only ASCII decimal digits are accepted, leading zeros included, so "07"
    and "7" encode identically. Anything else (signs, whitespace, prefixes,
    values above 2**64 - 1) falls back to a tagged text encoding and emits
    a NumericTextFallbackWarning.

    The fallback is the tag byte 0xFF, the UTF-8 byte length as 8
    little-endian bytes, then the UTF-8 text. It is always at least 9 bytes
    long, so it never equals the 8-byte encoding of a parsed integer.
    It also differs from ``text_to_bytes`` of the same text.
    """
    if value and value.isascii() and value.isdigit():
        number = int(value)
        if number <= UINT64_MAX:
            return uint64_to_bytes(number)
    warnings.warn(
        f"Could not parse {value!r} as an unsigned 64-bit integer, hashing it as text",
        NumericTextFallbackWarning,
        stacklevel=2
    )
    encoded = text_to_bytes(value)
    return FALLBACK_TAG + len(encoded).to_bytes(8, byteorder='little') + encoded


_CONVERTERS = {
    ElementKind.BYTES: bytes_to_bytes,
    ElementKind.TEXT: text_to_bytes,
    ElementKind.NUMERIC_TEXT: numeric_text_to_bytes,
    ElementKind.UINT64: uint64_to_bytes,
    ElementKind.INT64: int64_to_bytes,
}


def to_bytes(value, kind: ElementKind) -> bytes:
    """Convert value to bytes using the conversion declared by kind."""
    try:
        converter = _CONVERTERS[kind]
    except KeyError:
        raise ValueError(f"Unsupported element kind: {kind!r}") from None
    return converter(value)
