from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a sketch or hash family is constructed with invalid parameters."""


class IncompatibleSketchError(ValueError):
    """Raised when two signatures cannot be merged or compared.

    Signatures are only comparable when they have the same length and were
    produced by equivalent hash families.
    """


class NumericTextFallbackWarning(UserWarning):
    """Numeric text could not be parsed and was hashed as raw text instead."""
