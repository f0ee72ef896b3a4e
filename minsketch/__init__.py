"""
minsketch - Python Library for Jaccard Similarity and Cardinality Sketches
"""

from minsketch.lib.abstractsketch import AbstractSketch, similarity
from minsketch.lib.minhash import MinWise
from minsketch.lib.bottomk import BottomK
from minsketch.lib.hashfamily import HashFamily, XXHash64
from minsketch.lib.elements import ElementKind, to_bytes
from minsketch.lib.estimators import (minwise_similarity, bottomk_similarity,
                                      intersection_size)
from minsketch.lib.signature import SENTINEL
from minsketch.lib.errors import (ConfigurationError, IncompatibleSketchError,
                                  NumericTextFallbackWarning)

__version__ = '0.1.0'

__all__ = [
    'AbstractSketch',
    'similarity',
    'MinWise',
    'BottomK',
    'HashFamily',
    'XXHash64',
    'ElementKind',
    'to_bytes',
    'minwise_similarity',
    'bottomk_similarity',
    'intersection_size',
    'SENTINEL',
    'ConfigurationError',
    'IncompatibleSketchError',
    'NumericTextFallbackWarning'
]
