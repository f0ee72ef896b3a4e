from .abstractsketch import AbstractSketch, similarity
from .minhash import MinWise
from .bottomk import BottomK
from .hashfamily import HashFamily, XXHash64
from .elements import (ElementKind, to_bytes, bytes_to_bytes, text_to_bytes,
                       numeric_text_to_bytes, uint64_to_bytes, int64_to_bytes)
from .estimators import (minwise_similarity, bottomk_similarity, intersection_size,
                         cardinality_from_minima, cardinality_from_bottomk)
from .signature import SENTINEL, empty_signature, as_signature

__all__ = [
    'AbstractSketch',
    'similarity',
    'MinWise',
    'BottomK',
    'HashFamily',
    'XXHash64',
    'ElementKind',
    'to_bytes',
    'bytes_to_bytes',
    'text_to_bytes',
    'numeric_text_to_bytes',
    'uint64_to_bytes',
    'int64_to_bytes',
    'minwise_similarity',
    'bottomk_similarity',
    'intersection_size',
    'cardinality_from_minima',
    'cardinality_from_bottomk',
    'SENTINEL',
    'empty_signature',
    'as_signature'
]
