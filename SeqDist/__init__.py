"""
SeqDist
Gap-aware distances between aligned DNA / amino-acid sequences
"""

from .config import (
    DEFAULT_IGNORE,
    DEFAULT_MATRIX_OPTIONS,
    GAP_CHARS,
    GAP_COST,
    MatrixOptions,
)
from .errors import LengthMismatch, SeqDistError, UnknownSymbol
from .matrices import (
    LabeledMatrix,
    build_distance_matrix,
    build_distance_matrix_async,
    build_equality_matrix,
    build_equality_matrix_async,
)
from .seq_compare import (
    CostTable,
    sequence_distance,
    test_sequences_equal,
    valid_chars,
)

__version__ = "0.1.0"

__all__ = [
    "CostTable",
    "DEFAULT_IGNORE",
    "DEFAULT_MATRIX_OPTIONS",
    "GAP_CHARS",
    "GAP_COST",
    "LabeledMatrix",
    "LengthMismatch",
    "MatrixOptions",
    "SeqDistError",
    "UnknownSymbol",
    "build_distance_matrix",
    "build_distance_matrix_async",
    "build_equality_matrix",
    "build_equality_matrix_async",
    "sequence_distance",
    "test_sequences_equal",
    "valid_chars",
]
