"""
Sequence Comparison Module
Cost tables, gap-aware pairwise distance and equality of aligned sequences
"""

from .alphabet import CostTable
from .pairwise import (
    sequence_distance,
    test_sequences_equal,
    valid_chars,
)

__all__ = [
    "CostTable",
    "sequence_distance",
    "test_sequences_equal",
    "valid_chars",
]
