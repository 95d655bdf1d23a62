"""
Shared constants and run options for SeqDist.

© SeqDist
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# =========================
# Alphabet constants
# =========================

# alignment gap characters; columns gapped in both sequences are skipped
GAP_CHARS = frozenset("-.")

# characters tolerated by test_sequences_equal when no ignore set is given
DEFAULT_IGNORE = frozenset("N-.?")

# cost table value marking a gap pair for indel collapsing
GAP_COST = -1.0

BACKENDS = ("serial", "thread", "process")


# =========================
# Matrix build options
# =========================

@dataclass(frozen=True)
class MatrixOptions:
    """
    Options for the pairwise matrix builders.

    Attributes:
        backend: 'serial' | 'thread' | 'process'
        n_jobs: worker count for the pooled backends. None/0 = all CPUs.
        chunksize: rows per submitted task. None = spread rows evenly,
                   about four tasks per worker.
    """
    backend: str = "serial"
    n_jobs: Optional[int] = None
    chunksize: Optional[int] = None

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(
                f"backend must be one of {' | '.join(BACKENDS)}, got {self.backend!r}"
            )
        if self.chunksize is not None and self.chunksize < 1:
            raise ValueError(f"chunksize must be >= 1, got {self.chunksize}")


DEFAULT_MATRIX_OPTIONS = MatrixOptions()
