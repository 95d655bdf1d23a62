"""
Pairwise comparison of aligned sequences.

- valid_chars          : columns that are not gapped in both sequences
- sequence_distance    : cost-table distance, contiguous gap runs = 1 indel
- test_sequences_equal : equality with ignorable characters (N, gaps, ?)

All inputs are pre-aligned strings; nothing here aligns sequences.

© SeqDist
"""
from __future__ import annotations

import enum
from typing import FrozenSet, Iterable, List, Optional

from ..config import DEFAULT_IGNORE, GAP_CHARS
from ..errors import LengthMismatch
from .alphabet import CostTable


class _RunState(enum.Enum):
    """Position of the scanner relative to a run of gap-cost columns."""
    OUTSIDE = 0
    INSIDE = 1


def valid_chars(seq1: str, seq2: str) -> List[int]:
    """
    Indices of the columns where at least one sequence has a non-gap character.

    Columns gapped in both sequences carry no information and are dropped.

    Example:
        >>> valid_chars("ATC-C.T", "AT--.TT")
        [0, 1, 2, 4, 5, 6]
    """
    if len(seq1) != len(seq2):
        raise LengthMismatch(len(seq1), len(seq2))
    return [i for i, (a, b) in enumerate(zip(seq1, seq2))
            if a not in GAP_CHARS or b not in GAP_CHARS]


def sequence_distance(seq1: str, seq2: str, cost_table: CostTable) -> float:
    """
    Distance between two aligned sequences.

    Parameters
    ----------
    seq1, seq2 : str
        Aligned sequences of equal length. Characters of seq1 are looked up
        in the table rows, characters of seq2 in the columns.
    cost_table : CostTable
        Character costs. Pairs with cost GAP_COST (-1) are gap pairs: a run of
        them, uninterrupted by any non-gap pair, counts as a single indel of
        distance 1 however long it is. Without any -1 entry the result is
        the weighted Hamming distance.

    Returns
    -------
    float
        Sum of positive costs plus the number of indel runs.

    Examples
    --------
    With a 0/1 DNA table whose gap entries are -1:

    >>> sequence_distance("ATGGC", "ATGGG", table)
    1.0
    >>> sequence_distance("ATG-C", "AT--C", table)   # overlapping gaps, 1 run
    1.0
    >>> sequence_distance("-TGGC", "AT--C", table)   # two separate runs
    2.0
    """
    mismatch_sum = 0.0
    indels = 0
    state = _RunState.OUTSIDE

    for i in valid_chars(seq1, seq2):
        cost, gap = cost_table.lookup(seq1[i], seq2[i])
        if gap:
            if state is _RunState.OUTSIDE:
                indels += 1
                state = _RunState.INSIDE
            continue
        state = _RunState.OUTSIDE
        if cost > 0:
            mismatch_sum += cost

    return mismatch_sum + indels


def test_sequences_equal(seq1: str, seq2: str,
                         ignore: Optional[Iterable[str]] = None) -> bool:
    """
    Test two aligned sequences for equality.

    Args:
        seq1, seq2: sequences to compare.
        ignore: characters that match anything. None or empty uses
                DEFAULT_IGNORE ('N', '-', '.', '?'). A string is read as a
                set of characters; a multi-character entry in a list
                raises ValueError.

    Returns:
        True if every differing column has an ignorable character on at
        least one side. Sequences of unequal length are never equal; this is
        a result, not an error.

    Example:
        >>> test_sequences_equal("ATG-C", "AT--C")
        True
        >>> test_sequences_equal("AT--T", "ATGGC", ignore="N")
        False
    """
    ignore_set = _ignore_set(ignore)
    if len(seq1) != len(seq2):
        return False

    for a, b in zip(seq1, seq2):
        if a != b and a not in ignore_set and b not in ignore_set:
            return False
    return True


def _ignore_set(ignore: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Validated ignore characters; None or empty gives DEFAULT_IGNORE."""
    chars = frozenset(ignore) if ignore else frozenset()
    for ch in chars:
        if not isinstance(ch, str) or len(ch) != 1:
            raise ValueError(f"ignore entries must be single characters, got: {ch!r}")
    return chars or DEFAULT_IGNORE
