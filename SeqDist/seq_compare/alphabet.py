"""
Character cost table used by the sequence distance.

A CostTable wraps a numeric matrix whose rows and columns are labelled by
single characters. Entries are substitution costs: 0 = match, > 0 = mismatch
of that size, GAP_COST (-1) = gap pair, collapsed into indel events by
``sequence_distance``.

© SeqDist
"""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..config import GAP_COST
from ..errors import UnknownSymbol


def _index_labels(labels: Sequence[str], axis: str) -> Dict[str, int]:
    index: Dict[str, int] = {}
    for i, lab in enumerate(labels):
        if not isinstance(lab, str) or len(lab) != 1:
            raise ValueError(f"{axis} label must be a single character, got: {lab!r}")
        if lab in index:
            raise ValueError(f"Duplicate {axis} label: {lab!r}")
        index[lab] = i
    return index


class CostTable:
    """
    Square character cost matrix with row/column labels.

    Parameters
    ----------
    values : array-like, shape (n_rows, n_cols)
        Costs. Row i belongs to row_labels[i], column j to col_labels[j].
    row_labels : sequence of str
        Characters of the first sequence, one per row.
    col_labels : sequence of str, optional
        Characters of the second sequence. Defaults to row_labels.

    The table is read-only once built; it can be shared between threads and
    pickled into worker processes.
    """

    def __init__(self,
                 values,
                 row_labels: Sequence[str],
                 col_labels: Optional[Sequence[str]] = None):
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Cost table must be 2-D, got {arr.ndim} dimension(s)")

        row_labels = tuple(row_labels)
        col_labels = row_labels if col_labels is None else tuple(col_labels)
        if arr.shape != (len(row_labels), len(col_labels)):
            raise ValueError(
                f"Cost table shape {arr.shape} does not match labels "
                f"({len(row_labels)} rows, {len(col_labels)} columns)"
            )

        self._row_index = _index_labels(row_labels, "row")
        self._col_index = _index_labels(col_labels, "column")
        self._row_labels = row_labels
        self._col_labels = col_labels

        arr.setflags(write=False)
        self._values = arr
        # nested lists give plain-float lookups without numpy scalar overhead
        self._rows = arr.tolist()
        self._gap_cells: FrozenSet[Tuple[int, int]] = frozenset(
            (int(r), int(c)) for r, c in zip(*np.nonzero(arr == GAP_COST))
        )

    # -------------------------
    # Construction helpers
    # -------------------------
    @classmethod
    def from_pairs(cls, pairs: Mapping[Tuple[str, str], float]) -> "CostTable":
        """
        Build a table from a ``{(row_char, col_char): cost}`` dictionary.

        Labels are taken in order of first appearance. Every row/column
        combination must be present.

        Example:
            >>> table = CostTable.from_pairs({('A', 'A'): 0, ('A', 'C'): 1,
            ...                               ('C', 'A'): 1, ('C', 'C'): 0})
            >>> table.cost('A', 'C')
            1.0
        """
        rows = list(dict.fromkeys(a for a, _ in pairs))
        cols = list(dict.fromkeys(b for _, b in pairs))
        values = np.empty((len(rows), len(cols)), dtype=np.float64)
        for i, a in enumerate(rows):
            for j, b in enumerate(cols):
                try:
                    values[i, j] = pairs[(a, b)]
                except KeyError:
                    raise ValueError(f"Missing cost for pair ({a!r}, {b!r})") from None
        return cls(values, rows, cols)

    # -------------------------
    # Lookups
    # -------------------------
    def _resolve(self, symbol_a: str, symbol_b: str) -> Tuple[int, int]:
        try:
            r = self._row_index[symbol_a]
        except KeyError:
            raise UnknownSymbol(symbol_a, "row") from None
        try:
            c = self._col_index[symbol_b]
        except KeyError:
            raise UnknownSymbol(symbol_b, "column") from None
        return r, c

    def cost(self, symbol_a: str, symbol_b: str) -> float:
        """Cost of aligning symbol_a (row) against symbol_b (column)."""
        r, c = self._resolve(symbol_a, symbol_b)
        return self._rows[r][c]

    def is_gap(self, symbol_a: str, symbol_b: str) -> bool:
        """True if the pair carries the gap sentinel cost."""
        return self._resolve(symbol_a, symbol_b) in self._gap_cells

    def lookup(self, symbol_a: str, symbol_b: str) -> Tuple[float, bool]:
        """(cost, is_gap) with a single label resolution."""
        r, c = self._resolve(symbol_a, symbol_b)
        return self._rows[r][c], (r, c) in self._gap_cells

    # -------------------------
    # Introspection
    # -------------------------
    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def row_labels(self) -> Tuple[str, ...]:
        return self._row_labels

    @property
    def col_labels(self) -> Tuple[str, ...]:
        return self._col_labels

    @property
    def shape(self) -> Tuple[int, int]:
        return self._values.shape

    @property
    def has_gap_costs(self) -> bool:
        return bool(self._gap_cells)

    def symbols(self) -> List[str]:
        """Characters usable on both axes."""
        return [lab for lab in self._row_labels if lab in self._col_index]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._row_index and symbol in self._col_index

    def __repr__(self) -> str:
        return (f"CostTable(rows={''.join(self._row_labels)!r}, "
                f"cols={''.join(self._col_labels)!r}, gaps={self.has_gap_costs})")

    def __getstate__(self):
        return {"values": self._values.copy(),
                "row_labels": self._row_labels,
                "col_labels": self._col_labels}

    def __setstate__(self, state):
        self.__init__(state["values"], state["row_labels"], state["col_labels"])
