"""
Pairwise distance and equality matrices over a set of aligned sequences.

Features:
- build_distance_matrix : symmetric matrix of sequence_distance values
- build_equality_matrix : symmetric boolean matrix of test_sequences_equal
- Only the lower triangle is evaluated, each value is mirrored to [j, i].
- Backend (MatrixOptions.backend):
    - 'serial'  : plain loop in the calling thread
    - 'thread'  : ThreadPoolExecutor, rows split into chunks
    - 'process' : ProcessPoolExecutor, same chunking (CostTable is pickled)
- Async helpers to call from an event loop

Any error raised for a pair (LengthMismatch, UnknownSymbol) aborts the whole
build; no partial matrix is returned.

© SeqDist
"""
from __future__ import annotations

import asyncio
import functools
import logging
import os
import time
from collections.abc import Mapping
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    Union,
)

import numpy as np

from ..config import DEFAULT_MATRIX_OPTIONS, MatrixOptions
from ..seq_compare.alphabet import CostTable
from ..seq_compare.pairwise import _ignore_set, sequence_distance, test_sequences_equal

logger = logging.getLogger(__name__)

LabeledSequences = Union[Mapping[str, str], Iterable[Tuple[str, str]], Iterable[str]]
PairOp = Callable[[str, str], Any]
Cell = Tuple[int, int, Any]


# =========================
# Result container
# =========================

@dataclass(frozen=True, eq=False)
class LabeledMatrix:
    """
    Square symmetric matrix with the same labels on both axes.

    ``values`` is read-only. ``labels`` is ``None`` when the sequences were
    passed without labels; label lookups are unavailable then. The object
    unpacks like the ``(D, taxa)`` pair returned by the other distance helpers:

        >>> D, taxa = build_distance_matrix(seqs, table)
    """
    values: np.ndarray
    labels: Optional[Tuple[str, ...]]

    def __iter__(self) -> Iterator[Any]:
        yield self.values
        yield self.labels

    def __len__(self) -> int:
        return self.values.shape[0]

    def index(self, label: str) -> int:
        """Position of the first row/column carrying ``label``."""
        if self.labels is None:
            raise KeyError(f"{label!r} (matrix has no labels)")
        try:
            return self.labels.index(label)
        except ValueError:
            raise KeyError(label) from None

    def get(self, row_label: str, col_label: str) -> Any:
        return self.values[self.index(row_label), self.index(col_label)].item()

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Nested ``{row: {col: value}}``. Duplicate labels keep the last row/column."""
        if self.labels is None:
            raise ValueError("Matrix has no labels; use .values instead")
        rows = self.values.tolist()
        return {r: dict(zip(self.labels, row)) for r, row in zip(self.labels, rows)}


# =========================
# Utilities
# =========================

def _split_labeled(sequences: LabeledSequences) -> Tuple[Optional[Tuple[str, ...]], List[str]]:
    """
    Accept {label: seq} (insertion order kept), an iterable of (label, seq)
    pairs (duplicate labels allowed) or an iterable of plain sequences.

    Plain sequences give ``None`` labels. Mixing plain and labelled items, or
    an item that is neither, raises TypeError.
    """
    if isinstance(sequences, Mapping):
        return tuple(sequences.keys()), list(sequences.values())
    if isinstance(sequences, str):
        raise TypeError("Expected a collection of sequences, got a single str")

    labels: List[str] = []
    seqs: List[str] = []
    unlabelled = None
    for k, item in enumerate(sequences):
        if isinstance(item, str):
            is_plain = True
            seqs.append(item)
        elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], str):
            is_plain = False
            labels.append(item[0])
            seqs.append(item[1])
        else:
            raise TypeError(
                f"Item {k} must be a sequence string or a (label, sequence) pair, got: {item!r}"
            )
        if unlabelled is None:
            unlabelled = is_plain
        elif unlabelled != is_plain:
            raise TypeError(f"Item {k} mixes labelled and unlabelled sequences")

    if unlabelled:
        return None, seqs
    return tuple(labels), seqs


def _triangle_cells(rows: Iterable[int], seqs: Sequence[str], op: PairOp,
                    include_diagonal: bool) -> Iterator[Cell]:
    """(i, j, op(seqs[i], seqs[j])) for j < i, or j <= i with the diagonal."""
    for i in rows:
        stop = i + 1 if include_diagonal else i
        for j in range(stop):
            yield i, j, op(seqs[i], seqs[j])


def _triangle_chunk(rows: Sequence[int], seqs: Sequence[str], op: PairOp,
                    include_diagonal: bool) -> List[Cell]:
    # worker entry point; module level so ProcessPoolExecutor can pickle it
    return list(_triangle_cells(rows, seqs, op, include_diagonal))


def _fill(mat: np.ndarray, cells: Iterable[Cell]) -> None:
    for i, j, v in cells:
        mat[i, j] = v
        mat[j, i] = v


def _row_chunks(n: int, n_jobs: int, chunksize: Optional[int]) -> List[range]:
    if chunksize is None:
        chunksize = max(1, n // (n_jobs * 4))
    return [range(s, min(s + chunksize, n)) for s in range(0, n, chunksize)]


def _resolve_jobs(n_jobs: Optional[int]) -> int:
    if n_jobs is None or n_jobs <= 0:
        return os.cpu_count() or 1
    return n_jobs


# =========================
# Pooled backends
# =========================

def _fill_pooled(mat: np.ndarray, seqs: List[str], op: PairOp,
                 include_diagonal: bool, options: MatrixOptions) -> None:
    executor_cls: Type[Executor] = (
        ThreadPoolExecutor if options.backend == "thread" else ProcessPoolExecutor
    )
    n = len(seqs)
    n_jobs = _resolve_jobs(options.n_jobs)
    chunks = _row_chunks(n, n_jobs, options.chunksize)
    n_workers = max(1, min(n_jobs, len(chunks)))
    logger.debug("Dispatching %d row chunk(s) to %d %s worker(s)",
                 len(chunks), n_workers, options.backend)

    with executor_cls(max_workers=n_workers) as ex:
        futures = [ex.submit(_triangle_chunk, chunk, seqs, op, include_diagonal)
                   for chunk in chunks]
        try:
            for fut in as_completed(futures):
                _fill(mat, fut.result())
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise


def _build(sequences: LabeledSequences, op: PairOp, dtype, include_diagonal: bool,
           options: Optional[MatrixOptions], kind: str) -> LabeledMatrix:
    options = options or DEFAULT_MATRIX_OPTIONS
    labels, seqs = _split_labeled(sequences)
    n = len(seqs)
    logger.debug("Building %dx%d %s matrix (backend=%s)", n, n, kind, options.backend)
    t0 = time.perf_counter()

    mat = np.zeros((n, n), dtype=dtype)
    if options.backend == "serial" or n < 2:
        _fill(mat, _triangle_cells(range(n), seqs, op, include_diagonal))
    else:
        _fill_pooled(mat, seqs, op, include_diagonal, options)

    mat.setflags(write=False)
    logger.debug("%s matrix done in %.3fs", kind.capitalize(), time.perf_counter() - t0)
    return LabeledMatrix(values=mat, labels=labels)


# =========================
# Public API
# =========================

def build_distance_matrix(sequences: LabeledSequences,
                          cost_table: CostTable,
                          options: Optional[MatrixOptions] = None) -> LabeledMatrix:
    """
    Pairwise sequence_distance for every pair of sequences.

    Parameters
    ----------
    sequences : mapping, iterable of pairs or iterable of str
        {label: aligned_sequence}, [(label, aligned_sequence), ...] or
        [aligned_sequence, ...] (the result then has labels=None).
    cost_table : CostTable
        Character costs; gap entries of -1 collapse gap runs into one indel.
    options : MatrixOptions, optional
        Backend selection. Defaults to serial.

    Returns
    -------
    LabeledMatrix
        float64 (n, n) matrix. The diagonal is 0 and is never computed.

    Raises
    ------
    LengthMismatch, UnknownSymbol
        From the first failing pair.
    TypeError
        An item is neither a sequence string nor a (label, sequence) pair.
    """
    op = functools.partial(sequence_distance, cost_table=cost_table)
    return _build(sequences, op, np.float64, False, options, "distance")


def build_equality_matrix(sequences: LabeledSequences,
                          ignore: Optional[Iterable[str]] = None,
                          options: Optional[MatrixOptions] = None) -> LabeledMatrix:
    """
    Pairwise test_sequences_equal for every pair, diagonal included.

    ``ignore`` is passed to test_sequences_equal (None = default ignore set).
    Returns a bool (n, n) LabeledMatrix.
    """
    ignore_set = _ignore_set(ignore)
    op = functools.partial(test_sequences_equal, ignore=ignore_set)
    return _build(sequences, op, np.bool_, True, options, "equality")


# --------- convenience wrappers ---------

async def build_distance_matrix_async(sequences: LabeledSequences,
                                      cost_table: CostTable,
                                      options: Optional[MatrixOptions] = None) -> LabeledMatrix:
    """
    Async version: runs build_distance_matrix in the loop's default executor.
    (Does not speed up the computation; only keeps the event loop free.)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, functools.partial(build_distance_matrix, sequences, cost_table, options)
    )


async def build_equality_matrix_async(sequences: LabeledSequences,
                                      ignore: Optional[Iterable[str]] = None,
                                      options: Optional[MatrixOptions] = None) -> LabeledMatrix:
    """Async version of build_equality_matrix."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, functools.partial(build_equality_matrix, sequences, ignore, options)
    )
