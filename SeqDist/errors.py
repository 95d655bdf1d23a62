"""
Exceptions raised by the sequence comparison routines.

© SeqDist
"""
from __future__ import annotations


class SeqDistError(Exception):
    """Base class for SeqDist errors."""


class LengthMismatch(SeqDistError, ValueError):
    """Two sequences compared position by position have different lengths."""

    def __init__(self, len1: int, len2: int):
        self.len1 = len1
        self.len2 = len2
        super().__init__(f"Sequences of different length: {len1} != {len2}")

    def __reduce__(self):
        # rebuild from the lengths when shipped back from a worker process
        return type(self), (self.len1, self.len2)


class UnknownSymbol(SeqDistError, KeyError):
    """A sequence character has no row or column entry in the cost table."""

    def __init__(self, symbol: str, axis: str):
        self.symbol = symbol
        self.axis = axis
        super().__init__(symbol, axis)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the args tuple
        return f"Character {self.symbol!r} not found in cost table {self.axis} labels"
