"""
Shared cost tables for the test-suite.
"""

import numpy as np
import pytest

from SeqDist import CostTable

DNA_SYMBOLS = "ACGTN?-."
GAPS = "-."
WILDCARDS = "N?"


def make_dna_table(gap=-1):
    """0/1 nucleotide table; gap vs residue costs ``gap``, N/? match anything."""
    n = len(DNA_SYMBOLS)
    values = np.zeros((n, n))
    for i, a in enumerate(DNA_SYMBOLS):
        for j, b in enumerate(DNA_SYMBOLS):
            if a in GAPS and b in GAPS:
                values[i, j] = 0
            elif a in GAPS or b in GAPS:
                values[i, j] = gap
            elif a in WILDCARDS or b in WILDCARDS:
                values[i, j] = 0
            else:
                values[i, j] = 0 if a == b else 1
    return CostTable(values, list(DNA_SYMBOLS))


@pytest.fixture
def dna_table():
    """Indel-collapsing table (gap = -1)."""
    return make_dna_table(gap=-1)


@pytest.fixture
def hamming_table():
    """Gaps cost 1 per column, no indel collapsing."""
    return make_dna_table(gap=1)


@pytest.fixture
def example_sequences():
    return {"A": "ATGGC", "B": "ATGGG", "C": "ATGGG", "D": "AT--C"}
