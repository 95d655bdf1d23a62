"""
Matrix Module
Symmetric pairwise distance / equality matrices for labelled sequences
"""

from .distances import (
    LabeledMatrix,
    build_distance_matrix,
    build_distance_matrix_async,
    build_equality_matrix,
    build_equality_matrix_async,
)

__all__ = [
    "LabeledMatrix",
    "build_distance_matrix",
    "build_distance_matrix_async",
    "build_equality_matrix",
    "build_equality_matrix_async",
]
