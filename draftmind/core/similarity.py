"""
Vector similarity helpers.

Dependencies: numpy
System role: Scoring primitive for retrieval
"""

from collections.abc import Sequence

import numpy as np


def as_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Coerce a vector-like value to a 1-D float64 array."""
    return np.asarray(values, dtype=np.float64).reshape(-1)


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 instead of dividing by zero when either vector has zero
    norm, and when the vectors differ in dimensionality.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: dot(a, b) / (|a| * |b|)
    """
    va = as_vector(a)
    vb = as_vector(b)
    if va.shape != vb.shape or va.size == 0:
        return 0.0

    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denom == 0.0 or not np.isfinite(denom):
        return 0.0
    return float(np.dot(va, vb) / denom)
