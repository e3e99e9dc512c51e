"""
Distance and similarity scores between two word vectors.

Every routine takes two equal-length real vectors and returns a float.
Comparing vectors of different length raises VectorLengthMismatchError.

Direction of each score:
- euclidean, manhattan, chebyshev: lower is more similar
- cosine, jaccard, pearson: higher is more similar

Undefined results (zero-norm cosine, zero-denominator jaccard, constant-vector
pearson) are returned as ``nan``. Callers treat ``nan`` as non-matching.
"""

import math
from typing import Sequence, Tuple, Union

import numpy as np

from ..engine.errors import VectorLengthMismatchError

VectorLike = Union[np.ndarray, Sequence[float]]


def _as_pair(vector1: VectorLike, vector2: VectorLike) -> Tuple[np.ndarray, np.ndarray]:
    """Convert both inputs to float64 arrays and check their lengths."""
    a = np.asarray(vector1, dtype=np.float64).ravel()
    b = np.asarray(vector2, dtype=np.float64).ravel()
    if a.shape[0] != b.shape[0]:
        raise VectorLengthMismatchError(a.shape[0], b.shape[0])
    return a, b


def euclidean(vector1: VectorLike, vector2: VectorLike) -> float:
    """Square root of the summed squared component differences."""
    a, b = _as_pair(vector1, vector2)
    diff = a - b
    return float(math.sqrt(np.dot(diff, diff)))


def cosine(vector1: VectorLike, vector2: VectorLike) -> float:
    """
    Cosine of the angle between the two vectors.

    Returns nan when either vector has zero norm.
    """
    a, b = _as_pair(vector1, vector2)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)

    if norm_a == 0 or norm_b == 0:
        return math.nan

    return float(np.dot(a, b) / (norm_a * norm_b))


def jaccard(vector1: VectorLike, vector2: VectorLike) -> float:
    """
    Weighted Jaccard ratio applied directly to real components.

    sum(min(a_i, b_i)) / sum(max(a_i, b_i)). This is not a set Jaccard:
    negative components are used as-is. Returns nan when the denominator is 0.
    """
    a, b = _as_pair(vector1, vector2)
    intersection = np.minimum(a, b).sum()
    union = np.maximum(a, b).sum()

    if union == 0:
        return math.nan

    return float(intersection / union)


def manhattan(vector1: VectorLike, vector2: VectorLike) -> float:
    """Sum of absolute component differences."""
    a, b = _as_pair(vector1, vector2)
    return float(np.abs(a - b).sum())


def pearson(vector1: VectorLike, vector2: VectorLike) -> float:
    """
    Centered (Pearson) correlation coefficient in [-1, 1].

    Returns nan when either vector is constant.
    """
    a, b = _as_pair(vector1, vector2)
    if a.shape[0] == 0:
        return math.nan
    # Exact test; centering a constant vector can leave rounding residue
    if a.max() == a.min() or b.max() == b.min():
        return math.nan

    da = a - a.mean()
    db = b - b.mean()
    denominator = math.sqrt(np.dot(da, da) * np.dot(db, db))

    if denominator == 0:
        return math.nan

    return float(np.dot(da, db) / denominator)


def chebyshev(vector1: VectorLike, vector2: VectorLike) -> float:
    """Largest absolute component difference (0.0 for empty vectors)."""
    a, b = _as_pair(vector1, vector2)
    if a.shape[0] == 0:
        return 0.0
    return float(np.abs(a - b).max())
