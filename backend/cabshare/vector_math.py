from __future__ import annotations

from collections.abc import Sequence

import numpy as np

EPSILON = 1e-8


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity over the common prefix of two vectors.

    Vectors of different length are truncated to the shorter one; an empty
    prefix scores 0. The denominator carries a small epsilon so all-zero
    vectors also score 0 instead of dividing by zero.
    """
    length = min(len(a), len(b))
    if not length:
        return 0.0
    va = np.asarray(a[:length], dtype=np.float64)
    vb = np.asarray(b[:length], dtype=np.float64)
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb)) + EPSILON
    return float(np.dot(va, vb) / denom)


__all__ = ["EPSILON", "cosine_similarity"]
