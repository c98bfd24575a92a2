from __future__ import annotations

import math

import numpy as np

from ..tokenization import token_counts
from .base import SimilarityMetric


def cosine_similarity(text_a: str, text_b: str) -> float:
    """Angle between the token frequency vectors of both texts."""
    counts_a = token_counts(text_a)
    counts_b = token_counts(text_b)
    vocabulary = sorted(counts_a.keys() | counts_b.keys())
    vector_a = np.array([counts_a[token] for token in vocabulary], dtype=np.int64)
    vector_b = np.array([counts_b[token] for token in vocabulary], dtype=np.int64)

    magnitude_a = int(np.dot(vector_a, vector_a))
    magnitude_b = int(np.dot(vector_b, vector_b))
    if magnitude_a == 0 and magnitude_b == 0:
        return 1.0
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0
    dot = int(np.dot(vector_a, vector_b))
    # Integer products keep identical vectors at exactly 1.0.
    return min(1.0, dot / math.sqrt(magnitude_a * magnitude_b))


class CosineMetric(SimilarityMetric):
    name = "cosine"

    def similarity(self, text_a: str, text_b: str) -> float:
        return cosine_similarity(text_a, text_b)
