from __future__ import annotations

from ..tokenization import tokenize
from .base import SimilarityMetric, overlap_ratio


def jaccard_similarity(text_a: str, text_b: str) -> float:
    """Set overlap of the distinct tokens of both texts."""
    return overlap_ratio(set(tokenize(text_a)), set(tokenize(text_b)))


class JaccardMetric(SimilarityMetric):
    name = "jaccard"

    def similarity(self, text_a: str, text_b: str) -> float:
        return jaccard_similarity(text_a, text_b)
