from __future__ import annotations

from ..fingerprints import (
    DEFAULT_GUARANTEE_THRESHOLD,
    DEFAULT_K_GRAM_LENGTH,
    fingerprint_text,
)
from .base import SimilarityMetric, overlap_ratio


def winnowing_similarity(
    text_a: str,
    text_b: str,
    k: int = DEFAULT_K_GRAM_LENGTH,
    guarantee_threshold: int = DEFAULT_GUARANTEE_THRESHOLD,
) -> float:
    """Jaccard overlap of the winnowing fingerprint sets of both texts."""
    return overlap_ratio(
        fingerprint_text(text_a, k, guarantee_threshold),
        fingerprint_text(text_b, k, guarantee_threshold),
    )


class WinnowingMetric(SimilarityMetric):
    """Fingerprint overlap; detects any shared run of ``guarantee_threshold`` chars."""

    name = "winnowing"

    def __init__(
        self,
        k: int = DEFAULT_K_GRAM_LENGTH,
        guarantee_threshold: int = DEFAULT_GUARANTEE_THRESHOLD,
    ) -> None:
        self.k = k
        self.guarantee_threshold = guarantee_threshold

    def similarity(self, text_a: str, text_b: str) -> float:
        return winnowing_similarity(text_a, text_b, self.k, self.guarantee_threshold)
