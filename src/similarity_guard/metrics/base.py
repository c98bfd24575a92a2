from __future__ import annotations

from abc import ABC, abstractmethod


class SimilarityMetric(ABC):
    """A pure text x text -> [0, 1] similarity function."""

    name: str = ""

    @abstractmethod
    def similarity(self, text_a: str, text_b: str) -> float:
        """Return a similarity in [0.0, 1.0] for two raw code texts."""
        raise NotImplementedError


def overlap_ratio(set_a: set, set_b: set) -> float:
    """Jaccard overlap with the shared degenerate-input policy."""
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    intersection = len(set_a & set_b)
    return intersection / (len(set_a) + len(set_b) - intersection)
