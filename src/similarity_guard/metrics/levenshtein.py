from __future__ import annotations

from ..textutils import normalize_text
from .base import SimilarityMetric


def levenshtein_distance(source: str, target: str) -> int:
    """Classic unit-cost edit distance, computed row by row."""
    if len(source) < len(target):
        source, target = target, source
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            cost = 0 if source_char == target_char else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def levenshtein_similarity(text_a: str, text_b: str) -> float:
    """1 - editDistance / maxLength over the normalized texts."""
    source = normalize_text(text_a)
    target = normalize_text(text_b)
    if not source and not target:
        return 1.0
    if not source or not target:
        return 0.0
    distance = levenshtein_distance(source, target)
    return 1.0 - distance / max(len(source), len(target))


class LevenshteinMetric(SimilarityMetric):
    name = "levenshtein"

    def similarity(self, text_a: str, text_b: str) -> float:
        return levenshtein_similarity(text_a, text_b)
