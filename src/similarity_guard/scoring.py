from __future__ import annotations

import math
from typing import Mapping, Sequence, Tuple

from .config import SimilarityConfig
from .models import SimilarityReport, Verdict


def weighted_score(values: Mapping[str, float], weights: Mapping[str, float]) -> int:
    """Weighted mean of metric values as an integer percentage (half rounds up)."""
    total_weight = sum(weights.get(name, 0.0) for name in values)
    if total_weight <= 0:
        return 0
    mean = sum(values[name] * weights.get(name, 0.0) for name in values) / total_weight
    # Strip float noise first so 28.499999999999996 still rounds to 29.
    percentage = math.floor(round(mean * 100, 9) + 0.5)
    return max(0, min(100, percentage))


def verdict_for_score(score: int, thresholds: Sequence[Tuple[int, Verdict]]) -> Verdict:
    """Return the verdict of the first threshold the score reaches.

    Thresholds are ordered by descending minimum score; a score below all of
    them is DISTINCT.
    """
    for min_score, verdict in thresholds:
        if score >= min_score:
            return verdict
    return Verdict.DISTINCT


def aggregate(
    jaccard: float,
    cosine: float,
    levenshtein: float,
    winnowing: float,
    config: SimilarityConfig | None = None,
) -> SimilarityReport:
    """Combine the four metric values into a SimilarityReport."""
    return report_from_values(
        {
            "jaccard": jaccard,
            "cosine": cosine,
            "levenshtein": levenshtein,
            "winnowing": winnowing,
        },
        config,
    )


def report_from_values(
    values: Mapping[str, float], config: SimilarityConfig | None = None
) -> SimilarityReport:
    """Build a SimilarityReport from metric values keyed by metric name."""
    cfg = config or SimilarityConfig()
    score = weighted_score(values, cfg.metric_weights)
    return SimilarityReport(
        jaccard=values["jaccard"],
        cosine=values["cosine"],
        levenshtein=values["levenshtein"],
        winnowing=values["winnowing"],
        score=score,
        verdict=verdict_for_score(score, cfg.verdict_thresholds),
    )
