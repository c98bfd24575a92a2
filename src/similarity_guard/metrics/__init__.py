from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List

from .base import SimilarityMetric, overlap_ratio
from .cosine import CosineMetric, cosine_similarity
from .jaccard import JaccardMetric, jaccard_similarity
from .levenshtein import LevenshteinMetric, levenshtein_distance, levenshtein_similarity
from .winnowing import WinnowingMetric, winnowing_similarity

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import SimilarityConfig

__all__ = [
    "SimilarityMetric",
    "JaccardMetric",
    "CosineMetric",
    "LevenshteinMetric",
    "WinnowingMetric",
    "METRIC_REGISTRY",
    "overlap_ratio",
    "jaccard_similarity",
    "cosine_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
    "winnowing_similarity",
    "create_metric",
    "build_metrics_from_config",
]

# Every metric the engine knows about, in report order.
METRIC_REGISTRY: Dict[str, Callable[..., SimilarityMetric]] = {
    JaccardMetric.name: JaccardMetric,
    CosineMetric.name: CosineMetric,
    LevenshteinMetric.name: LevenshteinMetric,
    WinnowingMetric.name: WinnowingMetric,
}


def create_metric(name: str, **kwargs: Any) -> SimilarityMetric:
    """Factory for building metrics by name."""
    normalized = name.lower().strip()
    factory = METRIC_REGISTRY.get(normalized)
    if factory is None:
        raise ValueError(f"Unknown metric '{name}'.")
    return factory(**kwargs)


def build_metrics_from_config(config: "SimilarityConfig") -> List[SimilarityMetric]:
    """Instantiate every registered metric with its configured parameters."""
    metrics: List[SimilarityMetric] = []
    for name in METRIC_REGISTRY:
        if name == WinnowingMetric.name:
            metrics.append(
                create_metric(
                    name,
                    k=config.k_gram_length,
                    guarantee_threshold=config.guarantee_threshold,
                )
            )
        else:
            metrics.append(create_metric(name))
    return metrics
