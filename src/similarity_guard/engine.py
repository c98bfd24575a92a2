from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from .config import SimilarityConfig, similarity_config_from_dict
from .errors import InvalidInputError
from .metrics import build_metrics_from_config
from .models import SimilarityReport
from .scoring import report_from_values

logger = logging.getLogger(__name__)


def validate_code_text(value: object, max_chars: int, label: str = "code") -> str:
    """Reject anything that is not comparable text before metrics run."""
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{label} must be text, got {type(value).__name__}."
        )
    if len(value) > max_chars:
        raise InvalidInputError(
            f"{label} has {len(value)} characters; the limit is {max_chars}."
        )
    if "\x00" in value:
        raise InvalidInputError(f"{label} looks like binary data (contains NUL).")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(f"{label} is not encodable as UTF-8: {exc.reason}.") from exc
    return value


def compare(
    code_a: str,
    code_b: str,
    config: SimilarityConfig | Mapping[str, Any] | None = None,
) -> SimilarityReport:
    """Score how similar two code texts are.

    ``config`` may be a SimilarityConfig or a mapping using either the
    snake_case field names or the camelCase RPC keys (``kGramLength``,
    ``guaranteeThreshold``, ``metricWeights``, ``verdictThresholds``).
    Oversized input raises InvalidInputError rather than being truncated.
    """
    cfg = _resolve_config(config)
    text_a = validate_code_text(code_a, cfg.max_input_chars, "code_a")
    text_b = validate_code_text(code_b, cfg.max_input_chars, "code_b")

    values: Dict[str, float] = {}
    for metric in build_metrics_from_config(cfg):
        values[metric.name] = min(1.0, max(0.0, metric.similarity(text_a, text_b)))

    report = report_from_values(values, cfg)
    logger.debug(
        "Compared %d/%d chars: score=%d verdict=%s",
        len(text_a),
        len(text_b),
        report.score,
        report.verdict.value,
    )
    return report


def _resolve_config(
    config: SimilarityConfig | Mapping[str, Any] | None,
) -> SimilarityConfig:
    if config is None:
        return SimilarityConfig()
    if isinstance(config, SimilarityConfig):
        return config.validate()
    return similarity_config_from_dict(config)
