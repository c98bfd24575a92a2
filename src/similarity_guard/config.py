from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence, Tuple

import yaml

from .errors import ConfigurationError
from .models import Verdict

METRIC_NAMES = ("jaccard", "cosine", "levenshtein", "winnowing")
REFERENCE_POLICIES = ("most_similar", "first")

# camelCase keys accepted from the engine's RPC boundary.
KEY_ALIASES = {
    "kGramLength": "k_gram_length",
    "guaranteeThreshold": "guarantee_threshold",
    "metricWeights": "metric_weights",
    "verdictThresholds": "verdict_thresholds",
    "maxInputChars": "max_input_chars",
    "plagiarismThreshold": "plagiarism_threshold",
    "referencePolicy": "reference_policy",
}


def _default_weights() -> Dict[str, float]:
    return {name: 0.25 for name in METRIC_NAMES}


def _default_thresholds() -> List[Tuple[int, Verdict]]:
    return [
        (90, Verdict.IDENTICAL),
        (70, Verdict.HIGH_SIMILARITY),
        (40, Verdict.MODERATE_SIMILARITY),
        (15, Verdict.LOW_SIMILARITY),
        (0, Verdict.DISTINCT),
    ]


@dataclass(slots=True)
class SimilarityConfig:
    """Parameters of a single comparison.

    ``max_input_chars`` bounds the quadratic edit-distance table: each
    comparison costs roughly len(a) * len(b) steps of pure Python (about
    3.5 s for two 3 000 character texts), and the ``most_similar`` reference
    policy pays that once per reference.
    """

    k_gram_length: int = 5
    guarantee_threshold: int = 9
    metric_weights: Dict[str, float] = field(default_factory=_default_weights)
    verdict_thresholds: List[Tuple[int, Verdict]] = field(
        default_factory=_default_thresholds
    )
    max_input_chars: int = 5_000

    def validate(self) -> "SimilarityConfig":
        if self.k_gram_length < 1:
            raise ConfigurationError("k_gram_length must be at least 1.")
        if self.max_input_chars < 1:
            raise ConfigurationError("max_input_chars must be at least 1.")
        unknown = set(self.metric_weights) - set(METRIC_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown metric weights: {sorted(unknown)}.")
        if any(weight < 0 for weight in self.metric_weights.values()):
            raise ConfigurationError("Metric weights must be non-negative.")
        if sum(self.metric_weights.values()) <= 0:
            raise ConfigurationError("At least one metric weight must be positive.")
        if not self.verdict_thresholds:
            raise ConfigurationError("verdict_thresholds must not be empty.")
        previous: int | None = None
        for min_score, _ in self.verdict_thresholds:
            if not 0 <= min_score <= 100:
                raise ConfigurationError(
                    f"Verdict threshold {min_score} outside [0, 100]."
                )
            if previous is not None and min_score >= previous:
                raise ConfigurationError(
                    "verdict_thresholds must be strictly descending by score."
                )
            previous = min_score
        return self

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["verdict_thresholds"] = [
            [min_score, verdict.value] for min_score, verdict in self.verdict_thresholds
        ]
        return data


@dataclass(slots=True)
class ViolationPolicy:
    """How graded submissions turn into violations."""

    plagiarism_threshold: int = 70
    reference_policy: str = "most_similar"

    def validate(self) -> "ViolationPolicy":
        if not 0 <= self.plagiarism_threshold <= 100:
            raise ConfigurationError("plagiarism_threshold must be within [0, 100].")
        if self.reference_policy not in REFERENCE_POLICIES:
            raise ConfigurationError(
                f"Unknown reference policy '{self.reference_policy}'; "
                f"expected one of {list(REFERENCE_POLICIES)}."
            )
        return self


@dataclass(slots=True)
class GuardConfig:
    """Top-level configuration for similarity_guard."""

    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    violations: ViolationPolicy = field(default_factory=ViolationPolicy)

    def validate(self) -> "GuardConfig":
        self.similarity.validate()
        self.violations.validate()
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return {
            "similarity": self.similarity.to_dict(),
            "violations": asdict(self.violations),
        }


def _canonical_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {KEY_ALIASES.get(key, key): value for key, value in data.items()}


def _parse_thresholds(value: Sequence[Any]) -> List[Tuple[int, Verdict]]:
    thresholds: List[Tuple[int, Verdict]] = []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigurationError("verdict_thresholds must be a list of entries.")
    for entry in value:
        if isinstance(entry, Mapping):
            entry = _canonical_keys(entry)
            min_score = entry.get("min_score", entry.get("minScore"))
            label = entry.get("verdict", entry.get("verdictLabel"))
        elif (
            isinstance(entry, Sequence)
            and not isinstance(entry, (str, bytes))
            and len(entry) == 2
        ):
            min_score, label = entry
        else:
            raise ConfigurationError(
                f"Verdict threshold {entry!r} must be a (min_score, verdict) pair."
            )
        if min_score is None or label is None:
            raise ConfigurationError(
                f"Verdict threshold {entry!r} needs both min_score and verdict."
            )
        try:
            score = int(min_score)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Verdict threshold score {min_score!r} is not an integer."
            ) from exc
        try:
            verdict = label if isinstance(label, Verdict) else Verdict(str(label))
        except ValueError as exc:
            raise ConfigurationError(f"Unknown verdict label '{label}'.") from exc
        thresholds.append((score, verdict))
    return thresholds


def similarity_config_from_dict(data: Mapping[str, Any] | None) -> SimilarityConfig:
    """Build a SimilarityConfig from a dictionary-like input."""
    if data is None:
        return SimilarityConfig()
    canonical = _canonical_keys(data)
    allowed = {item.name for item in fields(SimilarityConfig)}
    kwargs = {key: canonical[key] for key in canonical if key in allowed}
    if "metric_weights" in kwargs:
        weights = _default_weights()
        weights.update({str(k): float(v) for k, v in kwargs["metric_weights"].items()})
        kwargs["metric_weights"] = weights
    if "verdict_thresholds" in kwargs:
        kwargs["verdict_thresholds"] = _parse_thresholds(kwargs["verdict_thresholds"])
    return SimilarityConfig(**kwargs).validate()


def _build_policy(data: Mapping[str, Any]) -> ViolationPolicy:
    allowed = {item.name for item in fields(ViolationPolicy)}
    canonical = _canonical_keys(data)
    return ViolationPolicy(**{key: canonical[key] for key in canonical if key in allowed})


def config_from_dict(data: Mapping[str, Any] | None) -> GuardConfig:
    """Build a GuardConfig from a dictionary-like input."""
    if data is None:
        return GuardConfig()
    similarity_value = data.get("similarity")
    violations_value = data.get("violations")
    similarity = (
        similarity_value
        if isinstance(similarity_value, SimilarityConfig)
        else similarity_config_from_dict(similarity_value or {})
    )
    violations = (
        violations_value
        if isinstance(violations_value, ViolationPolicy)
        else _build_policy(violations_value or {})
    )
    return GuardConfig(similarity=similarity, violations=violations).validate()


def config_from_yaml(path: str | Path) -> GuardConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ConfigurationError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> GuardConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return GuardConfig()
    return config_from_yaml(path)
