from pathlib import Path

import pytest
import yaml

from similarity_guard.config import (
    GuardConfig,
    SimilarityConfig,
    config_from_dict,
    load_config,
    similarity_config_from_dict,
)
from similarity_guard.errors import ConfigurationError
from similarity_guard.models import Verdict


def test_defaults_match_documented_policy():
    cfg = GuardConfig()
    assert cfg.similarity.k_gram_length == 5
    assert cfg.similarity.guarantee_threshold == 9
    assert set(cfg.similarity.metric_weights.values()) == {0.25}
    assert cfg.similarity.verdict_thresholds[0] == (90, Verdict.IDENTICAL)
    assert cfg.similarity.max_input_chars == 5000
    assert cfg.violations.plagiarism_threshold == 70
    assert cfg.violations.reference_policy == "most_similar"


def test_similarity_config_accepts_camel_case_keys():
    cfg = similarity_config_from_dict(
        {
            "kGramLength": 4,
            "guaranteeThreshold": 8,
            "metricWeights": {"levenshtein": 0.0},
            "verdictThresholds": [
                {"minScore": 80, "verdictLabel": "IDENTICAL"},
                [20, "LOW_SIMILARITY"],
            ],
            "unknownKey": True,
        }
    )
    assert cfg.k_gram_length == 4
    assert cfg.guarantee_threshold == 8
    assert cfg.metric_weights["levenshtein"] == 0.0
    assert cfg.metric_weights["jaccard"] == 0.25
    assert cfg.verdict_thresholds == [
        (80, Verdict.IDENTICAL),
        (20, Verdict.LOW_SIMILARITY),
    ]


@pytest.mark.parametrize(
    "data",
    [
        {"metric_weights": {"jaccard": -1.0}},
        {
            "metric_weights": {
                "jaccard": 0.0,
                "cosine": 0.0,
                "levenshtein": 0.0,
                "winnowing": 0.0,
            }
        },
        {"metric_weights": {"soundex": 1.0}},
        {"verdict_thresholds": [[10, "DISTINCT"], [50, "IDENTICAL"]]},
        {"verdict_thresholds": [[150, "IDENTICAL"]]},
        {"verdict_thresholds": [[50, "COPIED"]]},
        {"verdict_thresholds": [{"verdict": "IDENTICAL"}]},
        {"verdict_thresholds": [{"min_score": 50}]},
        {"verdict_thresholds": [[50]]},
        {"verdict_thresholds": [[50, "IDENTICAL", "extra"]]},
        {"verdict_thresholds": [["high", "IDENTICAL"]]},
        {"verdict_thresholds": "IDENTICAL"},
        {"k_gram_length": 0},
        {"max_input_chars": 0},
    ],
)
def test_invalid_similarity_config_is_rejected(data):
    with pytest.raises(ConfigurationError):
        similarity_config_from_dict(data)


def test_large_k_gram_is_not_an_error():
    cfg = SimilarityConfig(k_gram_length=12, guarantee_threshold=9).validate()
    assert cfg.k_gram_length == 12


def test_violation_policy_validation():
    with pytest.raises(ConfigurationError):
        config_from_dict({"violations": {"reference_policy": "random"}})
    with pytest.raises(ConfigurationError):
        config_from_dict({"violations": {"plagiarismThreshold": 101}})


def test_load_config_from_yaml(tmp_path: Path):
    config_path = tmp_path / "guard.yaml"
    config_path.write_text(
        "similarity:\n"
        "  k_gram_length: 6\n"
        "  max_input_chars: 500\n"
        "violations:\n"
        "  plagiarism_threshold: 80\n"
        "  reference_policy: first\n",
        encoding="utf-8",
    )
    cfg = load_config(config_path)
    assert cfg.similarity.k_gram_length == 6
    assert cfg.similarity.max_input_chars == 500
    assert cfg.violations.plagiarism_threshold == 80
    assert cfg.violations.reference_policy == "first"


def test_load_config_rejects_non_mapping_yaml(tmp_path: Path):
    config_path = tmp_path / "guard.yaml"
    config_path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path)


def test_to_dict_round_trips_through_yaml():
    dumped = yaml.safe_dump(GuardConfig().to_dict(), sort_keys=False)
    reloaded = config_from_dict(yaml.safe_load(dumped))
    assert reloaded == GuardConfig()
