import pytest

from similarity_guard.config import SimilarityConfig
from similarity_guard.models import Verdict
from similarity_guard.scoring import aggregate, verdict_for_score, weighted_score


def test_aggregate_uses_equal_weights_by_default():
    report = aggregate(1.0, 0.5, 0.5, 0.0)
    assert report.score == 50
    assert report.verdict is Verdict.MODERATE_SIMILARITY
    assert report.jaccard == 1.0
    assert report.winnowing == 0.0


def test_weighted_score_rounds_half_up():
    weights = {"jaccard": 0.25, "cosine": 0.25, "levenshtein": 0.25, "winnowing": 0.25}
    values = {name: 0.125 for name in weights}
    assert weighted_score(values, weights) == 13


def test_weighted_score_rounds_exact_half_despite_float_noise():
    weights = {"jaccard": 0.25, "cosine": 0.25, "levenshtein": 0.25, "winnowing": 0.25}
    values = {name: 0.285 for name in weights}
    assert weighted_score(values, weights) == 29
    assert aggregate(0.285, 0.285, 0.285, 0.285).score == 29


def test_custom_weights_change_composite():
    config = SimilarityConfig(
        metric_weights={"jaccard": 3.0, "cosine": 1.0, "levenshtein": 0.0, "winnowing": 0.0}
    )
    report = aggregate(1.0, 0.0, 0.0, 1.0, config)
    assert report.score == 75
    assert report.verdict is Verdict.HIGH_SIMILARITY


@pytest.mark.parametrize(
    ("score", "verdict"),
    [
        (100, Verdict.IDENTICAL),
        (90, Verdict.IDENTICAL),
        (89, Verdict.HIGH_SIMILARITY),
        (70, Verdict.HIGH_SIMILARITY),
        (69, Verdict.MODERATE_SIMILARITY),
        (40, Verdict.MODERATE_SIMILARITY),
        (39, Verdict.LOW_SIMILARITY),
        (15, Verdict.LOW_SIMILARITY),
        (14, Verdict.DISTINCT),
        (0, Verdict.DISTINCT),
    ],
)
def test_default_verdict_thresholds(score, verdict):
    assert verdict_for_score(score, SimilarityConfig().verdict_thresholds) is verdict


def test_custom_verdict_thresholds():
    thresholds = [(50, Verdict.HIGH_SIMILARITY), (10, Verdict.LOW_SIMILARITY)]
    assert verdict_for_score(60, thresholds) is Verdict.HIGH_SIMILARITY
    assert verdict_for_score(20, thresholds) is Verdict.LOW_SIMILARITY
    assert verdict_for_score(5, thresholds) is Verdict.DISTINCT
