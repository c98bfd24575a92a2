from __future__ import annotations

import logging
from typing import Mapping, Tuple

from .config import GuardConfig, SimilarityConfig
from .engine import compare
from .errors import ConfigurationError
from .models import SimilarityReport, SubmissionOutcome
from .scoring import aggregate
from .violations import ViolationTracker

logger = logging.getLogger(__name__)


def select_reference(
    submission: str,
    references: Mapping[str, str],
    policy: str = "most_similar",
    config: SimilarityConfig | None = None,
) -> Tuple[str | None, SimilarityReport]:
    """Pick the reference a submission is judged against.

    ``most_similar`` compares against every reference and keeps the highest
    score (first reference wins ties); ``first`` treats the first reference as
    the canonical solution. With no references the report is all zeros.
    """
    cfg = config or SimilarityConfig()
    if not references:
        return None, aggregate(0.0, 0.0, 0.0, 0.0, cfg)

    if policy == "first":
        reference_id, reference = next(iter(references.items()))
        return reference_id, compare(submission, reference, cfg)
    if policy != "most_similar":
        raise ConfigurationError(f"Unknown reference policy '{policy}'.")

    items = iter(references.items())
    best_id, best_reference = next(items)
    best_report = compare(submission, best_reference, cfg)
    for reference_id, reference in items:
        report = compare(submission, reference, cfg)
        if report.score > best_report.score:
            best_id, best_report = reference_id, report
    return best_id, best_report


def evaluate_submission(
    user_id: str,
    submission: str,
    references: Mapping[str, str],
    tracker: ViolationTracker,
    config: GuardConfig | None = None,
) -> SubmissionOutcome:
    """Score a graded submission and apply the violation policy.

    Suspended users are rejected with SuspendedUserError before any scoring.
    The plagiarism threshold comes from ``config``, not from the tracker.
    """
    cfg = config or GuardConfig()
    tracker.check_allowed(user_id)
    reference_id, report = select_reference(
        submission, references, cfg.violations.reference_policy, cfg.similarity
    )
    logger.debug(
        "Submission user=%s reference=%s score=%d", user_id, reference_id, report.score
    )
    record, directive = tracker.record(
        user_id, report, plagiarism_threshold=cfg.violations.plagiarism_threshold
    )
    return SubmissionOutcome(
        report=report, reference_id=reference_id, record=record, directive=directive
    )
