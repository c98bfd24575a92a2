from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Iterator, Tuple

from .errors import StaleRecordError, SuspendedUserError
from .models import SimilarityReport, UserViolationRecord, WarningDirective, WarningLevel
from .store import ViolationStore

logger = logging.getLogger(__name__)

DEFAULT_PLAGIARISM_THRESHOLD = 70

# Warning level reached at each violation count; later counts suspend.
ESCALATION_LADDER = (
    WarningLevel.NONE,
    WarningLevel.WARNING,
    WarningLevel.SEVERE_WARNING,
    WarningLevel.FINAL_WARNING,
)
WARNINGS_BEFORE_SUSPENSION = len(ESCALATION_LADDER) - 1


def warning_level_for_count(violation_count: int) -> WarningLevel:
    """Map a cumulative violation count onto the escalation ladder."""
    if violation_count < 0:
        raise ValueError("violation_count must be non-negative.")
    if violation_count < len(ESCALATION_LADDER):
        return ESCALATION_LADDER[violation_count]
    return WarningLevel.ACCOUNT_SUSPENDED


def ensure_not_suspended(record: UserViolationRecord) -> None:
    """Raise SuspendedUserError before any scoring for a suspended account."""
    if record.suspended:
        raise SuspendedUserError(record.user_id)


def record_violation(
    user_id: str,
    report: SimilarityReport,
    current_record: UserViolationRecord | None,
    plagiarism_threshold: int = DEFAULT_PLAGIARISM_THRESHOLD,
    now: datetime | None = None,
) -> Tuple[UserViolationRecord, WarningDirective]:
    """Compute the next violation record and the directive for this submission.

    A score at or above ``plagiarism_threshold`` adds one violation. A lower
    score leaves the record untouched: counts never decrease. The caller owns
    persistence of the returned record.
    """
    record = current_record or UserViolationRecord(user_id=user_id)
    if record.user_id != user_id:
        raise ValueError(
            f"Record belongs to '{record.user_id}', not '{user_id}'."
        )
    ensure_not_suspended(record)

    if report.score < plagiarism_threshold:
        level = warning_level_for_count(record.violation_count)
        directive = WarningDirective(
            level=level,
            message=_standing_message(record.violation_count),
            violation_count=record.violation_count,
            suspended=False,
            flagged=False,
            similarity=report.score,
        )
        return record, directive

    count = record.violation_count + 1
    level = warning_level_for_count(count)
    suspended = level is WarningLevel.ACCOUNT_SUSPENDED
    next_record = replace(
        record,
        violation_count=count,
        last_violation_timestamp=now or datetime.now(timezone.utc),
        suspended=suspended,
    )
    directive = WarningDirective(
        level=level,
        message=_violation_message(level, count, report.score),
        violation_count=count,
        suspended=suspended,
        flagged=True,
        similarity=report.score,
    )
    if suspended:
        logger.info("Suspending user=%s after %d violations", user_id, count)
    else:
        logger.info(
            "Plagiarism violation user=%s count=%d level=%s score=%d",
            user_id,
            count,
            level.value,
            report.score,
        )
    return next_record, directive


def _violation_message(level: WarningLevel, count: int, score: int) -> str:
    counter = f"Plagiarism violations: {count}/{WARNINGS_BEFORE_SUSPENSION}."
    if level is WarningLevel.WARNING:
        return (
            f"Your submission is {score}% similar to existing code. "
            f"Please submit your own work. {counter}"
        )
    if level is WarningLevel.SEVERE_WARNING:
        return (
            f"Repeated plagiarism detected ({score}% similarity). "
            f"Further violations will lead to suspension. {counter}"
        )
    if level is WarningLevel.FINAL_WARNING:
        return (
            f"Final warning: {score}% similarity detected. {counter} "
            "Next violation = ACCOUNT SUSPENSION!"
        )
    if level is WarningLevel.ACCOUNT_SUSPENDED:
        return (
            f"Account suspended after {count} plagiarism violations "
            f"({score}% similarity)."
        )
    raise ValueError(f"No violation message for level {level.value}.")


def _standing_message(count: int) -> str:
    if count == 0:
        return "No plagiarism detected."
    return (
        "No plagiarism detected in this submission. "
        f"Plagiarism violations: {count}/{WARNINGS_BEFORE_SUSPENSION}."
    )


@dataclass(slots=True)
class _UserLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class ViolationTracker:
    """Serializes read-modify-write of violation records per user.

    Concurrent submissions from the same user take the same in-process lock;
    across processes the store's version check rejects stale writes, which
    are retried. A user's lock exists only while a submission for that user
    is in flight.
    """

    def __init__(
        self,
        store: ViolationStore,
        plagiarism_threshold: int = DEFAULT_PLAGIARISM_THRESHOLD,
        max_attempts: int = 3,
    ) -> None:
        self._store = store
        self._threshold = plagiarism_threshold
        self._max_attempts = max(1, max_attempts)
        self._locks: Dict[str, _UserLock] = {}
        self._locks_guard = threading.Lock()

    def check_allowed(self, user_id: str) -> UserViolationRecord:
        """Load the user's record, rejecting suspended users."""
        record = self._store.load(user_id)
        ensure_not_suspended(record)
        return record

    def record(
        self,
        user_id: str,
        report: SimilarityReport,
        now: datetime | None = None,
        plagiarism_threshold: int | None = None,
    ) -> Tuple[UserViolationRecord, WarningDirective]:
        """Apply one graded submission to the stored record and persist it.

        ``plagiarism_threshold`` overrides the tracker's default for this call.
        """
        threshold = self._threshold if plagiarism_threshold is None else plagiarism_threshold
        with self._user_lock(user_id):
            attempt = 1
            while True:
                current = self._store.load(user_id)
                next_record, directive = record_violation(
                    user_id, report, current, threshold, now
                )
                if next_record is current:
                    return current, directive
                try:
                    saved = self._store.save(next_record, expected_version=current.version)
                except StaleRecordError:
                    if attempt >= self._max_attempts:
                        raise
                    logger.warning(
                        "Stale violation record for user=%s (attempt %d); retrying",
                        user_id,
                        attempt,
                    )
                    attempt += 1
                    continue
                return saved, directive

    @contextmanager
    def _user_lock(self, user_id: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(user_id)
            if entry is None:
                entry = self._locks[user_id] = _UserLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[user_id]
