from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple


class Verdict(str, Enum):
    """Categorical label derived from a composite similarity score."""

    IDENTICAL = "IDENTICAL"
    HIGH_SIMILARITY = "HIGH_SIMILARITY"
    MODERATE_SIMILARITY = "MODERATE_SIMILARITY"
    LOW_SIMILARITY = "LOW_SIMILARITY"
    DISTINCT = "DISTINCT"


class WarningLevel(str, Enum):
    """Escalation ladder for repeat plagiarism violations."""

    NONE = "NONE"
    WARNING = "WARNING"
    SEVERE_WARNING = "SEVERE_WARNING"
    FINAL_WARNING = "FINAL_WARNING"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"


class Fingerprint(NamedTuple):
    """A winnowed k-gram hash and the k-gram index it was selected at."""

    hash_value: int
    position: int


@dataclass(frozen=True, slots=True)
class SimilarityReport:
    """Result of comparing two code texts."""

    jaccard: float
    cosine: float
    levenshtein: float
    winnowing: float
    score: int
    verdict: Verdict

    def metric_values(self) -> dict[str, float]:
        return {
            "jaccard": self.jaccard,
            "cosine": self.cosine,
            "levenshtein": self.levenshtein,
            "winnowing": self.winnowing,
        }

    def to_dict(self) -> dict[str, object]:
        return {**self.metric_values(), "score": self.score, "verdict": self.verdict.value}


@dataclass(frozen=True, slots=True)
class UserViolationRecord:
    """Persisted violation state for one user.

    ``version`` is the optimistic-concurrency token checked by the store when
    the record is written back.
    """

    user_id: str
    violation_count: int = 0
    last_violation_timestamp: datetime | None = None
    suspended: bool = False
    version: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "user_id": self.user_id,
            "violation_count": self.violation_count,
            "last_violation_timestamp": (
                self.last_violation_timestamp.isoformat()
                if self.last_violation_timestamp
                else None
            ),
            "suspended": self.suspended,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "UserViolationRecord":
        timestamp = data.get("last_violation_timestamp")
        return cls(
            user_id=str(data["user_id"]),
            violation_count=int(data.get("violation_count", 0)),  # type: ignore[arg-type]
            last_violation_timestamp=(
                datetime.fromisoformat(str(timestamp)) if timestamp else None
            ),
            suspended=bool(data.get("suspended", False)),
            version=int(data.get("version", 0)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class WarningDirective:
    """Instruction returned to the submission pipeline after a graded submission."""

    level: WarningLevel
    message: str
    violation_count: int
    suspended: bool
    flagged: bool
    similarity: int

    def to_dict(self) -> dict[str, object]:
        return {
            "level": self.level.value,
            "message": self.message,
            "violation_count": self.violation_count,
            "suspended": self.suspended,
            "flagged": self.flagged,
            "similarity": self.similarity,
        }


@dataclass(frozen=True, slots=True)
class SubmissionOutcome:
    """Everything the submission pipeline needs after scoring one submission."""

    report: SimilarityReport
    reference_id: str | None
    record: UserViolationRecord
    directive: WarningDirective

    def to_dict(self) -> dict[str, object]:
        return {
            "reference_id": self.reference_id,
            "report": self.report.to_dict(),
            "record": self.record.to_dict(),
            "directive": self.directive.to_dict(),
        }
