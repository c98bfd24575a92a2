"""
similarity_guard scores code similarity and escalates repeat plagiarism.
"""

from __future__ import annotations

from .config import (
    GuardConfig,
    SimilarityConfig,
    ViolationPolicy,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from .engine import compare
from .errors import (
    ConfigurationError,
    InvalidInputError,
    SimilarityGuardError,
    StaleRecordError,
    SuspendedUserError,
)
from .models import (
    SimilarityReport,
    UserViolationRecord,
    Verdict,
    WarningDirective,
    WarningLevel,
)
from .pipeline import evaluate_submission, select_reference
from .violations import ViolationTracker, record_violation

__all__ = [
    "GuardConfig",
    "SimilarityConfig",
    "ViolationPolicy",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "compare",
    "record_violation",
    "ViolationTracker",
    "evaluate_submission",
    "select_reference",
    "SimilarityReport",
    "UserViolationRecord",
    "Verdict",
    "WarningDirective",
    "WarningLevel",
    "SimilarityGuardError",
    "InvalidInputError",
    "ConfigurationError",
    "SuspendedUserError",
    "StaleRecordError",
]

__version__ = "0.1.0"
