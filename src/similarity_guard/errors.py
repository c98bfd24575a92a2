from __future__ import annotations


class SimilarityGuardError(Exception):
    """Base class for errors raised by similarity_guard."""


class InvalidInputError(SimilarityGuardError):
    """Raised when a submission is not comparable text or exceeds the size cap."""


class ConfigurationError(SimilarityGuardError, ValueError):
    """Raised when configuration values cannot be used."""


class SuspendedUserError(SimilarityGuardError):
    """Raised when a scoring request arrives for a suspended account."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User '{user_id}' is suspended; submission rejected.")
        self.user_id = user_id


class StaleRecordError(SimilarityGuardError):
    """Raised when a violation record changed since it was loaded."""

    def __init__(self, user_id: str, expected_version: int, actual_version: int) -> None:
        super().__init__(
            f"Violation record for '{user_id}' is at version {actual_version}, "
            f"expected {expected_version}."
        )
        self.user_id = user_id
        self.expected_version = expected_version
        self.actual_version = actual_version
