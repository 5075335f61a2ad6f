"""Custom exception hierarchy for the forge scoring engine."""

from __future__ import annotations


class ForgeError(Exception):
    """Base exception for all forge scoring errors."""


class GradingError(ForgeError):
    """Raised when an external grader cannot produce schema-valid evidence.

    Scoring for the affected requirement could not complete; callers must
    not treat this as a NONE grade.
    """

    def __init__(self, requirement_id: str, attempts: int, message: str) -> None:
        """Initialize with the requirement that failed and the attempt count."""
        super().__init__(f"Grading failed for requirement '{requirement_id}': {message}")
        self.requirement_id = requirement_id
        self.attempts = attempts


class IngestionError(ForgeError):
    """Raised by artifact source clients when fetching candidate data fails."""


class GraderUnavailableError(ForgeError):
    """Raised when an external grader is requested but not configured."""
