"""Feedback specific exceptions."""

from skillbridge.modules.common.exceptions import DomainError


class DuplicateFeedbackError(DomainError):
    """Raised when the rater already left feedback for this ratee and session."""
