"""Error kinds shared by the domain modules.

All of these are expected, recoverable conditions. They are reported to the
caller with enough context to act on and are never retried inside the core.
"""


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Raised when a referenced user, session or wallet does not exist."""


class NotAllowedError(DomainError):
    """Raised when the caller is not an authorized participant."""


class InvalidStateError(DomainError):
    """Raised when an operation is not valid for the current lifecycle state."""


class ValidationError(DomainError):
    """Raised on malformed input (empty title, out-of-range rating, bad date)."""
