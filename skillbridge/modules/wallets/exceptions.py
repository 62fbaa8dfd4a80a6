"""Ledger specific exceptions."""

from skillbridge.modules.common.exceptions import DomainError, ValidationError


class InvalidAmountError(ValidationError):
    """Raised when an earn/spend amount is not a positive integer."""


class InsufficientCreditsError(DomainError):
    """Raised when a spend exceeds the current balance. No state is mutated."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Insufficient credits. Required: {required}, available: {available}")
        self.required = required
        self.available = available
