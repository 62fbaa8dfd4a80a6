"""Shared building blocks for the domain modules."""

from .exceptions import DomainError, InvalidStateError, NotAllowedError, NotFoundError, ValidationError

__all__ = [
    "DomainError",
    "InvalidStateError",
    "NotAllowedError",
    "NotFoundError",
    "ValidationError",
]
