"""Derived rating and session-count statistics."""

from .service import ReputationService

__all__ = ["ReputationService"]
