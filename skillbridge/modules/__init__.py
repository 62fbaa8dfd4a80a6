"""Domain modules and their public exports."""

from . import common, users, conversations, wallets, reputation, meetings, feedback, notifications

__all__ = [
    "common",
    "users",
    "conversations",
    "wallets",
    "reputation",
    "meetings",
    "feedback",
    "notifications",
]
