"""bcrypt helpers for local password credentials."""

from __future__ import annotations

import bcrypt


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash for ``password``."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check ``plain_password`` against a stored hash; accounts without one never match."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["hash_password", "verify_password"]
