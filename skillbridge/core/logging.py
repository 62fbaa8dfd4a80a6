"""Process-wide logging setup."""

from __future__ import annotations

import logging

from skillbridge.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    if settings.debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=settings.logging.format)
    logging.getLogger("skillbridge").setLevel(level)


__all__ = ["configure_logging"]
