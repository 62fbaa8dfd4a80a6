"""Session lifecycle specific exceptions."""

from skillbridge.modules.common.exceptions import NotFoundError


class MeetingNotFoundError(NotFoundError):
    """Raised when the requested session does not exist."""
