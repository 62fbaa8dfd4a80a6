"""Chat specific exceptions."""

from skillbridge.modules.common.exceptions import NotFoundError


class ConversationNotFoundError(NotFoundError):
    """Raised when the requested conversation does not exist."""
