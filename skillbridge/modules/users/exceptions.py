"""User directory specific exceptions."""

from skillbridge.modules.common.exceptions import DomainError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when the requested user cannot be found."""


class UserAlreadyExistsError(DomainError):
    """Raised when registering an email that is already taken."""


class DuplicateSkillError(ValidationError):
    """Raised when a skill or learning goal with the same name already exists."""


class ProfileItemNotFoundError(NotFoundError):
    """Raised when removing a skill, goal or certification the user does not have."""
