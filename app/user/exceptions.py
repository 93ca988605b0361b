"""User domain exceptions.

User-related exceptions for not found, conflict and bad input scenarios.
"""

from app.core.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when attempting to register with an existing email."""

    error_type = "email_exists"

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message)


class InvalidRoleError(ValidationError):
    """Raised when a role outside user/admin is requested."""

    error_type = "invalid_role"

    def __init__(self, message: str = "Invalid role. Must be 'user' or 'admin'"):
        super().__init__(message)
