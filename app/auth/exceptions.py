"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from app.core.exceptions import AppException, ValidationError


# Authentication errors (401)
class AuthenticationError(AppException):
    """Base class for authentication failures."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password combination is invalid."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when a protected route is called without a bearer token."""

    error_type = "missing_token"

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


# Authorization errors (403)
class AuthorizationError(AppException):
    """Base class for authorization failures."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class InvalidTokenError(AuthorizationError):
    """Raised when a bearer token is malformed, tampered with or expired.

    Reported as 403 (a token was presented but is not acceptable), unlike
    a missing token which is 401.
    """

    error_type = "invalid_token"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)


class NotOwnerError(AuthorizationError):
    """Raised when a user acts on a resource they do not own."""

    error_type = "not_owner"

    def __init__(self, message: str = "You can only modify your own resources"):
        super().__init__(message)


# Validation errors (400) - auth specific
class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is unknown or expired."""

    error_type = "invalid_reset_token"

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)
