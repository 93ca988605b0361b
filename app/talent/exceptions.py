"""Talent domain exceptions."""

from typing import Any

from app.auth.exceptions import AuthorizationError
from app.core.exceptions import ConflictError, NotFoundError, ValidationError


class ApplicationNotFoundError(NotFoundError):
    """Raised when a talent application cannot be found."""

    error_type = "application_not_found"

    def __init__(self, message: str = "Application not found"):
        super().__init__(message)


class ActiveApplicationExistsError(ConflictError):
    """Raised when the owner already has a pending or verified application."""

    error_type = "active_application_exists"

    def __init__(
        self,
        message: str = "You already have an active application",
        existing: dict[str, Any] | None = None,
    ):
        details = {"existingApplication": existing} if existing else None
        super().__init__(message, details)


class TermsNotAcceptedError(ValidationError):
    error_type = "terms_not_accepted"

    def __init__(self, message: str = "Terms and conditions must be accepted"):
        super().__init__(message)


class InvalidStatusTransitionError(ValidationError):
    """Raised when a review targets anything but verified or rejected."""

    error_type = "invalid_status"

    def __init__(
        self, message: str = "Invalid status. Must be 'verified' or 'rejected'"
    ):
        super().__init__(message)


class InvalidPriceError(ValidationError):
    error_type = "invalid_price"

    def __init__(self, message: str = "Price must contain only currency symbols"):
        super().__init__(message)


class PriceAdminOnlyError(AuthorizationError):
    error_type = "price_admin_only"

    def __init__(self, message: str = "Only admins can update price"):
        super().__init__(message)


class EmptyUpdateError(ValidationError):
    error_type = "empty_update"

    def __init__(self, message: str = "No valid fields to update"):
        super().__init__(message)
