"""Booking domain exceptions."""

from app.core.exceptions import NotFoundError


class BookingNotFoundError(NotFoundError):
    error_type = "booking_not_found"

    def __init__(self, message: str = "Booking not found"):
        super().__init__(message)
