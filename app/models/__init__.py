"""Import every table model so SQLModel.metadata and the ORM mappers are complete.

Import this package before create_all(), alembic autogenerate, or any query
that relies on relationships between domains.
"""

from app.booking.models import Booking, BookingStatus
from app.media.models import MediaUpload
from app.talent.models import ApplicationStatus, TalentApplication
from app.user.models import User, UserRole

__all__ = [
    "ApplicationStatus",
    "Booking",
    "BookingStatus",
    "MediaUpload",
    "TalentApplication",
    "User",
    "UserRole",
]
