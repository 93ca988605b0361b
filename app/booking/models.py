"""Booking domain models."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from app.core.json_list import JSONList
from app.core.mixins import TimestampMixin

BOOKING_ID_PREFIX = "BOOK-"


class BookingStatus(str, Enum):
    """Booking state. Wire values are the Italian labels the clients use.

    Any status may follow any other; there is no enforced ordering.
    """

    pending_confirmation = "in attesa di conferma"
    confirmed = "confermata"
    completed = "fatta"
    cancelled = "cancellata"


class Booking(TimestampMixin, SQLModel, table=True):
    """Booking request.

    Requester identity is copied from the account at creation time so the
    record survives later account changes; user_id is not a foreign key.
    """

    __tablename__: str = "bookings"

    id: str = Field(primary_key=True, max_length=50)
    user_id: uuid.UUID = Field(index=True)
    user_email: str = Field(max_length=255)
    user_name: str = Field(default="", max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    time_slot_date: str = Field(max_length=10)
    time_slot_time: str = Field(max_length=8)
    time_slot_datetime: datetime
    talents: list[str] = Field(
        default_factory=list, sa_column=Column(JSONList, nullable=False)
    )
    price_range: str = Field(max_length=100)
    user_idea: str | None = Field(default=None)
    status: BookingStatus = Field(
        default=BookingStatus.pending_confirmation, max_length=30, index=True
    )
