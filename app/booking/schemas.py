"""Booking domain schemas."""

import uuid
from datetime import date, datetime, time

from pydantic import Field, field_serializer, field_validator, model_validator

from app.booking.models import Booking, BookingStatus
from app.core.schemas import CamelModel, ListResponse, serialize_utc


class TimeSlot(CamelModel):
    """Requested slot: calendar date, wall-clock time and the full timestamp."""

    date: str
    time: str
    datetime: datetime

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        try:
            parsed = date.fromisoformat(value)
        except ValueError as e:
            raise ValueError("date must be formatted as YYYY-MM-DD") from e
        return parsed.isoformat()

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        try:
            parsed = time.fromisoformat(value)
        except ValueError as e:
            raise ValueError("time must be formatted as HH:MM") from e
        return parsed.strftime("%H:%M")

    @field_serializer("datetime")
    def serialize_datetime(self, value: datetime) -> str | None:
        return serialize_utc(value)


class BookingCreate(CamelModel):
    phone_number: str | None = Field(default=None, max_length=50)
    time_slot: TimeSlot
    talents: list[str] = Field(min_length=1)
    price_range: str = Field(min_length=1, max_length=100)
    user_idea: str | None = Field(default=None, max_length=5000)

    @model_validator(mode="after")
    def check_time_slot(self) -> "BookingCreate":
        """date, time and datetime must describe the same moment."""
        slot = self.time_slot
        slot_time = time.fromisoformat(slot.time)
        if date.fromisoformat(slot.date) != slot.datetime.date():
            raise ValueError("timeSlot.date does not match timeSlot.datetime")
        if (slot_time.hour, slot_time.minute) != (
            slot.datetime.hour,
            slot.datetime.minute,
        ):
            raise ValueError("timeSlot.time does not match timeSlot.datetime")
        return self


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class BookingRead(CamelModel):
    id: str
    user_id: uuid.UUID
    user_email: str
    user_name: str
    phone_number: str | None
    time_slot: TimeSlot
    talents: list[str] | str
    price_range: str
    user_idea: str | None
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamps(self, value: datetime) -> str | None:
        return serialize_utc(value)

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingRead":
        slot = TimeSlot.model_construct(
            date=booking.time_slot_date,
            time=booking.time_slot_time,
            datetime=booking.time_slot_datetime,
        )
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            user_email=booking.user_email,
            user_name=booking.user_name,
            phone_number=booking.phone_number,
            time_slot=slot,
            talents=booking.talents,
            price_range=booking.price_range,
            user_idea=booking.user_idea,
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingCounts(CamelModel):
    total: int
    pending_confirmation: int
    confirmed: int
    completed: int
    cancelled: int


class BookingList(ListResponse[BookingRead]):
    stats: BookingCounts
