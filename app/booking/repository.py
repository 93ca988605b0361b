"""Booking store."""

import logging
import time
import uuid
from collections.abc import Sequence

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.booking.models import BOOKING_ID_PREFIX, Booking, BookingStatus
from app.booking.schemas import BookingCounts, BookingCreate
from app.core.mixins import as_utc
from app.user.models import User

logger = logging.getLogger(__name__)


class BookingRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, booking_id: str) -> Booking | None:
        return self.session.get(Booking, booking_id)

    def _next_id(self) -> str:
        """BOOK-<epoch millis>, bumped until unused."""
        millis = int(time.time() * 1000)
        while self.get(f"{BOOKING_ID_PREFIX}{millis}") is not None:
            millis += 1
        return f"{BOOKING_ID_PREFIX}{millis}"

    def create(self, requester: User, payload: BookingCreate) -> Booking:
        """Record a booking for the requester, starting as pending confirmation."""
        booking = Booking(
            id=self._next_id(),
            user_id=requester.id,
            user_email=requester.email,
            user_name=requester.name,
            phone_number=payload.phone_number or requester.mobile or None,
            time_slot_date=payload.time_slot.date,
            time_slot_time=payload.time_slot.time,
            time_slot_datetime=as_utc(payload.time_slot.datetime),
            talents=payload.talents,
            price_range=payload.price_range,
            user_idea=payload.user_idea,
            status=BookingStatus.pending_confirmation,
        )
        self.session.add(booking)
        self.session.commit()
        self.session.refresh(booking)
        logger.info("Booking %s created by %s", booking.id, requester.id)
        return booking

    def list_all(self, status: BookingStatus | None = None) -> Sequence[Booking]:
        statement = select(Booking)
        if status is not None:
            statement = statement.where(Booking.status == status)
        return self.session.exec(
            statement.order_by(col(Booking.created_at).desc())
        ).all()

    def list_for_user(self, user_id: uuid.UUID) -> Sequence[Booking]:
        return self.session.exec(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(col(Booking.created_at).desc())
        ).all()

    def set_status(self, booking: Booking, status: BookingStatus) -> Booking:
        booking.status = status
        self.session.add(booking)
        self.session.commit()
        self.session.refresh(booking)
        return booking

    def delete(self, booking: Booking) -> None:
        self.session.delete(booking)
        self.session.commit()

    def counts(self) -> BookingCounts:
        rows = self.session.exec(
            select(Booking.status, func.count()).group_by(Booking.status)
        ).all()
        by_status = {status: count for status, count in rows}
        return BookingCounts(
            total=sum(by_status.values()),
            pending_confirmation=by_status.get(BookingStatus.pending_confirmation, 0),
            confirmed=by_status.get(BookingStatus.confirmed, 0),
            completed=by_status.get(BookingStatus.completed, 0),
            cancelled=by_status.get(BookingStatus.cancelled, 0),
        )
