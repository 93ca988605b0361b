"""Booking domain router."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.auth.dependencies import (
    CurrentUserDep,
    ensure_owner_or_admin,
    require_admin,
    require_auth,
)
from app.booking.exceptions import BookingNotFoundError
from app.booking.models import Booking, BookingStatus
from app.booking.repository import BookingRepository
from app.booking.schemas import (
    BookingCreate,
    BookingList,
    BookingRead,
    BookingStatusUpdate,
)
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.core.schemas import ApiResponse, ListResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.BOOKING.prefix,
    tags=[Routes.BOOKING.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)


def _get_booking_or_404(bookings: BookingRepository, booking_id: str) -> Booking:
    booking = bookings.get(booking_id)
    if booking is None:
        raise BookingNotFoundError()
    return booking


@router.post(
    "",
    response_model=ApiResponse[BookingRead],
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST},
)
async def create_booking(payload: BookingCreate, user: CurrentUserDep, session: SessionDep):
    """Request a booking. Requester details come from the account."""
    booking = BookingRepository(session).create(user, payload)
    return ApiResponse(
        message="Booking created successfully", data=BookingRead.from_model(booking)
    )


@router.get("", response_model=BookingList, dependencies=[Depends(require_admin)])
async def list_bookings(
    session: SessionDep,
    status_filter: Annotated[BookingStatus | None, Query(alias="status")] = None,
):
    """All bookings newest first with per-status counts. Admin only."""
    bookings = BookingRepository(session)
    records = bookings.list_all(status_filter)
    return BookingList(
        data=[BookingRead.from_model(b) for b in records],
        count=len(records),
        stats=bookings.counts(),
    )


@router.get("/user/{user_id}", response_model=ListResponse[BookingRead])
async def list_user_bookings(
    user_id: uuid.UUID, user: CurrentUserDep, session: SessionDep
):
    """Bookings of one user. Users may only list their own."""
    ensure_owner_or_admin(user, user_id, "You can only view your own bookings")
    records = BookingRepository(session).list_for_user(user_id)
    return ListResponse(
        data=[BookingRead.from_model(b) for b in records], count=len(records)
    )


@router.get(
    "/{booking_id}",
    response_model=ApiResponse[BookingRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_booking(booking_id: str, user: CurrentUserDep, session: SessionDep):
    """One booking. Requester or admin."""
    booking = _get_booking_or_404(BookingRepository(session), booking_id)
    ensure_owner_or_admin(user, booking.user_id, "You can only view your own bookings")
    return ApiResponse(data=BookingRead.from_model(booking))


@router.patch(
    "/{booking_id}/status",
    response_model=ApiResponse[BookingRead],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_booking_status(
    booking_id: str, payload: BookingStatusUpdate, session: SessionDep
):
    """Move a booking to any status. Admin only."""
    bookings = BookingRepository(session)
    booking = bookings.set_status(
        _get_booking_or_404(bookings, booking_id), payload.status
    )
    logger.info("Booking %s set to %s", booking.id, booking.status.value)
    return ApiResponse(
        message="Booking status updated", data=BookingRead.from_model(booking)
    )


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_booking(booking_id: str, session: SessionDep):
    """Delete a booking. Admin only."""
    bookings = BookingRepository(session)
    bookings.delete(_get_booking_or_404(bookings, booking_id))
    return MessageResponse(message="Booking deleted successfully")
