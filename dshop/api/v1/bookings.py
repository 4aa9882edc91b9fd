"""Booking endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dshop.api.deps import get_current_user, get_db
from dshop.core.middleware import booking_limiter
from dshop.core.permissions import require_admin
from dshop.models.user import User
from dshop.schemas.booking import (
    BookingActionResponse,
    BookingCreate,
    BookingListResponse,
    BookingRequestResponse,
    BookingResponse,
    MyBookingItem,
    PendingBookingItem,
    PendingListResponse,
)
from dshop.services.booking_service import booking_service

router = APIRouter()

APPROVE_DECISION = "ok"


@router.get("/", response_model=BookingListResponse)
async def get_my_bookings(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    booking_id: UUID | None = Query(default=None, alias="id"),
) -> BookingListResponse:
    """Get the current user's confirmed bookings."""
    bookings = await booking_service.list_mine(db, current_user, booking_id=booking_id)
    return BookingListResponse(
        bookings=[MyBookingItem.model_validate(b) for b in bookings],
        success="Your bookings have been fetched",
    )


@router.post(
    "/",
    response_model=BookingRequestResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(booking_limiter)],
)
async def request_booking(
    booking_data: BookingCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingRequestResponse:
    """Request a device for a date range; an admin decides later."""
    booking, message = await booking_service.request(
        db,
        current_user,
        booking_data.device,
        booking_data.from_date,
        booking_data.to_date,
    )
    return BookingRequestResponse(
        id=booking.id,
        message=message,
        success="Booking request has been created",
    )


@router.get("/pending", response_model=PendingListResponse)
async def get_pending_bookings(
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
    booking_id: UUID | None = Query(default=None, alias="id"),
) -> PendingListResponse:
    """List all booking requests awaiting a decision (admin only)."""
    bookings = await booking_service.list_pending(db, admin, booking_id=booking_id)
    return PendingListResponse(
        bookings=[
            PendingBookingItem(
                id=b.id,
                name=b.device.name,
                user=b.user.full_name,
                from_date=b.from_date,
                to_date=b.to_date,
            )
            for b in bookings
        ],
        success="All pending bookings have been fetched",
    )


@router.delete("/{booking_id}", response_model=BookingActionResponse)
async def close_booking(
    booking_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingActionResponse:
    """Return a device by deleting one of the user's confirmed bookings."""
    booking, message = await booking_service.close(db, current_user, booking_id)
    return BookingActionResponse(booking=BookingResponse.model_validate(booking), success=message)


@router.patch("/{booking_id}/{decision}", response_model=BookingActionResponse)
async def decide_booking(
    booking_id: UUID,
    decision: str,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingActionResponse:
    """Approve ("ok") or deny (anything else) a booking request (admin only)."""
    booking, message = await booking_service.decide(
        db, admin, booking_id, approve=decision == APPROVE_DECISION
    )
    return BookingActionResponse(booking=BookingResponse.model_validate(booking), success=message)
