"""Date conflict detection against approved bookings."""

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dshop.config import settings
from dshop.domain.booking_state import BookingStatus
from dshop.models.booking import Booking
from dshop.models.device import Device

# At most this many reasons are reported for a single check
MAX_CONFLICT_REASONS = 2

DATE_ORDER_REASON = "The 'from' date is later than the 'to' date"


def _format_date(value: date) -> str:
    return value.isoformat()


def find_conflicts(
    device_name: str,
    from_date: date,
    to_date: date,
    approved: list[tuple[date, date]],
    detect_engulfment: bool = True,
) -> list[str]:
    """Collect conflict reasons for a range against approved ranges.

    Both bounds are inclusive, so a booking ending on day D collides with one
    starting on day D. Each existing range can contribute a reason for the
    requested start and one for the requested end. When neither endpoint lands
    inside but the requested range swallows the existing one, an engulfment
    reason is added if ``detect_engulfment`` is set.

    Args:
        device_name: Name used in the messages
        from_date: Requested first day
        to_date: Requested last day
        approved: (from, to) ranges already approved for the device
        detect_engulfment: Also report ranges lying strictly inside the request

    Returns:
        Up to ``MAX_CONFLICT_REASONS`` messages; empty when the range is free
    """
    if from_date > to_date:
        return [DATE_ORDER_REASON]

    reasons: list[str] = []
    for booked_from, booked_to in approved:
        from_inside = booked_from <= from_date <= booked_to
        to_inside = booked_from <= to_date <= booked_to

        if from_inside:
            reasons.append(
                f"Device '{device_name}' is already reserved for the chosen period. "
                f"Try changing the booking date ({_format_date(from_date)})"
            )
        if to_inside:
            reasons.append(
                f"Device '{device_name}' is already reserved for the chosen period. "
                f"Try changing the return date ({_format_date(to_date)})"
            )
        if (
            detect_engulfment
            and not (from_inside or to_inside)
            and from_date < booked_from
            and booked_to < to_date
        ):
            reasons.append(
                f"Device '{device_name}' is already reserved within the chosen period "
                f"({_format_date(booked_from)} - {_format_date(booked_to)})"
            )

        if len(reasons) >= MAX_CONFLICT_REASONS:
            break

    return reasons[:MAX_CONFLICT_REASONS]


async def check_availability(
    db: AsyncSession,
    device: Device,
    from_date: date,
    to_date: date,
    exclude_booking_id: UUID | None = None,
) -> list[str]:
    """Check a device's approved bookings for overlap with a date range.

    Requested and denied bookings never block. ``exclude_booking_id`` keeps a
    booking from conflicting with itself when it is re-checked.
    """
    if from_date > to_date:
        return [DATE_ORDER_REASON]

    query = select(Booking.from_date, Booking.to_date).where(
        Booking.device_id == device.id,
        Booking.status == BookingStatus.APPROVED.value,
    )
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)
    query = query.order_by(Booking.from_date)

    result = await db.execute(query)
    approved = [(row.from_date, row.to_date) for row in result.all()]

    return find_conflicts(
        device.name,
        from_date,
        to_date,
        approved,
        detect_engulfment=settings.detect_engulfment,
    )
