"""Booking state machine.

States: requested → approved | denied, approved → closed (record deleted).
"""

from enum import Enum

from dshop.core.exceptions import ValidationError


class BookingStatus(str, Enum):
    """Booking lifecycle states."""

    REQUESTED = "requested"
    APPROVED = "approved"
    DENIED = "denied"
    CLOSED = "closed"  # never stored, the row is deleted


BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.REQUESTED: {BookingStatus.APPROVED, BookingStatus.DENIED},
    BookingStatus.APPROVED: {BookingStatus.CLOSED},
    BookingStatus.DENIED: set(),
    BookingStatus.CLOSED: set(),
}


def assert_booking_transition(current: str, target: str) -> None:
    allowed = BOOKING_TRANSITIONS.get(BookingStatus(current), set())
    if BookingStatus(target) not in allowed:
        raise ValidationError(
            f"Invalid booking transition: {current} → {target}"
        )


def pending_flag(status: str) -> bool:
    """Legacy ``pending`` flag: awaiting an admin decision."""
    return status == BookingStatus.REQUESTED


def accepted_flag(status: str) -> bool:
    """Legacy ``accepted`` flag: occupying its date range."""
    return status == BookingStatus.APPROVED
