import pytest

from dshop.core.exceptions import ValidationError
from dshop.domain.booking_state import (
    BookingStatus,
    accepted_flag,
    assert_booking_transition,
    pending_flag,
)


@pytest.mark.parametrize(
    "current, target",
    [
        (BookingStatus.REQUESTED, BookingStatus.APPROVED),
        (BookingStatus.REQUESTED, BookingStatus.DENIED),
        (BookingStatus.APPROVED, BookingStatus.CLOSED),
    ],
)
def test_allowed_transitions(current, target):
    assert_booking_transition(current.value, target.value)


@pytest.mark.parametrize(
    "current, target",
    [
        (BookingStatus.REQUESTED, BookingStatus.CLOSED),
        (BookingStatus.APPROVED, BookingStatus.DENIED),
        (BookingStatus.APPROVED, BookingStatus.APPROVED),
        (BookingStatus.DENIED, BookingStatus.APPROVED),
        (BookingStatus.DENIED, BookingStatus.CLOSED),
    ],
)
def test_rejected_transitions(current, target):
    with pytest.raises(ValidationError) as exc_info:
        assert_booking_transition(current.value, target.value)
    assert exc_info.value.status_code == 400
    assert current.value in exc_info.value.detail


def test_legacy_flags_never_both_true():
    flags = {s: (pending_flag(s.value), accepted_flag(s.value)) for s in BookingStatus}
    assert flags[BookingStatus.REQUESTED] == (True, False)
    assert flags[BookingStatus.APPROVED] == (False, True)
    assert flags[BookingStatus.DENIED] == (False, False)
    assert (True, True) not in flags.values()
