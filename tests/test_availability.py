from datetime import date

from dshop.config import settings
from dshop.core.exceptions import DateConflict
from dshop.domain.booking_state import BookingStatus
from dshop.models.booking import Booking
from dshop.services.availability_service import (
    DATE_ORDER_REASON,
    MAX_CONFLICT_REASONS,
    check_availability,
    find_conflicts,
)


def d(day: int, month: int = 1) -> date:
    return date(2024, month, day)


class TestFindConflicts:
    def test_free_range_has_no_reasons(self):
        assert find_conflicts("Raspberry Pi", d(1), d(3), [(d(10), d(12))]) == []

    def test_no_approved_bookings(self):
        assert find_conflicts("Raspberry Pi", d(1), d(3), []) == []

    def test_from_after_to(self):
        reasons = find_conflicts("Raspberry Pi", d(5), d(4), [(d(1), d(31))])
        assert reasons == [DATE_ORDER_REASON]

    def test_request_ending_inside_existing_cites_return_date(self):
        reasons = find_conflicts("Raspberry Pi", d(10), d(12), [(d(11), d(15))])
        assert reasons == [
            "Device 'Raspberry Pi' is already reserved for the chosen period. "
            "Try changing the return date (2024-01-12)"
        ]

    def test_request_starting_inside_existing_cites_booking_date(self):
        reasons = find_conflicts("Raspberry Pi", d(14), d(20), [(d(11), d(15))])
        assert reasons == [
            "Device 'Raspberry Pi' is already reserved for the chosen period. "
            "Try changing the booking date (2024-01-14)"
        ]

    def test_bounds_are_inclusive(self):
        assert len(find_conflicts("Pi", d(15), d(18), [(d(11), d(15))])) == 1
        assert len(find_conflicts("Pi", d(8), d(11), [(d(11), d(15))])) == 1
        assert find_conflicts("Pi", d(16), d(18), [(d(11), d(15))]) == []

    def test_range_inside_existing_reports_both_endpoints(self):
        reasons = find_conflicts("Pi", d(12), d(13), [(d(11), d(15))])
        assert len(reasons) == 2
        assert "booking date (2024-01-12)" in reasons[0]
        assert "return date (2024-01-13)" in reasons[1]

    def test_engulfment_detected(self):
        reasons = find_conflicts("Pi", d(1), d(20), [(d(5), d(10))])
        assert reasons == [
            "Device 'Pi' is already reserved within the chosen period (2024-01-05 - 2024-01-10)"
        ]

    def test_engulfment_ignored_when_disabled(self):
        assert find_conflicts("Pi", d(1), d(20), [(d(5), d(10))], detect_engulfment=False) == []

    def test_reasons_are_capped(self):
        approved = [(d(1), d(3)), (d(5), d(6)), (d(8), d(9)), (d(11), d(12))]
        reasons = find_conflicts("Pi", d(2), d(11), approved)
        assert len(reasons) == MAX_CONFLICT_REASONS


class TestCheckAvailability:
    async def _approved(self, db, user, device, start, end, status=BookingStatus.APPROVED):
        booking = Booking(
            user_id=user.id,
            device_id=device.id,
            from_date=start,
            to_date=end,
            status=status.value,
        )
        db.add(booking)
        await db.commit()
        return booking

    async def test_only_approved_bookings_block(self, db, user, device):
        await self._approved(db, user, device, d(11), d(15), BookingStatus.REQUESTED)
        await self._approved(db, user, device, d(11), d(15), BookingStatus.DENIED)

        assert await check_availability(db, device, d(10), d(12)) == []

    async def test_approved_booking_blocks(self, db, user, device):
        await self._approved(db, user, device, d(11), d(15))

        reasons = await check_availability(db, device, d(10), d(12))
        assert len(reasons) == 1
        assert "return date (2024-01-12)" in reasons[0]

    async def test_excluded_booking_does_not_conflict_with_itself(self, db, user, device):
        booking = await self._approved(db, user, device, d(11), d(15))

        assert await check_availability(db, device, d(11), d(15), exclude_booking_id=booking.id) == []

    async def test_engulfment_follows_settings(self, db, user, device, monkeypatch):
        await self._approved(db, user, device, d(5), d(10))
        assert len(await check_availability(db, device, d(1), d(20))) == 1

        monkeypatch.setattr(settings, "detect_engulfment", False)
        assert await check_availability(db, device, d(1), d(20)) == []

    async def test_date_order_checked_before_store(self, db, device):
        assert await check_availability(db, device, d(5), d(1)) == [DATE_ORDER_REASON]


def test_date_conflict_carries_reasons():
    exc = DateConflict(["a", "b"])
    assert exc.status_code == 400
    assert exc.reasons == ["a", "b"]
    assert exc.errors == ["a", "b"]
    assert exc.detail == "a"
