"""Booking lifecycle service.

Owns the request → approve/deny → close transitions and keeps the
user/device/booking graph consistent. Every mutating operation commits once,
and the check-then-write sequences hold the device's lock until that commit.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dshop.config import settings
from dshop.core.exceptions import DateConflict, NotFoundError, ValidationError
from dshop.core.locks import DeviceLockRegistry, device_locks
from dshop.core.permissions import assert_admin
from dshop.domain.booking_state import BookingStatus, assert_booking_transition
from dshop.models.booking import Booking
from dshop.models.device import Device, device_users
from dshop.models.user import User
from dshop.services.availability_service import check_availability

logger = logging.getLogger(__name__)


class BookingService:
    """Service implementing the booking lifecycle."""

    def __init__(self, locks: DeviceLockRegistry | None = None):
        self.locks = locks or device_locks

    async def _lock_device_row(self, db: AsyncSession, device_id: UUID) -> None:
        """Take the database row lock on a device for this transaction."""
        await db.execute(select(Device.id).where(Device.id == device_id).with_for_update())

    async def request(
        self,
        db: AsyncSession,
        user: User,
        device_name: str | None,
        from_date: date | None,
        to_date: date | None,
    ) -> tuple[Booking, str]:
        """Request a booking of a device for an inclusive date range.

        Args:
            db: Database session
            user: Requesting user
            device_name: Name of the device to book
            from_date: First day of the reservation
            to_date: Last day of the reservation

        Returns:
            The created booking (requested state) and a confirmation message

        Raises:
            ValidationError: Device or dates missing
            NotFoundError: No device with that name
            DateConflict: The range collides with an approved booking
        """
        errors = []
        if not device_name or not device_name.strip():
            errors.append("Device has not been selected")
        if from_date is None or to_date is None:
            errors.append("Booking dates have not been provided")
        if errors:
            raise ValidationError(errors=errors)

        device_name = device_name.strip()
        result = await db.execute(select(Device).where(Device.name == device_name))
        device = result.scalar_one_or_none()
        if not device:
            raise NotFoundError("Device", device_name)

        async with self.locks.hold(device.id):
            await self._lock_device_row(db, device.id)

            reasons = await check_availability(db, device, from_date, to_date)
            if reasons:
                logger.info(
                    f"Booking request by {user.id} for '{device.name}' "
                    f"[{from_date} - {to_date}] rejected: {reasons}"
                )
                raise DateConflict(reasons)

            booking = Booking(
                user_id=user.id,
                device_id=device.id,
                from_date=from_date,
                to_date=to_date,
                status=BookingStatus.REQUESTED.value,
            )
            db.add(booking)

            # Each user is recorded once per device
            known = await db.scalar(
                select(device_users.c.user_id).where(
                    device_users.c.device_id == device.id,
                    device_users.c.user_id == user.id,
                )
            )
            if known is None:
                await db.execute(insert(device_users).values(device_id=device.id, user_id=user.id))

            await db.commit()

        logger.info(
            f"Booking {booking.id} requested by {user.id} for '{device.name}' "
            f"[{from_date} - {to_date}]"
        )
        return booking, f'Your booking request for "{device.name}" has been sent to the admins'

    async def decide(
        self,
        db: AsyncSession,
        admin: User,
        booking_id: UUID,
        approve: bool,
    ) -> tuple[Booking, str]:
        """Approve or deny a requested booking.

        Approval re-runs the availability check (excluding the booking itself)
        unless ``settings.recheck_conflicts_on_approve`` is off, in which case
        the check done at request time is trusted.
        """
        assert_admin(admin)

        result = await db.execute(select(Booking.device_id).where(Booking.id == booking_id))
        device_id = result.scalar_one_or_none()
        if device_id is None:
            raise NotFoundError("Booking", str(booking_id))

        async with self.locks.hold(device_id):
            await self._lock_device_row(db, device_id)

            result = await db.execute(
                select(Booking)
                .options(selectinload(Booking.device))
                .where(Booking.id == booking_id)
                .execution_options(populate_existing=True)
            )
            booking = result.scalar_one_or_none()
            if not booking:
                raise NotFoundError("Booking", str(booking_id))

            target = BookingStatus.APPROVED if approve else BookingStatus.DENIED
            assert_booking_transition(booking.status, target.value)

            if approve and settings.recheck_conflicts_on_approve:
                reasons = await check_availability(
                    db,
                    booking.device,
                    booking.from_date,
                    booking.to_date,
                    exclude_booking_id=booking.id,
                )
                if reasons:
                    logger.info(f"Approval of booking {booking.id} rejected: {reasons}")
                    raise DateConflict(reasons)

            booking.status = target.value
            await db.commit()

        logger.info(f"Booking {booking.id} {target.value} by admin {admin.id}")
        message = "Request has been approved" if approve else "Request has been denied"
        return booking, message

    async def list_mine(
        self,
        db: AsyncSession,
        user: User,
        booking_id: UUID | None = None,
    ) -> list[Booking]:
        """List the user's approved bookings with their devices."""
        query = (
            select(Booking)
            .options(selectinload(Booking.device))
            .where(
                Booking.user_id == user.id,
                Booking.status == BookingStatus.APPROVED.value,
            )
        )
        if booking_id is not None:
            query = query.where(Booking.id == booking_id)
        query = query.order_by(Booking.from_date)

        result = await db.execute(query)
        bookings = list(result.scalars().all())
        if booking_id is not None and not bookings:
            raise NotFoundError("Booking")
        return bookings

    async def list_pending(
        self,
        db: AsyncSession,
        admin: User,
        booking_id: UUID | None = None,
    ) -> list[Booking]:
        """List all requested bookings with their requester and device."""
        assert_admin(admin)

        query = (
            select(Booking)
            .options(selectinload(Booking.device), selectinload(Booking.user))
            .where(Booking.status == BookingStatus.REQUESTED.value)
        )
        if booking_id is not None:
            query = query.where(Booking.id == booking_id)
        query = query.order_by(Booking.created_at)

        result = await db.execute(query)
        bookings = list(result.scalars().all())
        if booking_id is not None and not bookings:
            raise NotFoundError("Booking")
        return bookings

    async def close(
        self,
        db: AsyncSession,
        user: User,
        booking_id: UUID,
    ) -> tuple[Booking, str]:
        """Return a device: delete the user's approved booking.

        Bookings owned by someone else are reported as not found. The row is
        removed in a single commit, which drops it from both the user's and
        the device's booking sets. Closes of the same device are serialized,
        so a repeated close finds nothing and fails with NotFoundError.
        """
        owned = (Booking.id == booking_id, Booking.user_id == user.id)

        result = await db.execute(select(Booking.device_id).where(*owned))
        device_id = result.scalar_one_or_none()
        if device_id is None:
            raise NotFoundError("Booking", str(booking_id))

        async with self.locks.hold(device_id):
            await self._lock_device_row(db, device_id)

            result = await db.execute(
                select(Booking)
                .options(selectinload(Booking.device))
                .where(*owned)
                .execution_options(populate_existing=True)
            )
            booking = result.scalar_one_or_none()
            if not booking:
                raise NotFoundError("Booking", str(booking_id))

            assert_booking_transition(booking.status, BookingStatus.CLOSED.value)

            device_name = booking.device.name
            await db.delete(booking)
            await db.commit()

        logger.info(f"Booking {booking_id} of '{device_name}' closed by {user.id}")
        return booking, f'Booking of device "{device_name}" has been successfully deleted'


# Singleton instance
booking_service = BookingService()
