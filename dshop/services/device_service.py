"""Device catalogue service."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dshop.core.exceptions import NotFoundError, ValidationError
from dshop.core.locks import device_locks
from dshop.core.permissions import assert_admin
from dshop.models.device import NOT_SPECIFIED, Device
from dshop.models.user import User

logger = logging.getLogger(__name__)

DESCRIPTIVE_FIELDS = ("category", "model", "ram", "os")


class DeviceService:
    """Service for listing and managing devices."""

    async def list_devices(
        self,
        db: AsyncSession,
        name: str | None = None,
        category: str | None = None,
    ) -> list[Device]:
        """List devices, optionally filtered by exact name and/or category.

        Empty filter values are ignored. Raises NotFoundError when nothing
        matches.
        """
        query = select(Device).options(selectinload(Device.bookings), selectinload(Device.users))
        if name:
            query = query.where(Device.name == name.strip())
        if category:
            query = query.where(Device.category == category)
        query = query.order_by(Device.name).execution_options(populate_existing=True)

        result = await db.execute(query)
        devices = list(result.scalars().all())
        if not devices:
            raise NotFoundError("Device")
        return devices

    async def list_categories(self, db: AsyncSession) -> list[str]:
        """Distinct device categories, alphabetically."""
        result = await db.execute(select(Device.category).distinct().order_by(Device.category))
        categories = [c for c in result.scalars().all() if c]
        if not categories:
            raise NotFoundError("Categories")
        return categories

    async def create_device(
        self,
        db: AsyncSession,
        admin: User,
        name: str,
        **details: str | None,
    ) -> Device:
        """Add a device; names are unique, blank details become 'Not specified'."""
        assert_admin(admin)

        name = name.strip()
        if not name:
            raise ValidationError("Device name has not been provided")

        result = await db.execute(select(Device).where(Device.name == name))
        existing = result.scalar_one_or_none()
        if existing:
            raise ValidationError(f"Device '{existing.name}' is already added.")

        values = {}
        for field in DESCRIPTIVE_FIELDS:
            value = details.get(field)
            values[field] = value.strip() if value and value.strip() else NOT_SPECIFIED

        device = Device(name=name, **values)
        device.bookings = []
        device.users = []
        db.add(device)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info(f"Device '{name}' was added concurrently")
            raise ValidationError(f"Device '{name}' is already added.")

        logger.info(f"Device '{device.name}' created by admin {admin.id}")
        return device

    async def delete_device(self, db: AsyncSession, admin: User, name: str) -> Device:
        """Delete a device by name together with its bookings."""
        assert_admin(admin)

        result = await db.execute(
            select(Device)
            .options(selectinload(Device.bookings), selectinload(Device.users))
            .where(Device.name == name)
            .execution_options(populate_existing=True)
        )
        device = result.scalar_one_or_none()
        if not device:
            raise NotFoundError("Device", name)

        async with device_locks.hold(device.id):
            await db.delete(device)
            await db.commit()
        device_locks.discard(device.id)

        logger.info(
            f"Device '{device.name}' deleted by admin {admin.id} "
            f"({len(device.bookings)} bookings removed)"
        )
        return device


# Singleton instance
device_service = DeviceService()
