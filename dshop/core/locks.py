"""Per-device serialization for check-then-write sequences."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID


class DeviceLockRegistry:
    """In-process registry handing out one asyncio lock per device.

    Only serializes coroutines inside one worker process. Callers also take a
    row lock on the device (``SELECT ... FOR UPDATE``) in the same transaction
    so that separate workers queue up on the database.
    """

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}

    def get(self, device_id: UUID) -> asyncio.Lock:
        """Return the lock for a device, creating it on first use."""
        lock = self._locks.get(device_id)
        if lock is None:
            lock = self._locks[device_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, device_id: UUID) -> AsyncIterator[None]:
        """Hold the device's lock for the duration of the block."""
        async with self.get(device_id):
            yield

    def discard(self, device_id: UUID) -> None:
        """Forget a device's lock (after the device is deleted)."""
        lock = self._locks.get(device_id)
        if lock is not None and not lock.locked():
            del self._locks[device_id]


# Global registry instance
device_locks = DeviceLockRegistry()
