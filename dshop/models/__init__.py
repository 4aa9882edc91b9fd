"""Database models."""

from dshop.models.booking import Booking
from dshop.models.device import Device, device_users
from dshop.models.user import User

__all__ = [
    "User",
    "Device",
    "device_users",
    "Booking",
]
