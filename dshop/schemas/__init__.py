"""Pydantic schemas for API validation."""

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
from dshop.schemas.device import (
    CategoryListResponse,
    DeviceActionResponse,
    DeviceCreate,
    DeviceDetailResponse,
    DeviceListResponse,
    DeviceResponse,
)
from dshop.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse

__all__ = [
    # Booking
    "BookingCreate",
    "BookingResponse",
    "BookingActionResponse",
    "BookingListResponse",
    "BookingRequestResponse",
    "MyBookingItem",
    "PendingBookingItem",
    "PendingListResponse",
    # Device
    "DeviceCreate",
    "DeviceResponse",
    "DeviceDetailResponse",
    "DeviceListResponse",
    "DeviceActionResponse",
    "CategoryListResponse",
    # User
    "UserLogin",
    "UserCreate",
    "UserResponse",
    "AuthResponse",
]
