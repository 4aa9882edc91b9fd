"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dshop.schemas.device import DeviceResponse

# Accepted request date layouts; ISO datetimes are cut to their date part
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


def parse_booking_date(value: Any) -> Any:
    """Coerce request input to a calendar date (time of day is dropped)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            text = text.split("T", 1)[0]
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Invalid date '{value}'")
    return value


class BookingCreate(BaseModel):
    """Schema for requesting a booking."""

    model_config = ConfigDict(populate_by_name=True)

    device: str | None = None
    from_date: date | None = Field(None, alias="from")
    to_date: date | None = Field(None, alias="to")

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> Any:
        return parse_booking_date(v)


class BookingResponse(BaseModel):
    """Schema for booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    device_id: UUID

    # Dates
    from_date: date = Field(
        validation_alias=AliasChoices("from_date", "from"), serialization_alias="from"
    )
    to_date: date = Field(validation_alias=AliasChoices("to_date", "to"), serialization_alias="to")

    # Status
    status: str
    pending: bool
    accepted: bool

    # Timestamps
    created_at: datetime
    updated_at: datetime


class MyBookingItem(BaseModel):
    """A confirmed booking as shown to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    device: DeviceResponse
    from_date: date = Field(
        validation_alias=AliasChoices("from_date", "from"), serialization_alias="from"
    )
    to_date: date = Field(validation_alias=AliasChoices("to_date", "to"), serialization_alias="to")


class PendingBookingItem(BaseModel):
    """A requested booking as shown to administrators."""

    id: UUID
    name: str  # device name
    user: str  # requester's full name
    from_date: date = Field(
        validation_alias=AliasChoices("from_date", "from"), serialization_alias="from"
    )
    to_date: date = Field(validation_alias=AliasChoices("to_date", "to"), serialization_alias="to")


class BookingListResponse(BaseModel):
    bookings: list[MyBookingItem]
    success: str


class PendingListResponse(BaseModel):
    bookings: list[PendingBookingItem]
    success: str


class BookingRequestResponse(BaseModel):
    """Confirmation returned after a booking request."""

    id: UUID
    message: str
    success: str


class BookingActionResponse(BaseModel):
    """Booking record returned after a decision or a close."""

    booking: BookingResponse
    success: str
