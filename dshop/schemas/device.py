"""Device-related Pydantic schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceCreate(BaseModel):
    """Schema for adding a device."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=255)
    model: str | None = Field(None, max_length=255)
    ram: str | None = Field(None, max_length=255)
    os: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Device name has not been provided")
        return v


class DeviceResponse(BaseModel):
    """Schema for device response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    model: str
    ram: str
    os: str
    created_at: datetime
    updated_at: datetime


class DeviceDetailResponse(DeviceResponse):
    """Device with the ids of its bookings and historical users."""

    bookings: list[UUID] = []
    users: list[UUID] = []

    @field_validator("bookings", "users", mode="before")
    @classmethod
    def to_ids(cls, v: Any) -> list[Any]:
        return [getattr(item, "id", item) for item in v or []]


class DeviceListResponse(BaseModel):
    devices: list[DeviceDetailResponse]
    success: str


class DeviceActionResponse(BaseModel):
    device: DeviceDetailResponse
    success: str


class CategoryListResponse(BaseModel):
    categories: list[str]
    success: str
