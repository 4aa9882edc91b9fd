"""User-related Pydantic schemas."""

import re
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from dshop.config import settings
from dshop.models.user import normalize_email
from dshop.schemas.booking import MyBookingItem


def _validate_company_email(v: str) -> str:
    v = normalize_email(v)
    if settings.allowed_email_pattern and not re.match(
        settings.allowed_email_pattern, v, flags=re.IGNORECASE
    ):
        raise ValueError("Enter your company e-mail address.")
    return v


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_company_email(v)


class UserCreate(UserLogin):
    """Schema for user registration."""

    first_name: str = Field(..., min_length=2, max_length=255)
    last_name: str = Field(..., min_length=2, max_length=255)


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str
    last_name: str
    is_admin: bool


class AuthResponse(BaseModel):
    """Token plus profile and confirmed bookings."""

    token: str
    user: UserResponse
    bookings: list[MyBookingItem]
    success: str
