"""Device catalogue models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from dshop.database import Base
from dshop.models.user import utcnow

if TYPE_CHECKING:
    from dshop.models.booking import Booking
    from dshop.models.user import User

NOT_SPECIFIED = "Not specified"

# Users who have ever requested a device
device_users = Table(
    "device_users",
    Base.metadata,
    Column("device_id", Uuid, ForeignKey("devices.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Device(Base):
    """A shared physical device that can be reserved."""

    __tablename__ = "devices"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Descriptive fields
    category: Mapped[str] = mapped_column(String(255), nullable=False, default=NOT_SPECIFIED)
    model: Mapped[str] = mapped_column(String(255), nullable=False, default=NOT_SPECIFIED)
    ram: Mapped[str] = mapped_column(String(255), nullable=False, default=NOT_SPECIFIED)
    os: Mapped[str] = mapped_column(String(255), nullable=False, default=NOT_SPECIFIED)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="device", cascade="all, delete-orphan"
    )
    users: Mapped[list["User"]] = relationship("User", secondary=device_users)
