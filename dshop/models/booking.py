"""Booking-related database models."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from dshop.database import Base
from dshop.domain.booking_state import BookingStatus, accepted_flag, pending_flag
from dshop.models.user import utcnow

if TYPE_CHECKING:
    from dshop.models.device import Device
    from dshop.models.user import User


class Booking(Base):
    """A user's reservation of one device for an inclusive date range."""

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("from_date <= to_date", name="ck_bookings_date_order"),
        Index("ix_bookings_device_status", "device_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    device_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("devices.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Dates (inclusive on both ends)
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Status
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingStatus.REQUESTED.value, index=True
    )  # requested, approved, denied

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="bookings")
    device: Mapped["Device"] = relationship("Device", back_populates="bookings")

    @property
    def pending(self) -> bool:
        return pending_flag(self.status)

    @property
    def accepted(self) -> bool:
        return accepted_flag(self.status)
