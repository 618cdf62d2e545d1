"""Booking model (consultation requests from the public site)."""

from datetime import date
from enum import StrEnum

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import BaseModel


class BookingStatus(StrEnum):
    """Booking status enumeration."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Booking(BaseModel):
    """Consultation booking. Linked to members/patients only by email, never by FK."""

    __tablename__ = "bookings"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_number: Mapped[str] = mapped_column(String(50), nullable=False)
    membership: Mapped[str | None] = mapped_column(String(50), nullable=True)  # tier label or None
    preferred_date: Mapped[date] = mapped_column(Date, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String(20), nullable=False)  # e.g. "10:00 AM"
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingStatus.PENDING.value, index=True
    )
