"""Schemas for Bookings module."""

from datetime import date, datetime

from pydantic import EmailStr, Field

from src.modules.bookings.models import BookingStatus
from src.shared.schemas.base import BaseSchema


class BookingRecord(BaseSchema):
    """Booking as read by the export engine."""

    id: int
    name: str
    email: str
    contact_number: str
    preferred_date: date | str
    preferred_time: str
    status: str
    created_at: datetime | str
    updated_at: datetime | str
    # Optional
    membership: str | None = None
    message: str | None = None


class BookingCreate(BaseSchema):
    """Schema for creating a booking from the public booking form."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    contact_number: str = Field(..., min_length=5, max_length=50)
    membership: str | None = Field(None, max_length=50)
    preferred_date: date
    preferred_time: str = Field(..., min_length=1, max_length=20)
    message: str | None = None


class BookingResponse(BaseSchema):
    """Schema for booking response."""

    id: int
    name: str
    email: str
    contact_number: str
    membership: str | None
    preferred_date: date
    preferred_time: str
    message: str | None
    status: BookingStatus
    created_at: datetime
