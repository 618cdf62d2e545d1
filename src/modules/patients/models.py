"""Patient record model."""

from datetime import date
from enum import StrEnum

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import BaseModel


class PatientSource(StrEnum):
    """Where the patient record originated."""

    BOOKING = "booking"
    MEMBERSHIP = "membership"
    MANUAL = "manual"


class PatientRecord(BaseModel):
    """Patient chart. Linked to bookings/members by email only."""

    __tablename__ = "patient_records"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    emergency_contact: Mapped[str | None] = mapped_column(String(200), nullable=True)
    membership: Mapped[str | None] = mapped_column(String(50), nullable=True)
    membership_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    source: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PatientSource.MANUAL.value, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
