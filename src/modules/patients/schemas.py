"""Schemas for Patient Records module."""

from datetime import date, datetime

from src.shared.schemas.base import BaseSchema


class PatientRecordRow(BaseSchema):
    """Patient record as read by the export engine."""

    id: int
    name: str
    email: str
    source: str
    created_at: datetime | str
    updated_at: datetime | str
    # Optional
    contact_number: str | None = None
    date_of_birth: date | str | None = None
    age: int | None = None
    gender: str | None = None
    emergency_contact: str | None = None
    membership: str | None = None
    membership_status: str | None = None
    notes: str | None = None
