"""Schemas for Members module."""

from datetime import date, datetime
from decimal import Decimal

from src.shared.schemas.base import BaseSchema


class MemberRecord(BaseSchema):
    """Member as read by the export engine."""

    id: int
    name: str
    email: str
    membership_type: str
    status: str
    created_at: datetime | str
    updated_at: datetime | str
    referral_count: int = 0
    # Optional
    phone: str | None = None
    membership_start_date: date | str | None = None
    membership_expiry_date: date | str | None = None
    referral_code: str | None = None
    referred_by: str | None = None
    payment_method: str | None = None
    amount_paid: Decimal | None = None
