"""Schemas for Membership Benefits module."""

from datetime import datetime

from src.shared.schemas.base import BaseSchema


class BenefitRecord(BaseSchema):
    """Membership benefit as read by the export engine."""

    id: int
    membership_type: str
    benefit_name: str
    total_quantity: int
    description: str | None = None
    created_at: datetime | str | None = None


class BenefitClaimRecord(BaseSchema):
    """Benefit claim as read by the export engine."""

    id: int
    member_id: int
    benefit_id: int
    claimed_at: datetime | str
    notes: str | None = None
