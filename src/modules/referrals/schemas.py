"""Schemas for Referral Rewards module."""

from datetime import datetime

from src.shared.schemas.base import BaseSchema


class ReferralRewardRecord(BaseSchema):
    """Referral reward as read by the export engine. Only counted, never joined."""

    id: int
    created_at: datetime | str
    referrer_id: int | None = None
    referred_member_id: int | None = None
    reward_type: str | None = None
    status: str | None = None
