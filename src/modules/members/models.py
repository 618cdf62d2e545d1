"""Member model (paid memberships and the referral program)."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import BaseModel


class MemberStatus(StrEnum):
    """Member status enumeration."""

    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING = "pending"


class MembershipTier(StrEnum):
    """Membership tiers. Stored as free text; compare case-insensitively."""

    GREEN = "Green"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class Member(BaseModel):
    """Clinic member.

    referral_code is the member's own token; referred_by holds another
    member's referral_code (self-referential, not a FK).
    """

    __tablename__ = "members"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    membership_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MemberStatus.PENDING.value, index=True
    )
    membership_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    membership_expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Referral program
    referral_code: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    referred_by: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    referral_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Payment
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    amount_paid: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
