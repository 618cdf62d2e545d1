"""Membership benefit and benefit claim models."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base, BigIntPK, CreatedAtMixin


class MembershipBenefit(CreatedAtMixin, Base):
    """Benefit allotted to every member of a tier (e.g. Gold: 4 facials)."""

    __tablename__ = "membership_benefits"

    membership_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    benefit_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class MemberBenefitClaim(Base):
    """One unit of a benefit consumed by a member."""

    __tablename__ = "member_benefit_claims"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    benefit_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("membership_benefits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    claimed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
