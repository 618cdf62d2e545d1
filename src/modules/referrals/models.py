"""Referral reward model."""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base, CreatedAtMixin


class ReferralReward(CreatedAtMixin, Base):
    """Reward granted to a referrer when a referred member converts."""

    __tablename__ = "referral_rewards"

    referrer_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True
    )
    referred_member_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("members.id", ondelete="SET NULL"), nullable=True
    )
    reward_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
