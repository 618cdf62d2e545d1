"""Payment transaction model."""

from decimal import Decimal
from enum import StrEnum

from sqlalchemy import BigInteger, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base, CreatedAtMixin


class TransactionPaymentStatus(StrEnum):
    """Payment status enumeration. Only COMPLETED counts as revenue."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class TransactionType(StrEnum):
    MEMBERSHIP = "membership"
    RENEWAL = "renewal"
    SERVICE = "service"


class Transaction(CreatedAtMixin, Base):
    """Payment by (or for) a member. Append-only, no updated_at."""

    __tablename__ = "transactions"

    member_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TransactionPaymentStatus.PENDING.value, index=True
    )
    transaction_type: Mapped[str] = mapped_column(String(30), nullable=False)
    stripe_payment_intent_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
