"""Schemas for Transactions module."""

from datetime import datetime
from decimal import Decimal

from src.shared.schemas.base import BaseSchema


class TransactionRecord(BaseSchema):
    """Transaction as read by the export engine."""

    id: int
    amount: Decimal
    payment_method: str
    payment_status: str
    transaction_type: str
    created_at: datetime | str
    # Optional
    member_id: int | None = None  # may dangle if the member was deleted
    description: str | None = None
    currency: str | None = None
    stripe_payment_intent_id: str | None = None
