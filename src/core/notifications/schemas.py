from pydantic import EmailStr, Field

from src.shared.schemas.base import BaseSchema


class BookingConfirmation(BaseSchema):
    """Payload for the booking confirmation emails (customer + clinic)."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    contact_number: str = Field(..., alias="contactNumber")
    membership: str
    date: str
    time: str
    message: str | None = None


class EmailDelivery(BaseSchema):
    """Outcome of one outbound email. Never raised, only logged and returned."""

    recipient: str
    subject: str
    ok: bool
    provider_id: str | None = None
    error: str | None = None
