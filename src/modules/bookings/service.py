"""Service for bookings."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.notifications.schemas import BookingConfirmation
from src.modules.bookings.models import Booking, BookingStatus
from src.modules.bookings.schemas import BookingCreate
from src.modules.exports.sheets import NON_MEMBER


class BookingService:
    """Create bookings submitted from the public booking form."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(self, data: BookingCreate) -> Booking:
        booking = Booking(
            name=data.name.strip(),
            email=str(data.email),
            contact_number=data.contact_number.strip(),
            membership=data.membership or None,
            preferred_date=data.preferred_date,
            preferred_time=data.preferred_time,
            message=data.message or None,
            status=BookingStatus.PENDING.value,
        )
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return booking


def build_confirmation(booking: Booking) -> BookingConfirmation:
    """Email payload for a stored booking."""
    return BookingConfirmation(
        name=booking.name,
        email=booking.email,
        contact_number=booking.contact_number,
        membership=booking.membership or NON_MEMBER,
        date=booking.preferred_date.isoformat(),
        time=booking.preferred_time,
        message=booking.message,
    )
