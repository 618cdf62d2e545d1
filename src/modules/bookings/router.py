"""API for bookings."""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.notifications import BookingNotifier, get_booking_notifier
from src.modules.bookings.schemas import BookingCreate, BookingResponse
from src.modules.bookings.service import BookingService, build_confirmation
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=ApiResponse[BookingResponse], status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: BookingNotifier = Depends(get_booking_notifier),
):
    """Store a consultation booking. Confirmation emails go out after the response."""
    service = BookingService(db)
    booking = await service.create_booking(data)
    await db.commit()
    background_tasks.add_task(notifier.send_booking_confirmation, build_confirmation(booking))
    return ApiResponse(
        success=True,
        message="Booking created",
        data=BookingResponse.model_validate(booking),
    )
