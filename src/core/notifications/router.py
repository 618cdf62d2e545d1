"""API for sending booking confirmation emails on demand."""

from fastapi import APIRouter, BackgroundTasks, Depends, status

from src.core.notifications.schemas import BookingConfirmation
from src.core.notifications.service import BookingNotifier, get_booking_notifier
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "/booking-confirmation",
    response_model=ApiResponse[None],
    status_code=status.HTTP_202_ACCEPTED,
)
async def send_booking_confirmation(
    data: BookingConfirmation,
    background_tasks: BackgroundTasks,
    notifier: BookingNotifier = Depends(get_booking_notifier),
):
    """Queue the customer confirmation and clinic notification. Does not wait for delivery."""
    background_tasks.add_task(notifier.send_booking_confirmation, data)
    return ApiResponse(success=True, data=None, message="Booking confirmation queued")
