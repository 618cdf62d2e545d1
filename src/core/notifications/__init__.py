from src.core.notifications.schemas import BookingConfirmation, EmailDelivery
from src.core.notifications.service import BookingNotifier, get_booking_notifier

__all__ = ["BookingConfirmation", "EmailDelivery", "BookingNotifier", "get_booking_notifier"]
