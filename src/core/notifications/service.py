"""Booking confirmation emails sent through the Resend HTTP API."""

import asyncio
from datetime import date
from pathlib import Path

import httpx
from jinja2 import Environment, FileSystemLoader
from loguru import logger

from src.core.config import settings
from src.core.notifications.schemas import BookingConfirmation, EmailDelivery

TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates" / "email"
CUSTOMER_SUBJECT = "Your Consultation Booking is Confirmed! ✨"
REQUEST_TIMEOUT_SECONDS = 10.0


class BookingNotifier:
    """
    Sends two independent emails per booking: a confirmation to the customer
    and a notification to the clinic operator address.

    Fire-and-forget: failures are logged and reported in the returned
    deliveries, never raised to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        operator_email: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = settings.resend_api_key if api_key is None else api_key
        self.api_url = api_url or settings.resend_api_url
        self.operator_email = operator_email or settings.clinic_notification_email
        self._transport = transport
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )

    def render_customer_email(self, booking: BookingConfirmation) -> tuple[str, str]:
        """Subject and HTML for the customer confirmation."""
        template = self._env.get_template("booking_confirmation.html")
        html = template.render(booking=booking, clinic=settings.clinic_info, year=date.today().year)
        return CUSTOMER_SUBJECT, html

    def render_clinic_email(self, booking: BookingConfirmation) -> tuple[str, str]:
        """Subject and HTML for the clinic operator notification."""
        template = self._env.get_template("booking_notification.html")
        subject = f"New Booking: {booking.name} - {booking.date} at {booking.time}"
        return subject, template.render(booking=booking)

    async def _send(
        self,
        client: httpx.AsyncClient,
        sender: str,
        recipient: str,
        subject: str,
        html: str,
    ) -> EmailDelivery:
        try:
            response = await client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"from": sender, "to": [recipient], "subject": subject, "html": html},
            )
            response.raise_for_status()
            provider_id = response.json().get("id")
        except Exception as e:
            logger.error("Email to {} failed: {!r}", recipient, e)
            return EmailDelivery(recipient=recipient, subject=subject, ok=False, error=str(e))
        logger.info("Email sent to {} (id={})", recipient, provider_id)
        return EmailDelivery(recipient=recipient, subject=subject, ok=True, provider_id=provider_id)

    async def send_booking_confirmation(self, booking: BookingConfirmation) -> list[EmailDelivery]:
        """Send both emails concurrently. Returns [customer, clinic] deliveries."""
        customer_subject, customer_html = self.render_customer_email(booking)
        clinic_subject, clinic_html = self.render_clinic_email(booking)

        if not self.api_key:
            logger.warning("RESEND_API_KEY is not set; booking emails for {} not sent", booking.email)
            return [
                EmailDelivery(recipient=booking.email, subject=customer_subject, ok=False, error="not configured"),
                EmailDelivery(recipient=self.operator_email, subject=clinic_subject, ok=False, error="not configured"),
            ]

        logger.info("Sending booking confirmation to: {}", booking.email)
        async with httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT_SECONDS) as client:
            deliveries = await asyncio.gather(
                self._send(client, settings.notification_sender, booking.email, customer_subject, customer_html),
                self._send(client, settings.booking_system_sender, self.operator_email, clinic_subject, clinic_html),
            )
        return list(deliveries)


def get_booking_notifier() -> BookingNotifier:
    """Dependency for routes that schedule booking emails."""
    return BookingNotifier()
