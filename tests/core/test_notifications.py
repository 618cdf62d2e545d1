"""Tests for booking confirmation emails (Resend API mocked with httpx.MockTransport)."""

import json

import httpx
from httpx import AsyncClient

from src.core.notifications import BookingConfirmation, BookingNotifier

API_URL = "https://resend.test/emails"


def _booking(**kwargs) -> BookingConfirmation:
    data = {
        "name": "Rica Dizon",
        "email": "rica@example.com",
        "contactNumber": "+639221234506",
        "membership": "Gold",
        "date": "2026-03-10",
        "time": "2:00 PM",
        "message": "First consultation",
    }
    data.update(kwargs)
    return BookingConfirmation.model_validate(data)


def _notifier(handler, api_key: str | None = "re_test") -> BookingNotifier:
    return BookingNotifier(
        api_key=api_key,
        api_url=API_URL,
        operator_email="clinic@example.com",
        transport=httpx.MockTransport(handler),
    )


class TestRendering:
    def test_customer_email(self):
        notifier = _notifier(lambda request: httpx.Response(200, json={}))
        subject, html = notifier.render_customer_email(_booking())
        assert "Confirmed" in subject
        assert "Rica Dizon" in html
        assert "2026-03-10" in html
        assert "2:00 PM" in html

    def test_clinic_email(self):
        notifier = _notifier(lambda request: httpx.Response(200, json={}))
        subject, html = notifier.render_clinic_email(_booking())
        assert subject == "New Booking: Rica Dizon - 2026-03-10 at 2:00 PM"
        assert "+639221234506" in html
        assert "First consultation" in html

    def test_html_is_escaped(self):
        notifier = _notifier(lambda request: httpx.Response(200, json={}))
        _, html = notifier.render_clinic_email(_booking(message="<script>alert(1)</script>"))
        assert "<script>" not in html


class TestSendBookingConfirmation:
    async def test_sends_customer_and_clinic_emails(self):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "Bearer re_test"
            payload = json.loads(request.content)
            sent.append(payload)
            return httpx.Response(200, json={"id": f"email_{len(sent)}"})

        deliveries = await _notifier(handler).send_booking_confirmation(_booking())

        assert [d.recipient for d in deliveries] == ["rica@example.com", "clinic@example.com"]
        assert all(d.ok for d in deliveries)
        assert {tuple(p["to"]) for p in sent} == {("rica@example.com",), ("clinic@example.com",)}

    async def test_one_failure_does_not_block_the_other(self):
        def handler(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            if payload["to"] == ["rica@example.com"]:
                return httpx.Response(422, json={"message": "invalid recipient"})
            return httpx.Response(200, json={"id": "email_clinic"})

        customer, clinic = await _notifier(handler).send_booking_confirmation(_booking())

        assert customer.ok is False
        assert customer.error
        assert clinic.ok is True
        assert clinic.provider_id == "email_clinic"

    async def test_transport_error_is_reported_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route")

        deliveries = await _notifier(handler).send_booking_confirmation(_booking())
        assert [d.ok for d in deliveries] == [False, False]

    async def test_not_configured(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        deliveries = await _notifier(handler, api_key="").send_booking_confirmation(_booking())
        assert calls == []
        assert all(d.error == "not configured" for d in deliveries)


class TestBookingConfirmationEndpoint:
    async def test_accepted(self, client: AsyncClient, notifier):
        response = await client.post(
            "/api/v1/notifications/booking-confirmation",
            json={
                "name": "Rica Dizon",
                "email": "rica@example.com",
                "contactNumber": "+639221234506",
                "membership": "Non-member",
                "date": "2026-03-10",
                "time": "2:00 PM",
            },
        )
        assert response.status_code == 202
        assert response.json()["success"] is True
        assert notifier.sent[0].name == "Rica Dizon"

    async def test_invalid_payload(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/notifications/booking-confirmation",
            json={"name": "Rica", "email": "nope"},
        )
        assert response.status_code == 422
