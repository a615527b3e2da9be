"""Booking confirmation notifications.

Flow:
- A booking commits in the scheduling engine
- The engine hands `notify_booking` to a dispatcher (FastAPI background task)
- The notifier sends one email to the booker and one to the operator

Delivery is done by an external HTTP email API. When it is not configured,
messages are only logged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from app.config import config
from app.logging_config import get_logger
from app.metrics import notifications_failed
from app.models import Meeting

logger = get_logger(__name__)


def _describe_slot(meeting: Meeting) -> str:
    day = meeting.meeting_date.strftime("%A, %B %d, %Y")
    return f"{day} at {meeting.meeting_time} ({meeting.timezone})"


def build_booker_email(meeting: Meeting, sender: str) -> Dict[str, Any]:
    """Confirmation sent to the person who booked."""
    lines = [
        f"Hi {meeting.first_name},",
        "",
        f"Your meeting with Corprex is confirmed for {_describe_slot(meeting)}.",
        "",
        f"Meeting ID: {meeting.id}",
        f"To cancel, use: {config.BASE_URL}/api/meetings/{meeting.id}/cancel",
    ]
    return {
        "from": sender,
        "to": meeting.email,
        "subject": "Your meeting with Corprex is confirmed",
        "text": "\n".join(lines),
    }


def build_operator_email(meeting: Meeting, sender: str, operator: str) -> Dict[str, Any]:
    """Alert sent to the operator inbox for every new booking."""
    lines = [
        f"New meeting booked for {_describe_slot(meeting)}.",
        "",
        f"Name: {meeting.full_name}",
        f"Email: {meeting.email}",
        f"Phone: {meeting.phone or '-'}",
        f"Company: {meeting.company}",
        f"Message: {meeting.message or '-'}",
        f"Meeting ID: {meeting.id}",
    ]
    return {
        "from": sender,
        "to": operator,
        "subject": f"[New booking] {meeting.full_name} ({meeting.company})",
        "text": "\n".join(lines),
    }


class BookingNotifier:
    """Sends booking confirmations. Subclasses raise on delivery failure."""

    def send_booking_confirmation(self, meeting: Meeting) -> None:
        raise NotImplementedError


class LogOnlyNotifier(BookingNotifier):
    """Used when no email API is configured."""

    def send_booking_confirmation(self, meeting: Meeting) -> None:
        logger.info(
            "email_not_configured",
            meeting_id=meeting.id,
            would_email=[meeting.email, config.OPERATOR_EMAIL],
        )


class EmailApiNotifier(BookingNotifier):
    """Posts messages as JSON to an HTTP email API with a bearer key."""

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        sender: str = "scheduler@corprex.com",
        operator_email: str = "",
        timeout_s: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.operator_email = operator_email
        self.timeout_s = timeout_s
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def send_booking_confirmation(self, meeting: Meeting) -> None:
        messages = [build_booker_email(meeting, self.sender)]
        if self.operator_email:
            messages.append(build_operator_email(meeting, self.sender, self.operator_email))

        with httpx.Client(timeout=self.timeout_s, transport=self._transport) as client:
            for message in messages:
                resp = client.post(self.api_url, json=message, headers=self._headers())
                resp.raise_for_status()
                logger.info("email_sent", meeting_id=meeting.id, to=message["to"])


def build_notifier() -> BookingNotifier:
    """Pick the notifier from configuration."""
    if not config.has_email_config():
        return LogOnlyNotifier()
    return EmailApiNotifier(
        api_url=config.EMAIL_API_URL,
        api_key=config.EMAIL_API_KEY,
        sender=config.EMAIL_FROM,
        operator_email=config.OPERATOR_EMAIL,
        timeout_s=config.EMAIL_TIMEOUT_SECONDS,
    )


def notify_booking(notifier: BookingNotifier, meeting: Meeting) -> bool:
    """
    Send booking confirmations without ever raising.

    Returns True if the notifier succeeded. A failure is logged and counted;
    the booking itself is already committed and stays that way.
    """
    try:
        notifier.send_booking_confirmation(meeting)
        return True
    except Exception as e:
        notifications_failed.inc()
        logger.error("notification_failed", meeting_id=meeting.id, error=str(e))
        return False
