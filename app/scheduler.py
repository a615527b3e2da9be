"""
Scheduling engine: availability queries, bookings and cancellations.

All slot and meeting state lives in one SchedulingEngine and is only
reached through its methods. A single lock serializes every read and
write, so a booking's check-and-set on a slot can never interleave with
another booking or cancellation, and readers never see half-applied state.

Notifications are dispatched after the lock is released, once the
booking is committed and visible.
"""

from __future__ import annotations

import calendar
import re
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.calendar_store import SlotCalendar
from app.config import config
from app.errors import ConflictError, NotFoundError, ValidationError
from app.logging_config import get_logger
from app.meeting_store import MeetingStore
from app.metrics import booking_conflicts, meetings_booked, meetings_cancelled
from app.models import BookingRequest, Meeting, MeetingStatus, SlotKey
from app.notifications import BookingNotifier, LogOnlyNotifier, build_notifier, notify_booking
from app.time_slots import TIME_LABELS, is_valid_time_label, parse_time_label

logger = get_logger(__name__)

Clock = Callable[[], datetime]
Dispatch = Callable[..., Any]

REQUIRED_BOOKING_FIELDS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "company": "company",
    "date": "date",
    "time": "time",
    "timezone": "timezone",
}

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

SLOT_TAKEN_MESSAGE = "This time slot is no longer available"


def local_now() -> datetime:
    """Current civil time as a naive datetime.

    Uses BUSINESS_TIMEZONE when configured, otherwise the server clock.
    """
    if config.BUSINESS_TIMEZONE:
        return datetime.now(ZoneInfo(config.BUSINESS_TIMEZONE)).replace(tzinfo=None)
    return datetime.now()


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD wire date or raise ValidationError."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _run_inline(fn: Callable[..., Any], *args: Any) -> None:
    fn(*args)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SchedulingEngine:
    """Owns the slot calendar and the meeting store behind one lock."""

    def __init__(
        self,
        clock: Clock = local_now,
        notifier: Optional[BookingNotifier] = None,
        time_labels: tuple[str, ...] = TIME_LABELS,
    ):
        self.clock = clock
        self.notifier = notifier or LogOnlyNotifier()
        self.time_labels = time_labels
        self._calendar = SlotCalendar()
        self._meetings = MeetingStore()
        self._lock = threading.RLock()

    # --- Slot calendar -------------------------------------------------

    def initialize(self, horizon_days: Optional[int] = None) -> int:
        """Seed weekday slots from today over the horizon. Safe to call again."""
        if horizon_days is None:
            horizon_days = config.SLOT_HORIZON_DAYS
        today = self.clock().date()
        with self._lock:
            created = self._calendar.initialize(today, horizon_days, self.time_labels)
            total = len(self._calendar)
        logger.info("slots_initialized", created=created, total=total, horizon_days=horizon_days)
        return created

    def set_available(self, slot_date: date, time_label: str, value: bool) -> bool:
        """Set a slot's flag. Unknown slots are ignored (returns False)."""
        with self._lock:
            return self._calendar.set_available(SlotKey(slot_date, time_label), value)

    def is_available(self, slot_date: date, time_label: str) -> bool:
        with self._lock:
            return self._calendar.is_available(SlotKey(slot_date, time_label))

    def slot_summary(self) -> dict:
        """Slot counts and horizon, for health/info endpoints."""
        with self._lock:
            horizon = self._calendar.horizon()
            slots = list(self._calendar)
        open_slots = sum(1 for s in slots if s.is_available)
        return {
            "total": len(slots),
            "available": open_slots,
            "booked": len(slots) - open_slots,
            "first_date": horizon[0].isoformat() if horizon else None,
            "last_date": horizon[1].isoformat() if horizon else None,
        }

    # --- Availability queries ------------------------------------------

    def list_available_dates(self, year: int, month: int) -> list[date]:
        """Dates in the month with at least one open slot, ascending."""
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month {month}, expected 1-12")
        if not 1 <= year <= 9999:
            raise ValidationError(f"Invalid year {year}")
        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        with self._lock:
            return self._calendar.available_dates_between(first, last)

    def list_available_times(self, slot_date: date) -> list[str]:
        """
        Open time labels for a date, in chronological order.

        Past dates return nothing. For today, only labels strictly after
        the current wall-clock time are returned.
        """
        now = self.clock()
        today = now.date()
        if slot_date < today:
            return []
        with self._lock:
            times = self._calendar.available_times_on(slot_date)
        if slot_date == today:
            current = now.time()
            times = [t for t in times if parse_time_label(t) > current]
        return times

    # --- Booking -------------------------------------------------------

    def _validate_booking(self, request: BookingRequest) -> dict:
        values = {name: _clean(getattr(request, name)) for name in REQUIRED_BOOKING_FIELDS}
        missing = [wire for name, wire in REQUIRED_BOOKING_FIELDS.items() if not values[name]]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        if not _EMAIL_RE.match(values["email"]):
            raise ValidationError(f"Invalid email address '{values['email']}'")

        try:
            ZoneInfo(values["timezone"])
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValidationError(f"Unknown timezone '{values['timezone']}'")

        values["date"] = parse_date(values["date"])
        return values

    def _is_past(self, key: SlotKey) -> bool:
        """Slots that list_available_times would never offer."""
        now = self.clock()
        if key.date != now.date():
            return key.date < now.date()
        return parse_time_label(key.time) <= now.time()

    def _reject(self, key: SlotKey, reason: str) -> None:
        booking_conflicts.inc()
        logger.warning("booking_conflict", date=key.date.isoformat(), time=key.time, reason=reason)
        raise ConflictError(SLOT_TAKEN_MESSAGE)

    def book(self, request: BookingRequest, dispatch: Optional[Dispatch] = None) -> Meeting:
        """
        Book a slot for the requester.

        Raises ValidationError for missing/malformed fields and ConflictError
        when the slot does not exist, has already started or is taken. On success the
        meeting is recorded and the slot closed before notifications are
        handed to `dispatch` (inline when not given). Notification failures
        never affect the booking.
        """
        values = self._validate_booking(request)
        key = SlotKey(values["date"], values["time"])

        if not is_valid_time_label(key.time):
            self._reject(key, "unknown_time_label")
        if self._is_past(key):
            self._reject(key, "slot_in_past")

        with self._lock:
            if not self._calendar.is_available(key):
                self._reject(key, "slot_taken")

            meeting = Meeting.for_slot(
                key,
                id=uuid.uuid4().hex,
                first_name=values["first_name"],
                last_name=values["last_name"],
                email=values["email"],
                phone=_clean(request.phone),
                company=values["company"],
                message=_clean(request.message),
                timezone=values["timezone"],
                status=MeetingStatus.SCHEDULED,
                created_at=datetime.now(timezone.utc),
            )
            self._meetings.add(meeting)
            self._calendar.set_available(key, False)
            booked = meeting.model_copy(deep=True)

        meetings_booked.inc()
        logger.info(
            "meeting_booked",
            meeting_id=booked.id,
            date=key.date.isoformat(),
            time=key.time,
            timezone=booked.timezone,
        )

        try:
            (dispatch or _run_inline)(notify_booking, self.notifier, booked.model_copy(deep=True))
        except Exception as e:
            logger.error("notification_dispatch_failed", meeting_id=booked.id, error=str(e))

        return booked

    # --- Cancellation --------------------------------------------------

    def cancel(self, meeting_id: str) -> Meeting:
        """
        Cancel a meeting and release its slot.

        Cancelling an already-cancelled meeting succeeds again. The slot is
        only released when no other scheduled meeting holds it.
        """
        with self._lock:
            meeting = self._meetings.get(meeting_id)
            if meeting is None:
                raise NotFoundError("Meeting not found")

            repeated = meeting.status == MeetingStatus.CANCELLED
            meeting.status = MeetingStatus.CANCELLED
            if meeting.cancelled_at is None:
                meeting.cancelled_at = datetime.now(timezone.utc)

            holder = self._meetings.scheduled_holder(meeting.slot_key)
            if holder is None:
                self._calendar.set_available(meeting.slot_key, True)
            cancelled = meeting.model_copy(deep=True)

        if not repeated:
            meetings_cancelled.inc()
        logger.info(
            "meeting_cancelled",
            meeting_id=meeting_id,
            repeated=repeated,
            slot_released=holder is None,
        )
        return cancelled

    # --- Admin ---------------------------------------------------------

    def get_meeting(self, meeting_id: str) -> Meeting:
        with self._lock:
            meeting = self._meetings.get(meeting_id)
            if meeting is None:
                raise NotFoundError("Meeting not found")
            return meeting.model_copy(deep=True)

    def list_meetings(self, status: Optional[str] = None) -> list[Meeting]:
        """All meetings sorted by date then chronological time."""
        status_filter = None
        if status:
            try:
                status_filter = MeetingStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid status '{status}', expected scheduled or cancelled")

        with self._lock:
            meetings = [m.model_copy(deep=True) for m in self._meetings.list_meetings(status_filter)]

        return sorted(meetings, key=lambda m: (m.meeting_date, parse_time_label(m.meeting_time)))


_engine: Optional[SchedulingEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> SchedulingEngine:
    """
    Process-wide engine, created and seeded on first use.

    Usage in FastAPI:
        @router.get("/things")
        async def things(engine: SchedulingEngine = Depends(get_engine)):
            ...
    """
    global _engine
    with _engine_lock:
        if _engine is None:
            engine = SchedulingEngine(notifier=build_notifier())
            engine.initialize()
            _engine = engine
        return _engine


def reset_engine() -> None:
    """Drop the process-wide engine (next get_engine() builds a fresh one)."""
    global _engine
    with _engine_lock:
        _engine = None
