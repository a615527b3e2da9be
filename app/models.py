"""Data models for Corprex Scheduler."""

import enum
from datetime import date, datetime
from typing import NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, PrivateAttr
from pydantic.alias_generators import to_camel


class SlotKey(NamedTuple):
    """Identity of a bookable slot."""
    date: date
    time: str


class MeetingStatus(str, enum.Enum):
    """Meeting status enum."""
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Slot(BaseModel):
    """A bookable (date, time label) unit."""
    date: date
    time: str
    is_available: bool = True


class Meeting(CamelModel):
    """Meeting model representing a booked slot."""
    id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    company: str
    message: Optional[str] = None
    meeting_date: date
    meeting_time: str
    timezone: str
    status: MeetingStatus = MeetingStatus.SCHEDULED
    created_at: datetime
    cancelled_at: Optional[datetime] = None

    # Owned reference into the slot calendar; never serialized.
    _slot_key: Optional[SlotKey] = PrivateAttr(default=None)

    @classmethod
    def for_slot(cls, key: SlotKey, **fields) -> "Meeting":
        """Create a meeting bound to `key`."""
        meeting = cls(meeting_date=key.date, meeting_time=key.time, **fields)
        meeting._slot_key = key
        return meeting

    @property
    def slot_key(self) -> Optional[SlotKey]:
        return self._slot_key

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class BookingRequest(CamelModel):
    """Request model for POST /api/meetings/book.

    Every field is optional at parse time so missing fields are reported
    by the engine as a single validation error.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None


class BookingResponse(CamelModel):
    """Response model for a successful booking."""
    success: bool = True
    meeting_id: str
    message: str


class CancelResponse(CamelModel):
    """Response model for a cancellation."""
    success: bool = True
    message: str


class AvailableDatesResponse(CamelModel):
    available_dates: list[date]


class AvailableTimesResponse(CamelModel):
    available_times: list[str]


class MeetingsResponse(CamelModel):
    meetings: list[Meeting]
