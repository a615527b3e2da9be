"""In-memory storage for meetings."""

from typing import Optional
from app.models import Meeting, MeetingStatus, SlotKey


class MeetingStore:
    """Meeting records keyed by meeting ID. Records are never deleted."""

    def __init__(self):
        self._meetings: dict[str, Meeting] = {}

    def __len__(self) -> int:
        return len(self._meetings)

    def add(self, meeting: Meeting) -> Meeting:
        if meeting.id in self._meetings:
            raise KeyError(f"Meeting {meeting.id} already exists")
        self._meetings[meeting.id] = meeting
        return meeting

    def get(self, meeting_id: str) -> Optional[Meeting]:
        """Get a meeting by ID."""
        return self._meetings.get(meeting_id)

    def list_meetings(self, status: Optional[MeetingStatus] = None) -> list[Meeting]:
        """List meetings, optionally filtered by status."""
        meetings = list(self._meetings.values())
        if status is not None:
            meetings = [m for m in meetings if m.status == status]
        return meetings

    def scheduled_holder(self, key: SlotKey) -> Optional[Meeting]:
        """The scheduled meeting currently holding `key`, if any."""
        for meeting in self._meetings.values():
            if meeting.slot_key == key and meeting.status == MeetingStatus.SCHEDULED:
                return meeting
        return None
