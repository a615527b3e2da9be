"""Tests for the meeting store."""

from datetime import date, datetime

import pytest
from app.meeting_store import MeetingStore
from app.models import Meeting, MeetingStatus, SlotKey

KEY = SlotKey(date(2025, 3, 6), "10:00 AM")


def _meeting(meeting_id, key=KEY, status=MeetingStatus.SCHEDULED):
    return Meeting.for_slot(
        key,
        id=meeting_id,
        first_name="Test",
        last_name="User",
        email="test@example.com",
        company="Test Company",
        timezone="UTC",
        status=status,
        created_at=datetime(2025, 3, 3, 9, 0),
    )


def test_add_and_get():
    store = MeetingStore()
    meeting = store.add(_meeting("m1"))

    assert store.get("m1") is meeting
    assert store.get("m2") is None
    assert len(store) == 1


def test_add_duplicate_id_rejected():
    store = MeetingStore()
    store.add(_meeting("m1"))

    with pytest.raises(KeyError):
        store.add(_meeting("m1"))


def test_meeting_owns_slot_key():
    meeting = _meeting("m1")

    assert meeting.slot_key == KEY
    assert meeting.meeting_date == KEY.date
    assert meeting.meeting_time == KEY.time
    assert "slot_key" not in meeting.model_dump()
    assert meeting.model_copy(deep=True).slot_key == KEY


def test_list_meetings_by_status():
    store = MeetingStore()
    store.add(_meeting("m1"))
    store.add(_meeting("m2", status=MeetingStatus.CANCELLED))

    assert [m.id for m in store.list_meetings(MeetingStatus.SCHEDULED)] == ["m1"]
    assert [m.id for m in store.list_meetings(MeetingStatus.CANCELLED)] == ["m2"]
    assert len(store.list_meetings()) == 2


def test_scheduled_holder_ignores_cancelled():
    store = MeetingStore()
    store.add(_meeting("old", status=MeetingStatus.CANCELLED))

    assert store.scheduled_holder(KEY) is None

    store.add(_meeting("new"))
    assert store.scheduled_holder(KEY).id == "new"
    assert store.scheduled_holder(SlotKey(date(2025, 3, 7), "10:00 AM")) is None
