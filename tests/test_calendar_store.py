"""Tests for the slot calendar."""

from datetime import date, timedelta

from app.calendar_store import SlotCalendar, is_weekday
from app.models import SlotKey
from app.time_slots import TIME_LABELS

MONDAY = date(2025, 3, 3)


def test_initialize_generates_weekday_slots_only():
    """Every generated slot is Mon-Fri, uses a fixed label and starts available."""
    cal = SlotCalendar()
    created = cal.initialize(MONDAY, horizon_days=14)

    # Two full weeks: 10 weekdays x 12 labels
    assert created == 10 * len(TIME_LABELS)
    assert len(cal) == created

    for slot in cal:
        assert slot.date.weekday() < 5
        assert slot.time in TIME_LABELS
        assert slot.is_available is True
        assert MONDAY <= slot.date < MONDAY + timedelta(days=14)


def test_initialize_skips_weekend_start():
    cal = SlotCalendar()
    saturday = date(2025, 3, 8)
    cal.initialize(saturday, horizon_days=2)

    assert len(cal) == 0


def test_initialize_is_idempotent_and_keeps_booked_state():
    cal = SlotCalendar()
    cal.initialize(MONDAY, horizon_days=5)
    key = SlotKey(MONDAY, "10:00 AM")
    cal.set_available(key, False)

    created_again = cal.initialize(MONDAY, horizon_days=5)

    assert created_again == 0
    assert cal.is_available(key) is False


def test_initialize_extends_horizon_without_touching_existing():
    cal = SlotCalendar()
    cal.initialize(MONDAY, horizon_days=5)
    cal.set_available(SlotKey(MONDAY, "9:00 AM"), False)

    created = cal.initialize(MONDAY, horizon_days=7 + 5)

    assert created == 5 * len(TIME_LABELS)
    assert cal.is_available(SlotKey(MONDAY, "9:00 AM")) is False


def test_set_available_unknown_key_is_noop():
    cal = SlotCalendar()
    cal.initialize(MONDAY, horizon_days=5)

    assert cal.set_available(SlotKey(MONDAY, "1:00 PM"), False) is False
    assert cal.set_available(SlotKey(date(2030, 1, 1), "9:00 AM"), True) is False
    assert SlotKey(MONDAY, "1:00 PM") not in cal
    assert cal.is_available(SlotKey(MONDAY, "1:00 PM")) is False


def test_available_dates_between_excludes_fully_booked_days():
    cal = SlotCalendar()
    cal.initialize(MONDAY, horizon_days=5)
    tuesday = MONDAY + timedelta(days=1)
    for label in TIME_LABELS:
        cal.set_available(SlotKey(tuesday, label), False)

    days = cal.available_dates_between(MONDAY, MONDAY + timedelta(days=4))

    assert tuesday not in days
    assert days == sorted(days)
    assert len(days) == 4


def test_available_times_on_are_chronological():
    cal = SlotCalendar()
    cal.initialize(MONDAY, horizon_days=1)
    cal.set_available(SlotKey(MONDAY, "9:30 AM"), False)

    times = cal.available_times_on(MONDAY)

    assert "9:30 AM" not in times
    assert times[0] == "9:00 AM"
    assert times[-1] == "4:30 PM"
    assert times.index("11:30 AM") < times.index("2:00 PM")


def test_horizon():
    cal = SlotCalendar()
    assert cal.horizon() is None

    cal.initialize(MONDAY, horizon_days=7)
    assert cal.horizon() == (MONDAY, MONDAY + timedelta(days=4))


def test_is_weekday():
    assert is_weekday(MONDAY)
    assert not is_weekday(date(2025, 3, 8))
    assert not is_weekday(date(2025, 3, 9))
