"""In-memory slot calendar.

Holds every bookable slot in the horizon, keyed by (date, time label).
Not thread-safe on its own; the scheduling engine serializes access.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from app.models import Slot, SlotKey
from app.time_slots import TIME_LABELS, sort_time_labels

# date.weekday(): Monday == 0 ... Sunday == 6
_WEEKEND = (5, 6)


def is_weekday(day: date) -> bool:
    return day.weekday() not in _WEEKEND


class SlotCalendar:
    """Slot arena indexed by SlotKey."""

    def __init__(self):
        self._slots: dict[SlotKey, Slot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, key: SlotKey) -> bool:
        return key in self._slots

    def initialize(
        self,
        today: date,
        horizon_days: int = 90,
        time_labels: Iterable[str] = TIME_LABELS,
    ) -> int:
        """
        Generate weekday slots for the next `horizon_days` days starting at `today`.

        Existing slots are left untouched, so calling this again never
        frees a booked slot. Returns the number of slots created.
        """
        labels = list(time_labels)
        created = 0
        for offset in range(horizon_days):
            day = today + timedelta(days=offset)
            if not is_weekday(day):
                continue
            for label in labels:
                key = SlotKey(day, label)
                if key in self._slots:
                    continue
                self._slots[key] = Slot(date=day, time=label, is_available=True)
                created += 1
        return created

    def is_available(self, key: SlotKey) -> bool:
        """Unknown slots are never available."""
        slot = self._slots.get(key)
        return slot is not None and slot.is_available

    def set_available(self, key: SlotKey, value: bool) -> bool:
        """
        Set the availability flag of a slot.

        Unknown keys are ignored (returns False) rather than raising.
        """
        slot = self._slots.get(key)
        if slot is None:
            return False
        slot.is_available = value
        return True

    def available_dates_between(self, start: date, end: date) -> list[date]:
        """Sorted distinct dates in [start, end] with at least one open slot."""
        days = {
            slot.date
            for slot in self._slots.values()
            if slot.is_available and start <= slot.date <= end
        }
        return sorted(days)

    def available_times_on(self, day: date) -> list[str]:
        """Open time labels on `day`, chronologically ordered."""
        return sort_time_labels(
            slot.time for slot in self._slots.values() if slot.date == day and slot.is_available
        )

    def horizon(self) -> Optional[tuple[date, date]]:
        """First and last generated date, or None when empty."""
        if not self._slots:
            return None
        days = [key.date for key in self._slots]
        return min(days), max(days)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._slots.values())
