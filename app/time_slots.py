"""Fixed daily time labels used for every bookable day."""

from datetime import datetime, time
from typing import Iterable

TIME_LABELS: tuple[str, ...] = (
    "9:00 AM",
    "9:30 AM",
    "10:00 AM",
    "10:30 AM",
    "11:00 AM",
    "11:30 AM",
    "2:00 PM",
    "2:30 PM",
    "3:00 PM",
    "3:30 PM",
    "4:00 PM",
    "4:30 PM",
)

_LABEL_FORMAT = "%I:%M %p"


def parse_time_label(label: str) -> time:
    """
    Parse a 12-hour label like "2:30 PM" into a time of day.

    Raises ValueError for anything that is not "H:MM AM" / "H:MM PM".
    """
    if not isinstance(label, str):
        raise ValueError(f"Invalid time label: {label!r}")
    return datetime.strptime(label.strip(), _LABEL_FORMAT).time()


def is_valid_time_label(label: str) -> bool:
    """Check that the label is one of the bookable labels (exact match)."""
    return label in TIME_LABELS


def sort_time_labels(labels: Iterable[str]) -> list[str]:
    """Sort labels chronologically ("9:00 AM" before "2:30 PM")."""
    return sorted(labels, key=parse_time_label)
