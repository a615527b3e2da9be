"""Tests for the fixed time labels."""

from datetime import time

import pytest
from app.time_slots import TIME_LABELS, is_valid_time_label, parse_time_label, sort_time_labels


def test_twelve_fixed_labels():
    assert len(TIME_LABELS) == 12
    assert TIME_LABELS[0] == "9:00 AM"
    assert TIME_LABELS[-1] == "4:30 PM"
    assert "1:00 PM" not in TIME_LABELS


def test_parse_time_label():
    assert parse_time_label("9:00 AM") == time(9, 0)
    assert parse_time_label("2:30 PM") == time(14, 30)
    assert parse_time_label("12:00 PM") == time(12, 0)


@pytest.mark.parametrize("label", ["", "14:30", "2:30PMX", "noon", None])
def test_parse_time_label_rejects_garbage(label):
    with pytest.raises(ValueError):
        parse_time_label(label)


def test_sort_is_chronological_not_lexical():
    labels = ["2:30 PM", "10:00 AM", "9:00 AM", "4:30 PM", "11:30 AM"]

    assert sort_time_labels(labels) == ["9:00 AM", "10:00 AM", "11:30 AM", "2:30 PM", "4:30 PM"]
    # Lexical order would put "10:00 AM" first and "9:00 AM" last
    assert sorted(labels) != sort_time_labels(labels)


def test_is_valid_time_label():
    assert is_valid_time_label("3:00 PM")
    assert not is_valid_time_label("1:00 PM")
    assert not is_valid_time_label("3:00 pm")
