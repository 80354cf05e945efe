"""
Tests for turning UTC availability ranges into local time slots.
"""

from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from salon_booking.application.utils.slot_derivation import derive_slots, has_available_slots, slots_for_day
from salon_booking.domain.entities.availability import DayAvailability, TimeRange

UTC = ZoneInfo("UTC")
TALLINN = ZoneInfo("Europe/Tallinn")  # UTC+2 in winter
DAY = date(2025, 1, 10)


def _times(slots) -> list[str]:
    return [slot.time for slot in slots]


def test_range_is_shifted_to_viewer_timezone_and_end_is_inclusive():
    """09:00-09:30 UTC seen from UTC+2 gives 11:00, 11:15 and 11:30."""
    slots = derive_slots(DAY, [TimeRange("09:00", "09:30")], TALLINN)

    assert _times(slots) == ["11:00", "11:15", "11:30"]
    assert all(slot.available for slot in slots)


def test_seconds_in_wall_clock_are_accepted():
    slots = derive_slots(DAY, [TimeRange("09:00:00", "09:15:00")], UTC)

    assert _times(slots) == ["09:00", "09:15"]


def test_unavailable_ranges_contribute_nothing():
    ranges = [TimeRange("08:00", "08:30", is_available=False), TimeRange("10:00", "10:15")]

    assert _times(derive_slots(DAY, ranges, UTC)) == ["10:00", "10:15"]


def test_overlapping_ranges_keep_duplicates_in_input_order():
    """Ranges are discretized independently and concatenated without sorting or dedup."""
    ranges = [TimeRange("09:15", "09:45"), TimeRange("09:00", "09:30")]

    assert _times(derive_slots(DAY, ranges, UTC)) == ["09:15", "09:30", "09:45", "09:00", "09:15", "09:30"]


def test_zero_width_range_yields_its_start():
    assert _times(derive_slots(DAY, [TimeRange("10:00", "10:00")], UTC)) == ["10:00"]


def test_range_crossing_local_midnight_yields_nothing():
    """21:00-23:00 UTC is 23:00-01:00 in Tallinn; the wrapped end is before the start."""
    assert derive_slots(DAY, [TimeRange("21:00", "23:00")], TALLINN) == []


def test_malformed_range_is_skipped():
    ranges = [TimeRange("25:00", "26:00"), TimeRange("nope", "10:00"), TimeRange("11:00", "11:00")]

    assert _times(derive_slots(DAY, ranges, UTC)) == ["11:00"]


def test_strict_mode_keeps_only_slots_that_fit_the_duration():
    ranges = [TimeRange("09:00", "10:00")]

    assert _times(derive_slots(DAY, ranges, UTC, required_minutes=30)) == ["09:00", "09:15", "09:30"]
    assert derive_slots(DAY, ranges, UTC, required_minutes=90) == []


def test_custom_interval():
    slots = derive_slots(DAY, [TimeRange("09:00", "10:00")], UTC, interval_minutes=30)

    assert _times(slots) == ["09:00", "09:30", "10:00"]


def test_non_positive_interval_is_rejected():
    with pytest.raises(ValueError):
        derive_slots(DAY, [TimeRange("09:00", "10:00")], UTC, interval_minutes=0)


def test_has_available_slots_looks_at_range_flags_only():
    availability = [
        DayAvailability(date=date(2025, 1, 10), time_ranges=(TimeRange("10:00", "10:00"),)),
        DayAvailability(date=date(2025, 1, 11), time_ranges=(TimeRange("09:00", "17:00", is_available=False),)),
        DayAvailability(date=date(2025, 1, 12)),
    ]

    assert has_available_slots(availability, date(2025, 1, 10))
    assert not has_available_slots(availability, date(2025, 1, 11))
    assert not has_available_slots(availability, date(2025, 1, 12))
    assert not has_available_slots(availability, date(2025, 1, 13))


def test_slots_for_day_without_record_is_empty():
    availability = [DayAvailability(date=DAY, time_ranges=(TimeRange("09:00", "09:15"),))]

    assert _times(slots_for_day(availability, DAY, UTC)) == ["09:00", "09:15"]
    assert slots_for_day(availability, date(2025, 1, 11), UTC) == []
