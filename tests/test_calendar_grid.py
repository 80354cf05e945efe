"""
Tests for month navigation and date selectability.
"""

from __future__ import annotations

from datetime import date

from salon_booking.application.utils.calendar_grid import (
    calendar_days,
    first_of_month,
    is_date_selectable,
    shift_month,
)
from salon_booking.domain.entities.availability import DayAvailability, TimeRange


def test_shift_month_crosses_year_boundaries():
    assert shift_month(date(2025, 12, 1), 1) == date(2026, 1, 1)
    assert shift_month(date(2025, 1, 1), -1) == date(2024, 12, 1)
    assert first_of_month(date(2025, 2, 17)) == date(2025, 2, 1)


def test_calendar_days_start_on_sunday():
    """February 2025 starts on a Saturday: six blanks, then 28 days."""
    cells = calendar_days(date(2025, 2, 1))

    assert cells[:6] == [None] * 6
    assert cells[6] == date(2025, 2, 1)
    assert cells[-1] == date(2025, 2, 28)
    assert len(cells) == 6 + 28


def test_past_dates_and_days_without_ranges_are_not_selectable():
    availability = [
        DayAvailability(date=date(2025, 1, 14), time_ranges=(TimeRange("09:00", "10:00"),)),
        DayAvailability(date=date(2025, 1, 15), time_ranges=(TimeRange("09:00", "10:00"),)),
        DayAvailability(date=date(2025, 1, 16), time_ranges=(TimeRange("09:00", "10:00", is_available=False),)),
    ]
    today = date(2025, 1, 15)

    assert not is_date_selectable(date(2025, 1, 14), today, availability)
    assert is_date_selectable(date(2025, 1, 15), today, availability)
    assert not is_date_selectable(date(2025, 1, 16), today, availability)
    assert not is_date_selectable(date(2025, 1, 17), today, availability)
