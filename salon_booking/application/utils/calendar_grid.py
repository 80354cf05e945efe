from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date

from salon_booking.application.utils.slot_derivation import has_available_slots
from salon_booking.domain.entities.availability import DayAvailability


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def shift_month(month: date, delta: int) -> date:
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def calendar_days(month: date) -> list[date | None]:
    """Month grid with a Sunday-first week: None for the blank cells before day 1, then every day."""
    first = first_of_month(month)
    leading_blanks = (first.weekday() + 1) % 7
    _, days_in_month = calendar.monthrange(first.year, first.month)
    cells: list[date | None] = [None] * leading_blanks
    cells.extend(first.replace(day=d) for d in range(1, days_in_month + 1))
    return cells


def is_date_selectable(day: date, today: date, availability: Iterable[DayAvailability]) -> bool:
    if day < today:
        return False
    return has_available_slots(availability, day)
