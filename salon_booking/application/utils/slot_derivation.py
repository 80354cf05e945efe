from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from zoneinfo import ZoneInfo

from salon_booking.application.utils.timezone_utils import format_minutes, minutes_of_day, utc_wall_clock_to_local
from salon_booking.domain.entities.availability import DayAvailability, TimeRange, TimeSlot

DEFAULT_SLOT_INTERVAL_MINUTES = 15


def derive_slots(
    day: date,
    ranges: Iterable[TimeRange],
    tz: ZoneInfo,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    required_minutes: int | None = None,
) -> list[TimeSlot]:
    """
    Turn the UTC availability ranges of one day into local HH:MM slots.

    Every available range is converted to tz and discretized from its start through its
    end inclusive. Ranges are handled independently and concatenated in input order, so
    overlapping ranges can yield duplicated or unsorted times. A range whose local end
    falls on the next calendar day yields no slots.

    required_minutes switches on strict mode: a slot is only kept if the range still has
    that many minutes left after it.
    """
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")

    slots: list[TimeSlot] = []
    for time_range in ranges:
        if not time_range.is_available:
            continue
        try:
            start_local = utc_wall_clock_to_local(day, time_range.start_time, tz)
            end_local = utc_wall_clock_to_local(day, time_range.end_time, tz)
        except ValueError:
            continue

        start_minutes = minutes_of_day(start_local)
        end_minutes = minutes_of_day(end_local)

        for minutes in range(start_minutes, end_minutes + 1, interval_minutes):
            if required_minutes is not None and end_minutes - minutes < required_minutes:
                break
            slots.append(TimeSlot(time=format_minutes(minutes), available=True))
    return slots


def find_day(availability: Iterable[DayAvailability], day: date) -> DayAvailability | None:
    for record in availability:
        if record.date == day:
            return record
    return None


def has_available_slots(availability: Iterable[DayAvailability], day: date) -> bool:
    """True if the day has a record with at least one available range, derivable or not."""
    record = find_day(availability, day)
    if record is None:
        return False
    return any(r.is_available for r in record.time_ranges)


def slots_for_day(
    availability: Iterable[DayAvailability],
    day: date,
    tz: ZoneInfo,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    required_minutes: int | None = None,
) -> list[TimeSlot]:
    record = find_day(availability, day)
    if record is None or not record.time_ranges:
        return []
    return derive_slots(day, record.time_ranges, tz, interval_minutes, required_minutes)
