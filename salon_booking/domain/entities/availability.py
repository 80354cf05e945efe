from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TimeRange:
    start_time: str  # UTC wall clock, "HH:MM" or "HH:MM:SS"
    end_time: str
    is_available: bool = True


@dataclass(frozen=True)
class DayAvailability:
    date: date
    time_ranges: tuple[TimeRange, ...] = ()


@dataclass(frozen=True)
class TimeSlot:
    time: str  # local "HH:MM"
    available: bool = True
