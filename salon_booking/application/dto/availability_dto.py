from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from salon_booking.domain.entities.availability import DayAvailability, TimeRange


class TimeRangeDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start_time: str
    end_time: str
    is_available: bool = False


class DayAvailabilityDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: dt.date
    time_slots: list[TimeRangeDTO] | None = None

    def to_entity(self) -> DayAvailability:
        return DayAvailability(
            date=self.date,
            time_ranges=tuple(
                TimeRange(start_time=r.start_time, end_time=r.end_time, is_available=r.is_available)
                for r in self.time_slots or []
            ),
        )


def extract_daily_slots(data: Any) -> list[dict[str, Any]]:
    """
    Flatten the availability payload to raw day records.

    Accepted shapes, first match wins:
    monthly.weekly_slots[].daily_slots[], weekly.daily_slots[], monthly.daily_slots[], bare list.
    Anything else is no availability.
    """
    if isinstance(data, list):
        return [day for day in data if isinstance(day, dict)]
    if not isinstance(data, dict):
        return []

    monthly = data.get("monthly") if isinstance(data.get("monthly"), dict) else None
    weekly = data.get("weekly") if isinstance(data.get("weekly"), dict) else None

    if monthly and isinstance(monthly.get("weekly_slots"), list):
        days: list[dict[str, Any]] = []
        for week in monthly["weekly_slots"]:
            if isinstance(week, dict) and isinstance(week.get("daily_slots"), list):
                days.extend(day for day in week["daily_slots"] if isinstance(day, dict))
        return days
    if weekly and isinstance(weekly.get("daily_slots"), list):
        return [day for day in weekly["daily_slots"] if isinstance(day, dict)]
    if monthly and isinstance(monthly.get("daily_slots"), list):
        return [day for day in monthly["daily_slots"] if isinstance(day, dict)]
    return []


def parse_availability(data: Any) -> list[DayAvailability]:
    days: list[DayAvailability] = []
    for raw in extract_daily_slots(data):
        try:
            days.append(DayAvailabilityDTO.model_validate(raw).to_entity())
        except ValidationError:
            continue
    return days
