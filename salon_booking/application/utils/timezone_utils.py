from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

UTC = timezone.utc


def parse_wall_clock(value: str) -> tuple[int, int]:
    """Parse "HH:MM" or "HH:MM:SS" into (hour, minute). "24:00" is accepted as end of day."""
    parts = (value or "").strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid wall-clock time: {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 24 and 0 <= minute < 60) or (hour == 24 and minute):
        raise ValueError(f"Invalid wall-clock time: {value!r}")
    return hour, minute


def _combine(day: date, hour: int, minute: int, tz: ZoneInfo | timezone) -> datetime:
    if hour == 24:
        return datetime.combine(day + timedelta(days=1), time(0, minute), tzinfo=tz)
    return datetime.combine(day, time(hour, minute), tzinfo=tz)


def utc_wall_clock_to_local(day: date, value: str, tz: ZoneInfo) -> datetime:
    """Interpret value as a UTC wall-clock time on day and convert it to tz."""
    hour, minute = parse_wall_clock(value)
    return _combine(day, hour, minute, UTC).astimezone(tz)


def local_to_utc_instant(day: date, value: str, tz: ZoneInfo) -> datetime:
    """Interpret day + "HH:MM" as local wall clock in tz and return the absolute UTC instant."""
    hour, minute = parse_wall_clock(value)
    return _combine(day, hour, minute, tz).astimezone(UTC)


def minutes_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_iso_z(instant: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2025-02-01T12:00:00.000Z."""
    utc_dt = instant.astimezone(UTC)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"


def parse_iso_instant(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
