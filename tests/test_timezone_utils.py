"""
Tests for wall-clock and instant conversions.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from salon_booking.application.utils.timezone_utils import (
    local_to_utc_instant,
    parse_iso_instant,
    parse_wall_clock,
    to_iso_z,
    utc_wall_clock_to_local,
)

TALLINN = ZoneInfo("Europe/Tallinn")


def test_parse_wall_clock_formats():
    assert parse_wall_clock("09:30") == (9, 30)
    assert parse_wall_clock("09:30:00") == (9, 30)
    assert parse_wall_clock("24:00") == (24, 0)
    for bad in ("", "9", "24:30", "12:60", "ab:cd"):
        with pytest.raises(ValueError):
            parse_wall_clock(bad)


def test_local_wall_clock_round_trips_through_utc():
    """Local 14:00 in Tallinn on 2025-02-01 is 12:00Z and converts back to 14:00."""
    instant = local_to_utc_instant(date(2025, 2, 1), "14:00", TALLINN)

    assert to_iso_z(instant) == "2025-02-01T12:00:00.000Z"
    local = parse_iso_instant(to_iso_z(instant)).astimezone(TALLINN)
    assert (local.date(), local.strftime("%H:%M")) == (date(2025, 2, 1), "14:00")


def test_summer_offset_is_applied():
    local = utc_wall_clock_to_local(date(2025, 7, 1), "09:00", TALLINN)

    assert local.strftime("%H:%M") == "12:00"


def test_end_of_day_rolls_over():
    local = utc_wall_clock_to_local(date(2025, 1, 10), "24:00", ZoneInfo("UTC"))

    assert local == datetime(2025, 1, 11, tzinfo=timezone.utc)


def test_naive_iso_is_treated_as_utc():
    assert parse_iso_instant("2025-02-01T12:00:00").tzinfo is not None
    assert parse_iso_instant("2025-02-01T12:00:00.000Z") == datetime(2025, 2, 1, 12, tzinfo=timezone.utc)
