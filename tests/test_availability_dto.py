"""
Tests for the availability payload shapes the booking API may return.
"""

from __future__ import annotations

from datetime import date

from salon_booking.application.dto.availability_dto import extract_daily_slots, parse_availability

DAY_1 = {"date": "2025-02-03", "time_slots": [{"start_time": "09:00", "end_time": "10:00", "is_available": True}]}
DAY_2 = {"date": "2025-02-04", "time_slots": [{"start_time": "11:00", "end_time": "12:00", "is_available": False}]}


def test_monthly_weekly_slots_are_flattened_across_weeks():
    data = {"monthly": {"weekly_slots": [{"daily_slots": [DAY_1]}, {"daily_slots": [DAY_2]}]}}

    days = parse_availability(data)

    assert [d.date for d in days] == [date(2025, 2, 3), date(2025, 2, 4)]
    assert days[0].time_ranges[0].is_available
    assert not days[1].time_ranges[0].is_available


def test_weekly_and_monthly_daily_slots_shapes():
    assert extract_daily_slots({"weekly": {"daily_slots": [DAY_1]}}) == [DAY_1]
    assert extract_daily_slots({"monthly": {"daily_slots": [DAY_2]}}) == [DAY_2]


def test_bare_list_shape():
    assert [d.date for d in parse_availability([DAY_1, DAY_2])] == [date(2025, 2, 3), date(2025, 2, 4)]


def test_unknown_shapes_mean_no_availability():
    assert parse_availability(None) == []
    assert parse_availability({"daily": []}) == []
    assert parse_availability("not a payload") == []


def test_missing_flag_defaults_to_unavailable_and_bad_days_are_skipped():
    raw = [
        {"date": "2025-02-05", "time_slots": [{"start_time": "09:00", "end_time": "10:00"}]},
        {"date": "not-a-date", "time_slots": []},
        {"date": "2025-02-06"},
    ]

    days = parse_availability(raw)

    assert [d.date for d in days] == [date(2025, 2, 5), date(2025, 2, 6)]
    assert not days[0].time_ranges[0].is_available
    assert days[1].time_ranges == ()
