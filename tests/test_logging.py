"""
Tests for the key=value context appended to log lines.
"""

from __future__ import annotations

import logging

from salon_booking.main import ContextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("salon_booking.test", logging.INFO, __file__, 1, "Availability loaded", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_keys_are_appended():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")

    line = formatter.format(_record(slug="mock-salon", staff_id="u_anna", month="2025-02-01", day_count=28))

    assert line == (
        "INFO:salon_booking.test:Availability loaded | slug=mock-salon staff_id=u_anna month=2025-02-01 day_count=28"
    )


def test_empty_and_unknown_extras_are_left_out():
    formatter = ContextFormatter("%(message)s")

    assert formatter.format(_record(error="", category_count=3)) == "Availability loaded"
