"""
Tests for contact detail validation on the details step.
"""

from __future__ import annotations

from salon_booking.application.utils.customer_validation import customer_errors
from salon_booking.domain.entities.booking_state import CustomerInfo

VALID = CustomerInfo(first_name="Mari", last_name="Maasikas", email="mari@example.com", phone="5551234")


def test_valid_details_have_no_errors():
    assert customer_errors(VALID) == []
    assert VALID.full_phone == "+3725551234"


def test_blank_form_lists_every_required_field():
    assert customer_errors(CustomerInfo()) == [
        "First name is required",
        "Last name is required",
        "Email is required",
        "Phone number is required",
    ]


def test_format_errors():
    info = CustomerInfo(
        first_name="Mari",
        last_name="Maasikas",
        email="mari@",
        phone="55-abc",
        phone_country_code="372",
        birthday="01.02.1990",
    )

    assert customer_errors(info) == [
        "Email address is not valid",
        "Phone number is not valid",
        "Phone country code must start with '+'",
        "Birthday must be in YYYY-MM-DD format",
    ]
