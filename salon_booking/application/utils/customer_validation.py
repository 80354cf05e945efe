from __future__ import annotations

import re

from salon_booking.domain.entities.booking_state import CustomerInfo

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^[0-9 ()\-]{4,20}$")
BIRTHDAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SUPPORTED_COUNTRY_CODES = ("+372", "+1", "+44", "+49", "+33", "+34", "+39", "+91", "+90", "+994")


def customer_errors(info: CustomerInfo) -> list[str]:
    """User-facing messages for every problem in the contact block; empty when valid."""
    errors: list[str] = []
    if not info.first_name.strip():
        errors.append("First name is required")
    if not info.last_name.strip():
        errors.append("Last name is required")
    if not info.email.strip():
        errors.append("Email is required")
    elif not EMAIL_PATTERN.match(info.email.strip()):
        errors.append("Email address is not valid")
    if not info.phone.strip():
        errors.append("Phone number is required")
    elif not PHONE_PATTERN.match(info.phone.strip()):
        errors.append("Phone number is not valid")
    if not info.phone_country_code.startswith("+"):
        errors.append("Phone country code must start with '+'")
    if info.birthday and not BIRTHDAY_PATTERN.match(info.birthday):
        errors.append("Birthday must be in YYYY-MM-DD format")
    return errors
