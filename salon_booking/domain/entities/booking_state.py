from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum


class WizardStep(IntEnum):
    SERVICES = 1
    PROFESSIONAL = 2
    DATE_TIME = 3
    DETAILS = 4
    SUBMITTED = 5


@dataclass(frozen=True)
class CustomerInfo:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""  # local number without the country code
    phone_country_code: str = "+372"
    birthday: str | None = None  # YYYY-MM-DD
    notes: str = ""

    @property
    def full_phone(self) -> str:
        return f"{self.phone_country_code}{self.phone}"


@dataclass(frozen=True)
class BookingWizardState:
    step: WizardStep = WizardStep.SERVICES
    selected_service_ids: tuple[str, ...] = ()  # selection order is kept for booking line items
    selected_staff_id: str | None = None  # staff user id
    selected_date: date | None = None
    selected_time: str | None = None  # local "HH:MM"
    displayed_month: date | None = None  # first day of the calendar month on screen
    customer_info: CustomerInfo = CustomerInfo()
    terms_agreed: bool = False
    booking_id: str | None = None
