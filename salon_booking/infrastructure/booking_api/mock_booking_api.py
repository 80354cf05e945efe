from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Any

from salon_booking.application.exceptions import ApiRejectedError
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.application.utils.catalog_tree import find_service
from salon_booking.application.utils.pricing import cents_to_amount, effective_price
from salon_booking.application.utils.staff_roster import find_staff
from salon_booking.application.utils.timezone_utils import parse_iso_instant
from salon_booking.domain.entities.availability import DayAvailability, TimeRange
from salon_booking.domain.entities.booking import BookingConfirmation, ConfirmedService
from salon_booking.domain.entities.catalog import Category, Service
from salon_booking.domain.entities.company import Company
from salon_booking.domain.entities.staff import Staff

DEFAULT_STAFF = (
    Staff(id="st_1", user_id="u_anna", first_name="Anna", last_name="Tamm", position="Senior Stylist", languages="en,et"),
    Staff(id="st_2", user_id="u_maria", first_name="Maria", last_name="Ivanova", position="Colorist", languages="ru,en"),
    Staff(id="st_3", user_id="u_kati", first_name="Kati", last_name="Kask", position="Nail Technician", languages="et"),
)

DEFAULT_CATEGORIES = (
    Category(
        id="cat_hair",
        name="Hair",
        localized_names={"ee": "Juuksed", "ru": "Волосы"},
        services=(
            Service(
                id="svc_cut",
                name="Haircut",
                duration_minutes=45,
                price_cents=3500,
                category_id="cat_hair",
                localized_names={"en": "Haircut", "ee": "Juukselõikus", "ru": "Стрижка"},
                assigned_staff_ids=frozenset({"u_anna", "u_maria"}),
            ),
        ),
        subcategories=(
            Category(
                id="cat_color",
                name="Coloring",
                localized_names={"ee": "Värvimine", "ru": "Окрашивание"},
                parent_id="cat_hair",
                services=(
                    Service(
                        id="svc_color",
                        name="Full Color",
                        duration_minutes=90,
                        price_cents=8000,
                        discount_price_cents=6500,
                        category_id="cat_color",
                        localized_names={"en": "Full Color", "ee": "Juuste värvimine", "ru": "Окрашивание"},
                        assigned_staff_ids=frozenset({"u_maria"}),
                    ),
                ),
            ),
        ),
    ),
    Category(
        id="cat_nails",
        name="Nails",
        services=(
            Service(
                id="svc_mani",
                name="Manicure",
                duration_minutes=60,
                price_cents=3000,
                category_id="cat_nails",
                localized_names={"en": "Manicure", "ee": "Maniküür", "ru": "Маникюр"},
                assigned_staff_ids=frozenset({"u_kati"}),
            ),
        ),
    ),
    Category(id="cat_empty", name="Coming soon"),
)

WORKDAY_RANGES = (
    TimeRange(start_time="09:00", end_time="12:00", is_available=True),
    TimeRange(start_time="13:00", end_time="17:00", is_available=True),
)
DAY_OFF_RANGES = (TimeRange(start_time="09:00", end_time="17:00", is_available=False),)


class MockBookingApi(BookingApiPort):
    """In-memory booking API: seeded catalog and staff, Mon-Sat working hours, Sundays off."""

    def __init__(
        self,
        company: Company | None = None,
        categories: tuple[Category, ...] | None = None,
        staff: tuple[Staff, ...] | None = None,
    ) -> None:
        self._company = company or Company(id="co_1", name="Mock Salon")
        self._categories = list(categories if categories is not None else DEFAULT_CATEGORIES)
        self._staff = list(staff if staff is not None else DEFAULT_STAFF)
        self._bookings: dict[str, dict[str, Any]] = {}
        self.availability_calls: list[tuple[str, date, tuple[str, ...]]] = []
        self._logger = logging.getLogger(__name__)

    async def get_company(self, slug: str) -> Company | None:
        return self._company

    async def get_catalog(self, slug: str) -> tuple[list[Category], str | None]:
        return list(self._categories), self._company.name

    async def get_staff(self, slug: str) -> list[Staff]:
        return list(self._staff)

    async def get_availability(
        self,
        slug: str,
        staff_id: str,
        date_from: date,
        service_ids: list[str],
    ) -> list[DayAvailability]:
        self.availability_calls.append((staff_id, date_from, tuple(service_ids)))
        _, days_in_month = calendar.monthrange(date_from.year, date_from.month)
        first = date_from.replace(day=1)
        days: list[DayAvailability] = []
        for offset in range(days_in_month):
            day = first + timedelta(days=offset)
            ranges = DAY_OFF_RANGES if day.weekday() == 6 else WORKDAY_RANGES
            days.append(DayAvailability(date=day, time_ranges=ranges))
        return days

    async def create_booking(self, slug: str, payload: dict[str, Any]) -> str | None:
        start_time = payload.get("start_time")
        lines = payload.get("services") or []
        for existing in self._bookings.values():
            if existing["start_time"] == start_time and _staff_ids(existing) & _staff_ids(payload):
                raise ApiRejectedError("This time slot is no longer available. Please choose another time.")
        if not lines:
            raise ApiRejectedError("At least one service is required.")

        booking_id = f"mock_booking_{len(self._bookings) + 1}"
        self._bookings[booking_id] = payload
        self._logger.info(
            "Mock booking created",
            extra={"booking_id": booking_id, "start": start_time, "service_count": len(lines)},
        )
        return booking_id

    async def get_booking(self, booking_id: str) -> BookingConfirmation:
        payload = self._bookings.get(booking_id)
        if payload is None:
            raise ApiRejectedError("Booking not found", status=404)

        start_at: datetime = parse_iso_instant(payload["start_time"])
        services: list[ConfirmedService] = []
        total_cents = 0
        total_minutes = 0
        for line in payload["services"]:
            service = find_service(self._categories, line["category_service_id"])
            if service is None:
                continue
            member = find_staff(self._staff, line["user_id"])
            total_cents += effective_price(service)
            total_minutes += service.duration_minutes
            services.append(
                ConfirmedService(
                    name=service.name,
                    duration_minutes=service.duration_minutes,
                    price_cents=service.price_cents,
                    discount_price_cents=service.discount_price_cents,
                    staff_name=member.display_name if member else None,
                )
            )

        customer = payload["customer_info"]
        return BookingConfirmation(
            id=booking_id,
            start_at=start_at,
            end_at=start_at + timedelta(minutes=total_minutes),
            total_price=cents_to_amount(total_cents),
            customer_name=f"{customer['first_name']} {customer['last_name']}".strip(),
            customer_email=customer["email"],
            services=tuple(services),
        )


def _staff_ids(payload: dict[str, Any]) -> set[str]:
    return {line.get("user_id") for line in payload.get("services") or []}
