from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from salon_booking.domain.entities.availability import DayAvailability
from salon_booking.domain.entities.booking import BookingConfirmation
from salon_booking.domain.entities.catalog import Category
from salon_booking.domain.entities.company import Company
from salon_booking.domain.entities.staff import Staff


class BookingApiPort(ABC):
    @abstractmethod
    async def get_company(self, slug: str) -> Company | None:
        """Company identity, or None when the company endpoint has nothing usable."""
        raise NotImplementedError

    @abstractmethod
    async def get_catalog(self, slug: str) -> tuple[list[Category], str | None]:
        """Category tree plus the optional company name carried by the services envelope."""
        raise NotImplementedError

    @abstractmethod
    async def get_staff(self, slug: str) -> list[Staff]:
        raise NotImplementedError

    @abstractmethod
    async def get_availability(
        self,
        slug: str,
        staff_id: str,
        date_from: date,
        service_ids: list[str],
    ) -> list[DayAvailability]:
        """Monthly availability starting at date_from, flattened to one record per day."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(self, slug: str, payload: dict[str, Any]) -> str | None:
        """Create a booking. Returns the booking id (None if the server sent none)."""
        raise NotImplementedError

    @abstractmethod
    async def get_booking(self, booking_id: str) -> BookingConfirmation:
        raise NotImplementedError
