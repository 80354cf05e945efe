from __future__ import annotations

from dataclasses import dataclass

from salon_booking.domain.entities.catalog import Category
from salon_booking.domain.entities.staff import Staff


@dataclass(frozen=True)
class Company:
    name: str
    id: str | None = None
    logo_url: str | None = None


@dataclass(frozen=True)
class BookingContext:
    """Read-only snapshot shared by every wizard of one company."""

    slug: str
    company: Company
    categories: tuple[Category, ...]
    staff: tuple[Staff, ...]
