from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class ConfirmedService:
    name: str
    duration_minutes: int
    price_cents: int
    discount_price_cents: int | None = None
    staff_name: str | None = None


@dataclass(frozen=True)
class BookingConfirmation:
    id: str
    start_at: datetime
    end_at: datetime | None
    total_price: Decimal
    customer_name: str
    customer_email: str
    services: tuple[ConfirmedService, ...] = ()


@dataclass(frozen=True)
class SubmissionResult:
    booking_id: str | None
    message: str
