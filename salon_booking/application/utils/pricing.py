from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from salon_booking.domain.entities.catalog import Service

CENTS_PER_UNIT = Decimal(100)


def discounted_cents(price_cents: int, discount_price_cents: int | None) -> int:
    """Discount price in cents when it is a real discount (0 < discount < price), else the base price."""
    if discount_price_cents is not None and 0 < discount_price_cents < price_cents:
        return discount_price_cents
    return price_cents


def effective_price(service: Service) -> int:
    return discounted_cents(service.price_cents, service.discount_price_cents)


def total_price_cents(services: Iterable[Service]) -> int:
    return sum(effective_price(service) for service in services)


def cents_to_amount(cents: int) -> Decimal:
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


def total_price(services: Iterable[Service]) -> Decimal:
    """Total in currency units (cents / 100), e.g. Decimal("30.00")."""
    return cents_to_amount(total_price_cents(services))


def total_duration(services: Iterable[Service]) -> int:
    return sum(service.duration_minutes for service in services)
