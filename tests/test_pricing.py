"""
Tests for price and duration totals.
"""

from __future__ import annotations

from decimal import Decimal

from salon_booking.application.utils.pricing import (
    cents_to_amount,
    effective_price,
    total_duration,
    total_price,
    total_price_cents,
)
from salon_booking.domain.entities.catalog import Service


def _service(price: int, discount: int | None = None, duration: int = 30) -> Service:
    return Service(
        id=f"s{price}",
        name="Service",
        duration_minutes=duration,
        price_cents=price,
        discount_price_cents=discount,
    )


def test_total_uses_discount_when_lower():
    """A at 2000 plus B at 1500 discounted to 1000 totals 30.00."""
    services = [_service(2000), _service(1500, discount=1000)]

    assert total_price_cents(services) == 3000
    assert total_price(services) == Decimal("30.00")


def test_discount_ignored_unless_strictly_between_zero_and_price():
    assert effective_price(_service(1500, discount=0)) == 1500
    assert effective_price(_service(1500, discount=1500)) == 1500
    assert effective_price(_service(1500, discount=1800)) == 1500
    assert effective_price(_service(1500, discount=None)) == 1500
    assert effective_price(_service(1500, discount=1499)) == 1499


def test_empty_selection_totals_zero():
    assert total_price([]) == Decimal("0.00")
    assert total_duration([]) == 0


def test_total_duration_sums_minutes():
    assert total_duration([_service(1000, duration=45), _service(1000, duration=90)]) == 135


def test_cents_to_amount_keeps_two_places():
    assert cents_to_amount(3550) == Decimal("35.50")
    assert str(cents_to_amount(5)) == "0.05"
