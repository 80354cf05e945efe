from __future__ import annotations

from collections.abc import Iterable

from salon_booking.domain.entities.catalog import Service
from salon_booking.domain.entities.staff import Staff


def eligible_staff(roster: Iterable[Staff], services: Iterable[Service]) -> list[Staff]:
    """
    Staff assigned to at least one of the given services, in roster order.
    No services selected means nobody is offered.
    """
    assigned: set[str] = set()
    for service in services:
        assigned.update(service.assigned_staff_ids)
    if not assigned:
        return []
    return [member for member in roster if member.user_id in assigned]


def filter_staff_by_search(staff: Iterable[Staff], query: str | None) -> list[Staff]:
    members = list(staff)
    if not query or not query.strip():
        return members

    needle = query.strip().lower()
    return [
        member
        for member in members
        if needle in member.first_name.lower()
        or needle in member.last_name.lower()
        or needle in (member.position or "").lower()
    ]


def find_staff(roster: Iterable[Staff], staff_id: str) -> Staff | None:
    for member in roster:
        if member.user_id == staff_id:
            return member
    return None
