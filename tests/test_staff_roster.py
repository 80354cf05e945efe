"""
Tests for staff eligibility and staff search.
"""

from __future__ import annotations

from salon_booking.application.utils.staff_roster import eligible_staff, filter_staff_by_search, find_staff
from salon_booking.domain.entities.catalog import Service
from salon_booking.domain.entities.staff import Staff

ANNA = Staff(id="1", user_id="u_anna", first_name="Anna", last_name="Tamm", position="Stylist", languages="en, et")
MARIA = Staff(id="2", user_id="u_maria", first_name="Maria", last_name="Ivanova", position="Colorist")
KATI = Staff(id="3", user_id="u_kati", first_name="Kati", last_name="Kask", position=None)
ROSTER = (ANNA, MARIA, KATI)


def _service(service_id: str, staff_ids: set[str]) -> Service:
    return Service(
        id=service_id,
        name=service_id,
        duration_minutes=30,
        price_cents=1000,
        assigned_staff_ids=frozenset(staff_ids),
    )


def test_eligible_staff_is_union_in_roster_order():
    """Staff assigned to any selected service are offered, in roster order."""
    services = [_service("color", {"u_kati", "u_maria"}), _service("cut", {"u_anna"})]

    assert eligible_staff(ROSTER, services) == [ANNA, MARIA, KATI]
    assert eligible_staff(ROSTER, [_service("color", {"u_maria"})]) == [MARIA]


def test_no_services_means_no_staff():
    assert eligible_staff(ROSTER, []) == []
    assert eligible_staff(ROSTER, [_service("unassigned", set())]) == []


def test_unknown_assigned_ids_are_ignored():
    assert eligible_staff(ROSTER, [_service("cut", {"u_ghost"})]) == []


def test_staff_search_matches_names_and_position():
    assert filter_staff_by_search(ROSTER, "tamm") == [ANNA]
    assert filter_staff_by_search(ROSTER, "COLOR") == [MARIA]
    assert filter_staff_by_search(ROSTER, "ka") == [KATI]
    assert filter_staff_by_search(ROSTER, "") == list(ROSTER)
    assert filter_staff_by_search(ROSTER, "nobody") == []


def test_find_staff_by_user_id_and_languages():
    assert find_staff(ROSTER, "u_maria") == MARIA
    assert find_staff(ROSTER, "2") is None
    assert ANNA.language_list == ["en", "et"]
    assert MARIA.language_list == []
    assert ANNA.display_name == "Anna Tamm"
