"""
Tests for the category tree: visibility, nested search, flat search, localized names.
"""

from __future__ import annotations

from salon_booking.application.utils.catalog_tree import (
    filter_by_search,
    find_service,
    flatten_search_results,
    has_services,
    iter_services,
    localized_name,
    selected_services,
    visible_categories,
    visible_subcategory_count,
)
from salon_booking.domain.entities.catalog import Category, Service


def _service(service_id: str, name: str, **kwargs) -> Service:
    return Service(id=service_id, name=name, duration_minutes=30, price_cents=2000, **kwargs)


CUT = _service("cut", "Haircut", localized_names={"ru": "Стрижка", "ee": ""})
BEARD = _service("beard", "Beard trim")
BALAYAGE = _service("balayage", "Balayage")
GEL = _service("gel", "Gel polish")

TREE = (
    Category(
        id="hair",
        name="Hair",
        services=(CUT, BEARD),
        subcategories=(
            Category(id="color", name="Coloring", services=(BALAYAGE,), parent_id="hair"),
            Category(id="empty_sub", name="Extensions", parent_id="hair"),
        ),
    ),
    Category(id="nails", name="Nails", services=(GEL,)),
    Category(id="soon", name="Coming soon"),
    Category(
        id="spa",
        name="Spa",
        subcategories=(Category(id="spa_empty", name="Massage", parent_id="spa"),),
    ),
)


def test_visible_categories_hide_empty_subtrees():
    """A category is shown only if it or a descendant holds a service."""
    visible = visible_categories(TREE)

    assert [c.id for c in visible] == ["hair", "nails"]
    assert has_services(TREE[0].subcategories[0])
    assert not has_services(TREE[3])
    # Only "Coloring" counts, "Extensions" is empty
    assert visible_subcategory_count(TREE[0]) == 1


def test_blank_query_returns_visible_tree_unchanged():
    """Empty or whitespace search is the identity on the visible tree."""
    assert filter_by_search(TREE, "") == visible_categories(TREE)
    assert filter_by_search(TREE, "   ") == visible_categories(TREE)
    assert filter_by_search(TREE, None) == visible_categories(TREE)


def test_nested_search_keeps_matching_services_and_paths():
    """Search recurses into subcategories and drops branches left without matches."""
    result = filter_by_search(TREE, "BALA")

    assert [c.id for c in result] == ["hair"]
    hair = result[0]
    assert hair.services == ()
    assert [s.id for s in hair.subcategories] == ["color"]
    assert hair.subcategories[0].services == (BALAYAGE,)


def test_search_matches_localized_names():
    """Any locale variant of the name can match the query."""
    result = filter_by_search(TREE, "стриж")

    assert [s.id for s in result[0].services] == ["cut"]


def test_search_results_are_subset_of_visible_services():
    """Every service in a filtered tree is present in the unfiltered visible tree."""
    all_ids = {s.id for s in iter_services(visible_categories(TREE))}
    for query in ("a", "trim", "gel", "zzz", "Hair"):
        filtered = list(iter_services(filter_by_search(TREE, query)))
        assert {s.id for s in filtered} <= all_ids
        assert all(any(query.lower() in name.lower() for name in s.name_fields()) for s in filtered)


def test_no_match_returns_empty_list():
    assert filter_by_search(TREE, "nothing like this") == []
    assert flatten_search_results(TREE, "nothing like this") == []


def test_flat_search_equals_nested_leaves():
    """The flat dropdown lists exactly the leaves of the nested search, in depth-first order."""
    for query in ("a", "i", "Gel"):
        nested = [s.id for s in iter_services(filter_by_search(TREE, query))]
        flat = [hit.service.id for hit in flatten_search_results(TREE, query)]
        assert flat == nested


def test_flat_search_carries_category_path():
    hits = flatten_search_results(TREE, "balayage")

    assert len(hits) == 1
    assert hits[0].category_path == "Hair > Coloring"


def test_flat_search_blank_query_is_empty():
    assert flatten_search_results(TREE, "") == []
    assert flatten_search_results(TREE, None) == []


def test_localized_name_falls_back_to_base_name():
    """Missing or empty localized values fall back to the base name."""
    assert localized_name(CUT, "ru") == "Стрижка"
    assert localized_name(CUT, "RU") == "Стрижка"
    assert localized_name(CUT, "ee") == "Haircut"
    assert localized_name(CUT, "de") == "Haircut"
    assert localized_name(CUT, None) == "Haircut"


def test_find_and_select_services_in_tree_order():
    assert find_service(TREE, "gel") == GEL
    assert find_service(TREE, "missing") is None
    # Selection order does not matter, results follow the tree
    assert [s.id for s in selected_services(TREE, ["gel", "balayage", "cut"])] == ["cut", "balayage", "gel"]
    assert selected_services(TREE, []) == []


def test_flat_search_path_uses_localized_category_names():
    tree = (
        Category(
            id="hair",
            name="Hair",
            localized_names={"ru": "Волосы"},
            subcategories=(
                Category(id="color", name="Coloring", services=(BALAYAGE,), localized_names={"ru": "Окрашивание"}),
            ),
        ),
    )

    assert flatten_search_results(tree, "balayage", "ru")[0].category_path == "Волосы > Окрашивание"
    assert flatten_search_results(tree, "balayage", "ee")[0].category_path == "Hair > Coloring"
