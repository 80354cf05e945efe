from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from salon_booking.domain.entities.catalog import Category, Service

PATH_SEPARATOR = " > "


@dataclass(frozen=True)
class ServiceSearchHit:
    service: Service
    category_path: str  # e.g. "Hair > Coloring"


def has_services(category: Category) -> bool:
    """True if the category or any of its descendants holds at least one service."""
    if category.services:
        return True
    return any(has_services(sub) for sub in category.subcategories)


def visible_categories(tree: Iterable[Category]) -> list[Category]:
    return [category for category in tree if has_services(category)]


def visible_subcategory_count(category: Category) -> int:
    return sum(1 for sub in category.subcategories if has_services(sub))


def localized_name(service: Service | Category, locale: str | None) -> str:
    """Locale-specific name when present and non-empty, otherwise the base name."""
    if locale:
        value = service.localized_names.get(locale.lower())
        if value and value.strip():
            return value
    return service.name


def matches_query(service: Service, query: str) -> bool:
    needle = query.strip().lower()
    return any(needle in (name or "").lower() for name in service.name_fields())


def filter_by_search(tree: Iterable[Category], query: str | None) -> list[Category]:
    """
    Nested search view: keep matching services, recurse into subcategories and drop
    categories left with neither services nor subcategories.
    A blank query returns the visible categories unchanged.
    """
    if not query or not query.strip():
        return visible_categories(tree)

    filtered: list[Category] = []
    for category in tree:
        kept = _filter_category(category, query)
        if kept is not None:
            filtered.append(kept)
    return filtered


def _filter_category(category: Category, query: str) -> Category | None:
    services = tuple(s for s in category.services if matches_query(s, query))
    subcategories = tuple(
        kept for kept in (_filter_category(sub, query) for sub in category.subcategories) if kept is not None
    )
    if not services and not subcategories:
        return None
    return replace(category, services=services, subcategories=subcategories)


def flatten_search_results(
    tree: Iterable[Category],
    query: str | None,
    locale: str | None = None,
) -> list[ServiceSearchHit]:
    """Depth-first list of matching services with their ancestor path, for the flat dropdown."""
    if not query or not query.strip():
        return []

    hits: list[ServiceSearchHit] = []

    def walk(category: Category, ancestors: list[str]) -> None:
        path = [*ancestors, localized_name(category, locale)]
        for service in category.services:
            if matches_query(service, query):
                hits.append(ServiceSearchHit(service=service, category_path=PATH_SEPARATOR.join(path)))
        for sub in category.subcategories:
            walk(sub, path)

    for category in tree:
        walk(category, [])
    return hits


def iter_services(tree: Iterable[Category]) -> Iterator[Service]:
    for category in tree:
        yield from category.services
        yield from iter_services(category.subcategories)


def all_services(category: Category) -> list[Service]:
    return list(iter_services([category]))


def find_service(tree: Iterable[Category], service_id: str) -> Service | None:
    for service in iter_services(tree):
        if service.id == service_id:
            return service
    return None


def selected_services(tree: Iterable[Category], service_ids: Iterable[str]) -> list[Service]:
    """Selected services in catalog (tree) order."""
    wanted = set(service_ids)
    if not wanted:
        return []
    return [service for service in iter_services(tree) if service.id in wanted]
