from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    duration_minutes: int
    price_cents: int
    discount_price_cents: int | None = None
    category_id: str | None = None  # assigned from the owning category during ingestion
    localized_names: dict[str, str] = field(default_factory=dict)  # locale -> name, e.g. {"en": ..., "ru": ...}
    assigned_staff_ids: frozenset[str] = frozenset()  # staff user ids
    image_url: str | None = None

    def name_fields(self) -> list[str]:
        return [self.name, *self.localized_names.values()]


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    services: tuple[Service, ...] = ()
    subcategories: tuple[Category, ...] = ()
    parent_id: str | None = None
    description: str | None = None
    localized_names: dict[str, str] = field(default_factory=dict)
