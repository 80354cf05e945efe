from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from salon_booking.domain.entities.catalog import Category, Service
from salon_booking.domain.entities.company import Company
from salon_booking.domain.entities.staff import Staff

LOCALIZED_NAME_FIELDS = {"en": "name_en", "ee": "name_ee", "ru": "name_ru"}


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


def _localized_names(model: BaseModel) -> dict[str, str]:
    localized = {}
    for locale, field_name in LOCALIZED_NAME_FIELDS.items():
        value = getattr(model, field_name, None)
        if value and value.strip():
            localized[locale] = value
    return localized


class ServiceStaffDTO(_WireModel):
    user_id: str


class ServiceDTO(_WireModel):
    id: str
    name: str
    name_en: str | None = None
    name_ee: str | None = None
    name_ru: str | None = None
    duration: int = 0
    price: int = 0
    discount_price: int | None = None
    image_url: str | None = None
    service_staff: list[ServiceStaffDTO] | None = None

    def to_entity(self, category_id: str) -> Service:
        return Service(
            id=self.id,
            name=self.name,
            duration_minutes=self.duration,
            price_cents=self.price,
            discount_price_cents=self.discount_price,
            category_id=category_id,
            localized_names=_localized_names(self),
            assigned_staff_ids=frozenset(s.user_id for s in self.service_staff or []),
            image_url=self.image_url,
        )


class CategoryDTO(_WireModel):
    id: str
    name: str
    name_en: str | None = None
    name_ee: str | None = None
    name_ru: str | None = None
    description: str | None = None
    services: list[ServiceDTO] | None = None
    parent_category_id: str | None = None
    subcategories: list[CategoryDTO] | None = None

    def to_entity(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            description=self.description,
            parent_id=self.parent_category_id,
            localized_names=_localized_names(self),
            services=tuple(s.to_entity(category_id=self.id) for s in self.services or []),
            subcategories=tuple(sub.to_entity() for sub in self.subcategories or []),
        )


class StaffUserDTO(_WireModel):
    first_name: str = ""
    last_name: str = ""
    position: str | None = None
    profile_photo_url: str | None = None
    languages: str | None = None


class StaffDTO(_WireModel):
    id: str
    user_id: str
    profile_photo_url: str | None = None
    user: StaffUserDTO | None = None

    def to_entity(self) -> Staff:
        user = self.user or StaffUserDTO()
        return Staff(
            id=self.id,
            user_id=self.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            position=user.position,
            profile_photo_url=user.profile_photo_url or self.profile_photo_url,
            languages=user.languages,
        )


class CompanyDTO(_WireModel):
    id: str | None = None
    name: str | None = None
    logo_url: str | None = None

    def to_entity(self) -> Company | None:
        if not self.name:
            return None
        return Company(id=self.id, name=self.name, logo_url=self.logo_url or None)
