from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from salon_booking.application.utils.pricing import cents_to_amount
from salon_booking.application.utils.timezone_utils import parse_iso_instant
from salon_booking.domain.entities.booking import BookingConfirmation, ConfirmedService


class BookingLineDTO(BaseModel):
    category_service_id: str
    user_id: str
    notes: str = ""


class CustomerInfoDTO(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    birthday: str | None = None


class BookingRequestDTO(BaseModel):
    start_time: str  # UTC instant, Z suffix
    services: list[BookingLineDTO]
    customer_info: CustomerInfoDTO
    notes: str = ""

    def to_payload(self) -> dict:
        payload = self.model_dump(mode="json")
        if not payload["customer_info"].get("birthday"):
            payload["customer_info"].pop("birthday", None)
        return payload


class _ConfirmationModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class CategoryServiceDTO(_ConfirmationModel):
    name: str = ""
    duration: int = 0
    price: int = 0
    discount_price: int | None = None


class PersonDTO(_ConfirmationModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class BookingServiceDTO(_ConfirmationModel):
    category_service: CategoryServiceDTO = Field(default_factory=CategoryServiceDTO)
    assigned_staff: PersonDTO | None = None


class BookingConfirmationDTO(_ConfirmationModel):
    id: str
    start_at: str
    end_at: str | None = None
    total_price: int = 0
    customer: PersonDTO = Field(default_factory=PersonDTO)
    booking_services: list[BookingServiceDTO] | None = None

    def to_entity(self) -> BookingConfirmation:
        services = []
        for item in self.booking_services or []:
            staff = item.assigned_staff
            services.append(
                ConfirmedService(
                    name=item.category_service.name,
                    duration_minutes=item.category_service.duration,
                    price_cents=item.category_service.price,
                    discount_price_cents=item.category_service.discount_price,
                    staff_name=f"{staff.first_name} {staff.last_name}".strip() if staff else None,
                )
            )
        return BookingConfirmation(
            id=self.id,
            start_at=parse_iso_instant(self.start_at),
            end_at=parse_iso_instant(self.end_at) if self.end_at else None,
            total_price=cents_to_amount(self.total_price),
            customer_name=f"{self.customer.first_name} {self.customer.last_name}".strip(),
            customer_email=self.customer.email,
            services=tuple(services),
        )
