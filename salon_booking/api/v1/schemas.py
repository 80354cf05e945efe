from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class CreateSessionRequestSchema(BaseModel):
    slug: str | None = None
    timezone: str | None = None
    locale: str | None = None


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration_minutes: int
    price: Decimal
    effective_price: Decimal
    category_id: str | None = None
    image_url: str | None = None
    selected: bool = False


class CategorySchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    subcategory_count: int = 0
    services: list[ServiceSchema] = Field(default_factory=list)
    subcategories: list[CategorySchema] = Field(default_factory=list)


class SearchHitSchema(BaseModel):
    service: ServiceSchema
    category_path: str


class StaffSchema(BaseModel):
    id: str
    user_id: str
    first_name: str
    last_name: str
    position: str | None = None
    profile_photo_url: str | None = None
    languages: list[str] = Field(default_factory=list)


class SlotSchema(BaseModel):
    time: str
    available: bool


class CalendarDaySchema(BaseModel):
    date: dt.date | None
    selectable: bool


class CalendarSchema(BaseModel):
    month: dt.date
    days: list[CalendarDaySchema]
    loading: bool = False
    error: str | None = None
    retryable: bool = False


class CustomerInfoSchema(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    phone_country_code: str = "+372"
    birthday: str | None = None
    notes: str = ""


class CustomerUpdateSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    phone_country_code: str | None = None
    birthday: str | None = None
    notes: str | None = None


class WizardStateSchema(BaseModel):
    session_id: str
    company_name: str
    company_logo_url: str | None = None
    step: int
    progress_percent: float
    can_advance: bool
    selected_service_ids: list[str]
    selected_staff_id: str | None = None
    selected_date: dt.date | None = None
    selected_time: str | None = None
    displayed_month: dt.date | None = None
    customer_info: CustomerInfoSchema
    terms_agreed: bool
    total_price: Decimal
    total_duration_minutes: int
    booking_id: str | None = None
    error: str | None = None
    success_message: str | None = None
    phone_country_codes: list[str] = Field(default_factory=list)


class SelectStaffRequestSchema(BaseModel):
    staff_id: str


class MonthRequestSchema(BaseModel):
    month: dt.date


class DateRequestSchema(BaseModel):
    date: dt.date


class TimeRequestSchema(BaseModel):
    time: str = Field(pattern=r"^\d{2}:\d{2}$")


class TermsRequestSchema(BaseModel):
    agreed: bool


class StepRequestSchema(BaseModel):
    step: int = Field(ge=1, le=4)


class SubmissionResponseSchema(BaseModel):
    booking_id: str | None = None
    message: str


class ConfirmedServiceSchema(BaseModel):
    name: str
    duration_minutes: int
    price: Decimal
    staff_name: str | None = None


class ConfirmationSchema(BaseModel):
    id: str
    start_at: dt.datetime
    end_at: dt.datetime | None = None
    total_price: Decimal
    customer_name: str
    customer_email: str
    services: list[ConfirmedServiceSchema] = Field(default_factory=list)
