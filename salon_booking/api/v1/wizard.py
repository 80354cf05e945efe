from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import (
    CalendarDaySchema,
    CalendarSchema,
    CategorySchema,
    ConfirmationSchema,
    ConfirmedServiceSchema,
    CreateSessionRequestSchema,
    CustomerInfoSchema,
    CustomerUpdateSchema,
    DateRequestSchema,
    MonthRequestSchema,
    SearchHitSchema,
    SelectStaffRequestSchema,
    ServiceSchema,
    SlotSchema,
    StaffSchema,
    StepRequestSchema,
    SubmissionResponseSchema,
    TermsRequestSchema,
    TimeRequestSchema,
    WizardStateSchema,
)
from salon_booking.application.exceptions import (
    ApiRejectedError,
    BookingContextLoadError,
    BookingSubmissionError,
    BookingWizardError,
    UnknownSelectionError,
    WizardValidationError,
)
from salon_booking.application.ports.wizard_session_store import WizardSessionStorePort
from salon_booking.application.use_cases.booking_wizard import BookingWizard
from salon_booking.application.utils.catalog_tree import localized_name, visible_subcategory_count
from salon_booking.application.utils.customer_validation import SUPPORTED_COUNTRY_CODES
from salon_booking.application.utils.pricing import cents_to_amount, discounted_cents, effective_price
from salon_booking.core.config import settings
from salon_booking.domain.entities.catalog import Category, Service
from salon_booking.domain.entities.staff import Staff
from salon_booking.wiring.dependencies import build_wizard, get_booking_context, get_session_store, get_viewer_context

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(e: BookingWizardError) -> HTTPException:
    if isinstance(e, WizardValidationError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, UnknownSelectionError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, BookingSubmissionError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, BookingContextLoadError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, ApiRejectedError) and e.status == 404:
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


def _get_wizard(session_id: str, store: WizardSessionStorePort) -> BookingWizard:
    wizard = store.get(session_id)
    if wizard is None:
        raise HTTPException(status_code=404, detail="Booking session not found")
    return wizard


def _service_schema(wizard: BookingWizard, service: Service) -> ServiceSchema:
    return ServiceSchema(
        id=service.id,
        name=wizard.service_name(service),
        duration_minutes=service.duration_minutes,
        price=cents_to_amount(service.price_cents),
        effective_price=cents_to_amount(effective_price(service)),
        category_id=service.category_id,
        image_url=service.image_url,
        selected=service.id in wizard.state.selected_service_ids,
    )


def _category_schema(wizard: BookingWizard, category: Category) -> CategorySchema:
    return CategorySchema(
        id=category.id,
        name=localized_name(category, wizard.viewer.locale),
        description=category.description,
        subcategory_count=visible_subcategory_count(category),
        services=[_service_schema(wizard, s) for s in category.services],
        subcategories=[_category_schema(wizard, sub) for sub in category.subcategories],
    )


def _staff_schema(member: Staff) -> StaffSchema:
    return StaffSchema(
        id=member.id,
        user_id=member.user_id,
        first_name=member.first_name,
        last_name=member.last_name,
        position=member.position,
        profile_photo_url=member.profile_photo_url,
        languages=member.language_list,
    )


def _state_schema(session_id: str, wizard: BookingWizard) -> WizardStateSchema:
    state = wizard.state
    info = state.customer_info
    return WizardStateSchema(
        session_id=session_id,
        company_name=wizard.context.company.name,
        company_logo_url=wizard.context.company.logo_url,
        step=int(state.step),
        progress_percent=wizard.progress_percent,
        can_advance=wizard.can_advance(),
        selected_service_ids=list(state.selected_service_ids),
        selected_staff_id=state.selected_staff_id,
        selected_date=state.selected_date,
        selected_time=state.selected_time,
        displayed_month=state.displayed_month,
        customer_info=CustomerInfoSchema(
            first_name=info.first_name,
            last_name=info.last_name,
            email=info.email,
            phone=info.phone,
            phone_country_code=info.phone_country_code,
            birthday=info.birthday,
            notes=info.notes,
        ),
        terms_agreed=state.terms_agreed,
        total_price=wizard.total_price(),
        total_duration_minutes=wizard.total_duration(),
        booking_id=state.booking_id,
        error=wizard.error,
        success_message=wizard.success_message,
        phone_country_codes=list(SUPPORTED_COUNTRY_CODES),
    )


@router.post("/sessions", response_model=WizardStateSchema, status_code=201)
async def create_session(
    req: CreateSessionRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    slug = req.slug or settings.COMPANY_SLUG
    try:
        context = await get_booking_context(slug)
    except BookingWizardError as e:
        raise _http_error(e)

    wizard = build_wizard(context, get_viewer_context(req.timezone, req.locale))
    session_id = store.create(wizard)
    logger.info("Booking session created", extra={"session_id": session_id})
    return _state_schema(session_id, wizard)


@router.get("/sessions/{session_id}", response_model=WizardStateSchema)
def get_session(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    return _state_schema(session_id, _get_wizard(session_id, store))


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    store.delete(session_id)


@router.get("/sessions/{session_id}/catalog", response_model=list[CategorySchema])
def get_catalog(
    session_id: str,
    q: str | None = Query(None),
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    return [_category_schema(wizard, c) for c in wizard.categories(q)]


@router.get("/sessions/{session_id}/catalog/search", response_model=list[SearchHitSchema])
def search_catalog(
    session_id: str,
    q: str = Query(""),
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    return [
        SearchHitSchema(service=_service_schema(wizard, hit.service), category_path=hit.category_path)
        for hit in wizard.search_services(q)
    ]


@router.post("/sessions/{session_id}/services/{service_id}/toggle", response_model=WizardStateSchema)
async def toggle_service(
    session_id: str,
    service_id: str,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        await wizard.toggle_service(service_id)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.get("/sessions/{session_id}/staff", response_model=list[StaffSchema])
def get_staff(
    session_id: str,
    q: str | None = Query(None),
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    return [_staff_schema(m) for m in wizard.eligible_staff(q)]


@router.put("/sessions/{session_id}/staff", response_model=WizardStateSchema)
async def select_staff(
    session_id: str,
    req: SelectStaffRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        await wizard.select_staff(req.staff_id)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.get("/sessions/{session_id}/calendar", response_model=CalendarSchema)
def get_calendar(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    wizard = _get_wizard(session_id, store)
    engine = wizard.availability
    return CalendarSchema(
        month=wizard.state.displayed_month or wizard.today.replace(day=1),
        days=[CalendarDaySchema(date=day, selectable=ok) for day, ok in wizard.month_grid()],
        loading=engine.loading,
        error=engine.last_error,
        retryable=engine.last_error_retryable,
    )


@router.put("/sessions/{session_id}/month", response_model=WizardStateSchema)
async def show_month(
    session_id: str,
    req: MonthRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        await wizard.show_month(req.month)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.post("/sessions/{session_id}/availability/retry", response_model=CalendarSchema)
async def retry_availability(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    wizard = _get_wizard(session_id, store)
    await wizard.retry_availability()
    return get_calendar(session_id, store)


@router.put("/sessions/{session_id}/date", response_model=WizardStateSchema)
def select_date(
    session_id: str,
    req: DateRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        wizard.select_date(req.date)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.get("/sessions/{session_id}/slots", response_model=list[SlotSchema])
def get_slots(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    wizard = _get_wizard(session_id, store)
    return [SlotSchema(time=slot.time, available=slot.available) for slot in wizard.time_slots()]


@router.put("/sessions/{session_id}/time", response_model=WizardStateSchema)
def select_time(
    session_id: str,
    req: TimeRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        wizard.select_time(req.time)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.put("/sessions/{session_id}/customer", response_model=WizardStateSchema)
def update_customer(
    session_id: str,
    req: CustomerUpdateSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        fields = req.model_dump(exclude_unset=True)
        # only birthday can be cleared
        wizard.update_customer(**{k: v for k, v in fields.items() if v is not None or k == "birthday"})
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.put("/sessions/{session_id}/terms", response_model=WizardStateSchema)
def set_terms(
    session_id: str,
    req: TermsRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        wizard.set_terms_agreed(req.agreed)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.post("/sessions/{session_id}/step", response_model=WizardStateSchema)
async def go_to_step(
    session_id: str,
    req: StepRequestSchema,
    store: WizardSessionStorePort = Depends(get_session_store),
):
    wizard = _get_wizard(session_id, store)
    try:
        await wizard.go_to_step(req.step)
    except BookingWizardError as e:
        raise _http_error(e)
    return _state_schema(session_id, wizard)


@router.post("/sessions/{session_id}/submit", response_model=SubmissionResponseSchema)
async def submit(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    wizard = _get_wizard(session_id, store)
    try:
        result = await wizard.submit()
    except BookingWizardError as e:
        raise _http_error(e)
    return SubmissionResponseSchema(booking_id=result.booking_id, message=result.message)


@router.get("/sessions/{session_id}/confirmation", response_model=ConfirmationSchema)
async def get_confirmation(session_id: str, store: WizardSessionStorePort = Depends(get_session_store)):
    wizard = _get_wizard(session_id, store)
    try:
        confirmation = await wizard.confirmation()
    except BookingWizardError as e:
        raise _http_error(e)
    return ConfirmationSchema(
        id=confirmation.id,
        start_at=confirmation.start_at,
        end_at=confirmation.end_at,
        total_price=confirmation.total_price,
        customer_name=confirmation.customer_name,
        customer_email=confirmation.customer_email,
        services=[
            ConfirmedServiceSchema(
                name=s.name,
                duration_minutes=s.duration_minutes,
                price=cents_to_amount(discounted_cents(s.price_cents, s.discount_price_cents)),
                staff_name=s.staff_name,
            )
            for s in confirmation.services
        ],
    )
