from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from salon_booking.application.dto.booking_dto import BookingLineDTO, BookingRequestDTO, CustomerInfoDTO
from salon_booking.application.exceptions import (
    ApiContractError,
    ApiRejectedError,
    ApiUpstreamError,
    BookingSubmissionError,
    UnknownSelectionError,
    WizardValidationError,
)
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.application.use_cases.availability import AvailabilityEngine
from salon_booking.application.utils import catalog_tree, pricing, staff_roster
from salon_booking.application.utils.calendar_grid import first_of_month, shift_month
from salon_booking.application.utils.customer_validation import customer_errors
from salon_booking.application.utils.timezone_utils import local_to_utc_instant, to_iso_z
from salon_booking.domain.entities.availability import TimeSlot
from salon_booking.domain.entities.booking import BookingConfirmation, SubmissionResult
from salon_booking.domain.entities.booking_state import BookingWizardState, CustomerInfo, WizardStep
from salon_booking.domain.entities.catalog import Category, Service
from salon_booking.domain.entities.company import BookingContext
from salon_booking.domain.entities.staff import Staff
from salon_booking.domain.entities.viewer import ViewerContext

SUCCESS_WITHOUT_ID_MESSAGE = "Booking created successfully! You will receive a confirmation email shortly."
PROGRESS_PER_STEP = 33.33


# Step gates and exit hooks. Predicates never mutate; exit hooks return a new state.

def services_selected(state: BookingWizardState, context: BookingContext) -> bool:
    return bool(state.selected_service_ids)


def eligible_staff_selected(state: BookingWizardState, context: BookingContext) -> bool:
    if not state.selected_staff_id:
        return False
    return state.selected_staff_id in _eligible_ids(state, context)


def date_and_time_selected(state: BookingWizardState, context: BookingContext) -> bool:
    return state.selected_date is not None and bool(state.selected_time)


def terms_agreed(state: BookingWizardState, context: BookingContext) -> bool:
    return state.terms_agreed


def keep_state(state: BookingWizardState, context: BookingContext) -> BookingWizardState:
    return state


def drop_ineligible_staff(state: BookingWizardState, context: BookingContext) -> BookingWizardState:
    """Leaving the services step: a professional not assigned to the new selection is unselected."""
    if state.selected_staff_id and state.selected_staff_id not in _eligible_ids(state, context):
        return replace(state, selected_staff_id=None, selected_time=None)
    return state


def _eligible_ids(state: BookingWizardState, context: BookingContext) -> set[str]:
    services = catalog_tree.selected_services(context.categories, state.selected_service_ids)
    return {member.user_id for member in staff_roster.eligible_staff(context.staff, services)}


@dataclass(frozen=True)
class StepRule:
    can_advance: Callable[[BookingWizardState, BookingContext], bool]
    on_exit: Callable[[BookingWizardState, BookingContext], BookingWizardState]
    message: str


STEP_RULES: dict[WizardStep, StepRule] = {
    WizardStep.SERVICES: StepRule(services_selected, drop_ineligible_staff, "Please select at least one service"),
    WizardStep.PROFESSIONAL: StepRule(eligible_staff_selected, keep_state, "Please choose a professional"),
    WizardStep.DATE_TIME: StepRule(date_and_time_selected, keep_state, "Please pick a date and time"),
    WizardStep.DETAILS: StepRule(terms_agreed, keep_state, "Please agree to the terms and conditions"),
}


class BookingWizard:
    """
    Four-step booking flow: services -> professional -> date/time -> details -> submitted.

    Backward moves are always allowed; forward moves pass through STEP_RULES one step at a
    time. Validation failures raise WizardValidationError before any network call.
    """

    def __init__(
        self,
        api: BookingApiPort,
        context: BookingContext,
        viewer: ViewerContext,
        availability: AvailabilityEngine,
        today: date | None = None,
        default_phone_country_code: str = "+372",
    ) -> None:
        self._api = api
        self._context = context
        self._viewer = viewer
        self._availability = availability
        self._today = today
        self._default_phone_country_code = default_phone_country_code
        self.error: str | None = None
        self.success_message: str | None = None
        self._state = self._initial_state()
        self._logger = logging.getLogger(__name__)

    def _initial_state(self) -> BookingWizardState:
        return BookingWizardState(
            displayed_month=first_of_month(self.today),
            customer_info=CustomerInfo(phone_country_code=self._default_phone_country_code),
        )

    @property
    def state(self) -> BookingWizardState:
        return self._state

    @property
    def context(self) -> BookingContext:
        return self._context

    @property
    def viewer(self) -> ViewerContext:
        return self._viewer

    @property
    def availability(self) -> AvailabilityEngine:
        return self._availability

    @property
    def today(self) -> date:
        return self._today or datetime.now(self._viewer.timezone).date()

    # ---- derived views -------------------------------------------------

    def categories(self, query: str | None = None) -> list[Category]:
        return catalog_tree.filter_by_search(self._context.categories, query)

    def search_services(self, query: str | None) -> list[catalog_tree.ServiceSearchHit]:
        return catalog_tree.flatten_search_results(self._context.categories, query, self._viewer.locale)

    def service_name(self, service: Service) -> str:
        return catalog_tree.localized_name(service, self._viewer.locale)

    def selected_services(self) -> list[Service]:
        return catalog_tree.selected_services(self._context.categories, self._state.selected_service_ids)

    def eligible_staff(self, query: str | None = None) -> list[Staff]:
        eligible = staff_roster.eligible_staff(self._context.staff, self.selected_services())
        return staff_roster.filter_staff_by_search(eligible, query)

    def selected_staff(self) -> Staff | None:
        if not self._state.selected_staff_id:
            return None
        return staff_roster.find_staff(self._context.staff, self._state.selected_staff_id)

    def total_price(self) -> Decimal:
        return pricing.total_price(self.selected_services())

    def total_duration(self) -> int:
        return pricing.total_duration(self.selected_services())

    def time_slots(self) -> list[TimeSlot]:
        if self._state.selected_date is None:
            return []
        return self._availability.slots_for(self._state.selected_date, self.total_duration())

    def month_grid(self) -> list[tuple[date | None, bool]]:
        return self._availability.month_grid(self._displayed_month(), self.today)

    def can_advance(self) -> bool:
        rule = STEP_RULES.get(self._state.step)
        return rule.can_advance(self._state, self._context) if rule else False

    @property
    def progress_percent(self) -> float:
        return min(100.0, round((int(self._state.step) - 1) * PROGRESS_PER_STEP, 2))

    # ---- transitions ---------------------------------------------------

    async def toggle_service(self, service_id: str) -> None:
        self._ensure_not_submitted()
        if catalog_tree.find_service(self._context.categories, service_id) is None:
            raise UnknownSelectionError(f"Unknown service: {service_id}")

        selected = self._state.selected_service_ids
        if service_id in selected:
            selected = tuple(sid for sid in selected if sid != service_id)
        else:
            selected = (*selected, service_id)
        self._state = replace(self._state, selected_service_ids=selected, selected_time=None)

        if self._state.step == WizardStep.DATE_TIME:
            await self._refresh_availability()

    async def select_staff(self, staff_id: str) -> None:
        self._ensure_not_submitted()
        if staff_roster.find_staff(self._context.staff, staff_id) is None:
            raise UnknownSelectionError(f"Unknown staff member: {staff_id}")
        if staff_id not in {member.user_id for member in self.eligible_staff()}:
            raise WizardValidationError(
                "This professional does not offer the selected services", step=WizardStep.PROFESSIONAL
            )

        self._state = replace(self._state, selected_staff_id=staff_id, selected_time=None)
        if self._state.step == WizardStep.DATE_TIME:
            await self._refresh_availability()

    async def show_month(self, month: date) -> None:
        self._ensure_not_submitted()
        target = first_of_month(month)
        if target == self._state.displayed_month:
            return
        self._state = replace(self._state, displayed_month=target)
        if self._state.step == WizardStep.DATE_TIME:
            await self._refresh_availability()

    async def next_month(self) -> None:
        await self.show_month(shift_month(self._displayed_month(), 1))

    async def previous_month(self) -> None:
        await self.show_month(shift_month(self._displayed_month(), -1))

    def select_date(self, day: date) -> None:
        self._ensure_not_submitted()
        if not self._availability.is_date_selectable(day, self.today):
            raise WizardValidationError("This date has no available times", step=WizardStep.DATE_TIME)
        self._state = replace(self._state, selected_date=day, selected_time=None)

    def select_time(self, time_str: str) -> None:
        self._ensure_not_submitted()
        if self._state.selected_date is None:
            raise WizardValidationError("Please pick a date first", step=WizardStep.DATE_TIME)
        if not any(slot.available and slot.time == time_str for slot in self.time_slots()):
            raise WizardValidationError("This time is not available", step=WizardStep.DATE_TIME)
        self._state = replace(self._state, selected_time=time_str)

    def update_customer(self, **fields: Any) -> None:
        self._ensure_not_submitted()
        self._state = replace(self._state, customer_info=replace(self._state.customer_info, **fields))

    def set_terms_agreed(self, agreed: bool) -> None:
        self._ensure_not_submitted()
        self._state = replace(self._state, terms_agreed=agreed)

    async def next_step(self) -> None:
        await self.go_to_step(WizardStep(min(int(self._state.step) + 1, WizardStep.DETAILS)))

    async def previous_step(self) -> None:
        await self.go_to_step(WizardStep(max(int(self._state.step) - 1, WizardStep.SERVICES)))

    async def go_to_step(self, step: WizardStep | int) -> None:
        self._ensure_not_submitted()
        target = WizardStep(step)
        if target == WizardStep.SUBMITTED:
            raise WizardValidationError("Use submit() to finish the booking", step=self._state.step)

        current = self._state.step
        if target == current:
            return
        if target < current:
            self._state = replace(self._state, step=target)
            self.error = None
            if target == WizardStep.DATE_TIME and not self._availability_matches_selection():
                await self._refresh_availability()
            return

        state = self._state
        for step_value in range(int(current), int(target)):
            rule = STEP_RULES[WizardStep(step_value)]
            if not rule.can_advance(state, self._context):
                self.error = rule.message
                raise WizardValidationError(rule.message, step=step_value)
            state = replace(rule.on_exit(state, self._context), step=WizardStep(step_value + 1))

        self._state = state
        self.error = None
        self._logger.info("Wizard step changed", extra={"step": int(target)})
        if target == WizardStep.DATE_TIME:
            await self._refresh_availability()

    async def retry_availability(self) -> None:
        if self._state.step == WizardStep.DATE_TIME:
            await self._refresh_availability()

    # ---- submission ----------------------------------------------------

    def build_payload(self) -> dict[str, Any]:
        state = self._state
        if state.selected_date is None or not state.selected_time or not state.selected_staff_id:
            raise WizardValidationError("Please pick a professional, date and time", step=state.step)

        start = local_to_utc_instant(state.selected_date, state.selected_time, self._viewer.timezone)
        info = state.customer_info
        request = BookingRequestDTO(
            start_time=to_iso_z(start),
            services=[
                BookingLineDTO(category_service_id=service_id, user_id=state.selected_staff_id)
                for service_id in state.selected_service_ids
            ],
            customer_info=CustomerInfoDTO(
                first_name=info.first_name.strip(),
                last_name=info.last_name.strip(),
                email=info.email.strip(),
                phone=info.full_phone,
                birthday=info.birthday or None,
            ),
            notes=info.notes,
        )
        return request.to_payload()

    async def submit(self) -> SubmissionResult:
        if self._state.step != WizardStep.DETAILS:
            raise WizardValidationError("Complete the previous steps first", step=self._state.step)

        rule = STEP_RULES[WizardStep.DETAILS]
        if not rule.can_advance(self._state, self._context):
            self.error = rule.message
            raise WizardValidationError(rule.message, step=WizardStep.DETAILS)
        problems = customer_errors(self._state.customer_info)
        if problems:
            self.error = problems[0]
            raise WizardValidationError(problems[0], step=WizardStep.DETAILS)

        payload = self.build_payload()
        self.error = None
        try:
            booking_id = await self._api.create_booking(self._context.slug, payload)
        except (ApiRejectedError, ApiUpstreamError, ApiContractError) as e:
            message = str(e) or "Failed to create booking. Please try again."
            self.error = message
            self._logger.error("Booking submission failed", extra={"error": message})
            raise BookingSubmissionError(message, retryable=getattr(e, "retryable", True)) from e

        self._state = replace(self._state, step=WizardStep.SUBMITTED, booking_id=booking_id)
        self.success_message = None if booking_id else SUCCESS_WITHOUT_ID_MESSAGE
        self._logger.info("Booking created", extra={"booking_id": booking_id, "start": payload["start_time"]})
        return SubmissionResult(booking_id=booking_id, message=self.success_message or "Booking created")

    async def confirmation(self) -> BookingConfirmation:
        if self._state.step != WizardStep.SUBMITTED or not self._state.booking_id:
            raise WizardValidationError("No booking has been created yet", step=self._state.step)
        return await self._api.get_booking(self._state.booking_id)

    def reset(self) -> None:
        self._availability.invalidate()
        self._state = self._initial_state()
        self.error = None
        self.success_message = None

    # ---- helpers -------------------------------------------------------

    def _displayed_month(self) -> date:
        return self._state.displayed_month or first_of_month(self.today)

    def _ensure_not_submitted(self) -> None:
        if self._state.step == WizardStep.SUBMITTED:
            raise WizardValidationError("This booking has already been submitted", step=WizardStep.SUBMITTED)

    def _availability_matches_selection(self) -> bool:
        key = self._availability.loaded_key
        state = self._state
        return (
            key is not None
            and key.staff_id == state.selected_staff_id
            and key.service_ids == tuple(sorted(state.selected_service_ids))
            and key.month == self._displayed_month()
        )

    async def _refresh_availability(self) -> None:
        state = self._state
        if not state.selected_staff_id or not state.selected_service_ids:
            self._availability.invalidate()
            return
        await self._availability.refresh(state.selected_staff_id, state.selected_service_ids, self._displayed_month())
