from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from salon_booking.application.dto.availability_dto import parse_availability
from salon_booking.application.dto.booking_dto import BookingConfirmationDTO
from salon_booking.application.dto.catalog_dto import CategoryDTO, CompanyDTO, StaffDTO
from salon_booking.application.dto.envelope import EnvelopeDTO
from salon_booking.application.exceptions import ApiContractError, ApiRejectedError, ApiUpstreamError
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.application.ports.transport import TransportPort
from salon_booking.domain.entities.availability import DayAvailability
from salon_booking.domain.entities.booking import BookingConfirmation
from salon_booking.domain.entities.catalog import Category
from salon_booking.domain.entities.company import Company
from salon_booking.domain.entities.staff import Staff


class PublicBookingApi(BookingApiPort):
    """
    Adapter for the salon platform's public (unauthenticated) booking endpoints.

    Contract guarantees:
    - every call unwraps the {success, data, message} envelope
    - Raises:
        ApiUpstreamError: network failures, timeouts, error statuses without an envelope
        ApiRejectedError: success=false, server message kept verbatim
        ApiContractError: body or data not in the expected shape
    """

    def __init__(self, transport: TransportPort, base_url: str) -> None:
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._logger = logging.getLogger(__name__)

    async def get_company(self, slug: str) -> Company | None:
        envelope = await self._request(f"/companies/slug/{slug}")
        if not isinstance(envelope.data, dict):
            return None
        try:
            return CompanyDTO.model_validate(envelope.data).to_entity()
        except ValidationError as e:
            raise ApiContractError(f"Company: unexpected data shape ({e.error_count()} errors)") from e

    async def get_catalog(self, slug: str) -> tuple[list[Category], str | None]:
        envelope = await self._request(f"/public/companies/{slug}/services")
        raw = envelope.data or []
        if not isinstance(raw, list):
            raise ApiContractError("Services: 'data' must be a list of categories.")
        try:
            categories = [CategoryDTO.model_validate(item).to_entity() for item in raw]
        except ValidationError as e:
            raise ApiContractError(f"Services: unexpected category shape ({e.error_count()} errors)") from e
        return categories, envelope.company_name

    async def get_staff(self, slug: str) -> list[Staff]:
        envelope = await self._request(f"/public/companies/{slug}/staff")
        raw = envelope.data or []
        if not isinstance(raw, list):
            raise ApiContractError("Staff: 'data' must be a list.")
        try:
            return [StaffDTO.model_validate(item).to_entity() for item in raw]
        except ValidationError as e:
            raise ApiContractError(f"Staff: unexpected member shape ({e.error_count()} errors)") from e

    async def get_availability(
        self,
        slug: str,
        staff_id: str,
        date_from: date,
        service_ids: list[str],
    ) -> list[DayAvailability]:
        params = [("date_from", date_from.isoformat()), ("availability_type", "monthly")]
        params.extend(("service_ids", service_id) for service_id in service_ids)
        envelope = await self._request(f"/public/companies/{slug}/users/{staff_id}/availability", params=params)
        return parse_availability(envelope.data)

    async def create_booking(self, slug: str, payload: dict[str, Any]) -> str | None:
        envelope = await self._request(f"/public/companies/{slug}/bookings", method="POST", json=payload)
        data = envelope.data if isinstance(envelope.data, dict) else {}
        booking_id = data.get("id")
        return str(booking_id) if booking_id else None

    async def get_booking(self, booking_id: str) -> BookingConfirmation:
        envelope = await self._request(f"/public/bookings/{booking_id}")
        try:
            return BookingConfirmationDTO.model_validate(envelope.data).to_entity()
        except (ValidationError, ValueError) as e:
            raise ApiContractError("Booking: unexpected data shape.") from e

    async def _request(
        self,
        path: str,
        method: str = "GET",
        params: list[tuple[str, str]] | None = None,
        json: dict[str, Any] | None = None,
    ) -> EnvelopeDTO:
        url = f"{self._base_url}{path}"
        response = await self._transport.fetch(url, method=method, params=params, json=json)

        if not isinstance(response.json, dict):
            if response.status >= 400:
                raise ApiUpstreamError(
                    f"{method} {path} failed with status {response.status}",
                    status=response.status,
                    retryable=response.status >= 500,
                )
            raise ApiContractError(f"{method} {path}: response body is not a JSON object.")

        try:
            envelope = EnvelopeDTO.model_validate(response.json)
        except ValidationError as e:
            raise ApiContractError(f"{method} {path}: missing or invalid 'success' flag.") from e

        if not envelope.success:
            message = envelope.message or f"{method} {path} was rejected"
            self._logger.info("Booking API rejected request", extra={"status": response.status, "error": message})
            raise ApiRejectedError(message, status=response.status)
        if response.status >= 400:
            raise ApiUpstreamError(
                f"{method} {path} failed with status {response.status}",
                status=response.status,
                retryable=response.status >= 500,
            )
        return envelope
