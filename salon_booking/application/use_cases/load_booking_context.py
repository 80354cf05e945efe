from __future__ import annotations

import logging

from salon_booking.application.exceptions import BookingContextLoadError, BookingWizardError
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.domain.entities.company import BookingContext, Company

FALLBACK_COMPANY_NAME = "Salon"


class LoadBookingContextUseCase:
    """Fetch company, catalog and staff once per company. Any failure blocks the wizard."""

    def __init__(self, api: BookingApiPort) -> None:
        self._api = api
        self._logger = logging.getLogger(__name__)

    async def execute(self, slug: str) -> BookingContext:
        if not slug or not slug.strip():
            raise BookingContextLoadError("Company slug is required")

        try:
            company = await self._api.get_company(slug)
            categories, catalog_company_name = await self._api.get_catalog(slug)
            staff = await self._api.get_staff(slug)
        except BookingWizardError as e:
            self._logger.error("Failed to load booking data", extra={"slug": slug, "error": str(e)})
            raise BookingContextLoadError(str(e) or "Failed to load booking data") from e

        name = (company.name if company else None) or catalog_company_name or FALLBACK_COMPANY_NAME
        resolved = Company(
            name=name,
            id=company.id if company else None,
            logo_url=company.logo_url if company else None,
        )
        self._logger.info(
            "Booking data loaded",
            extra={"slug": slug, "category_count": len(categories), "staff_count": len(staff)},
        )
        return BookingContext(slug=slug, company=resolved, categories=tuple(categories), staff=tuple(staff))
