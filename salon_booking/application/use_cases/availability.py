from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from salon_booking.application.exceptions import ApiUpstreamError, BookingWizardError
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.application.utils.calendar_grid import calendar_days, first_of_month, is_date_selectable
from salon_booking.application.utils.slot_derivation import (
    DEFAULT_SLOT_INTERVAL_MINUTES,
    has_available_slots,
    slots_for_day,
)
from salon_booking.domain.entities.availability import DayAvailability, TimeSlot
from salon_booking.domain.entities.viewer import ViewerContext


@dataclass(frozen=True)
class AvailabilityKey:
    staff_id: str
    service_ids: tuple[str, ...]
    month: date


class AvailabilityEngine:
    """
    Monthly availability cache for one wizard.

    Each refresh is tagged with a generation number; a response that arrives after a newer
    refresh has been issued is discarded, so the latest (staff, services, month) always wins.
    Fetch failures are not raised: the month is treated as empty and last_error is recorded.
    """

    def __init__(
        self,
        api: BookingApiPort,
        slug: str,
        viewer: ViewerContext,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
        strict_duration: bool = False,
        fetch_timeout_seconds: float | None = None,
    ) -> None:
        self._api = api
        self._slug = slug
        self._viewer = viewer
        self._interval_minutes = interval_minutes
        self._strict_duration = strict_duration
        self._fetch_timeout_seconds = fetch_timeout_seconds
        self._generation = 0
        self._days: list[DayAvailability] = []
        self._loaded_key: AvailabilityKey | None = None
        self.loading = False
        self.last_error: str | None = None
        self.last_error_retryable = False
        self._logger = logging.getLogger(__name__)

    @property
    def days(self) -> list[DayAvailability]:
        return list(self._days)

    @property
    def loaded_key(self) -> AvailabilityKey | None:
        return self._loaded_key

    async def refresh(self, staff_id: str, service_ids: Iterable[str], month: date) -> bool:
        """
        Fetch the month for (staff, services). Returns False when the response was stale
        and therefore dropped.
        """
        ids = list(service_ids)
        key = AvailabilityKey(staff_id=staff_id, service_ids=tuple(sorted(ids)), month=first_of_month(month))
        self._generation += 1
        generation = self._generation
        self.loading = True

        error: BookingWizardError | None = None
        try:
            days = await self._fetch(key, ids)
        except BookingWizardError as e:
            days = []
            error = e

        if generation != self._generation:
            self._logger.info(
                "Discarding stale availability response",
                extra={"staff_id": staff_id, "month": key.month.isoformat()},
            )
            return False

        self.loading = False
        self._days = days
        self._loaded_key = key
        if error is not None:
            self.last_error = str(error)
            self.last_error_retryable = bool(getattr(error, "retryable", False))
            self._logger.warning(
                "Availability fetch failed, showing no availability",
                extra={"staff_id": staff_id, "month": key.month.isoformat(), "error": str(error)},
            )
        else:
            self.last_error = None
            self.last_error_retryable = False
            self._logger.info(
                "Availability loaded",
                extra={"staff_id": staff_id, "month": key.month.isoformat(), "day_count": len(days)},
            )
        return True

    async def _fetch(self, key: AvailabilityKey, service_ids: list[str]) -> list[DayAvailability]:
        call = self._api.get_availability(self._slug, key.staff_id, key.month, service_ids)
        if self._fetch_timeout_seconds is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._fetch_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise ApiUpstreamError("Availability request timed out", retryable=True) from e

    def invalidate(self) -> None:
        """Forget cached days; any in-flight response becomes stale."""
        self._generation += 1
        self._days = []
        self._loaded_key = None
        self.loading = False

    def has_available_slots(self, day: date) -> bool:
        return has_available_slots(self._days, day)

    def slots_for(self, day: date, total_duration_minutes: int = 0) -> list[TimeSlot]:
        required = total_duration_minutes if self._strict_duration else None
        return slots_for_day(self._days, day, self._viewer.timezone, self._interval_minutes, required)

    def is_date_selectable(self, day: date, today: date) -> bool:
        return is_date_selectable(day, today, self._days)

    def month_grid(self, month: date, today: date) -> list[tuple[date | None, bool]]:
        return [(day, day is not None and self.is_date_selectable(day, today)) for day in calendar_days(month)]
