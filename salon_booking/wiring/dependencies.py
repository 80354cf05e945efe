from functools import lru_cache
import logging
from datetime import date

from salon_booking.core.config import settings
from salon_booking.application.ports.booking_api import BookingApiPort
from salon_booking.application.ports.wizard_session_store import WizardSessionStorePort
from salon_booking.application.use_cases.availability import AvailabilityEngine
from salon_booking.application.use_cases.booking_wizard import BookingWizard
from salon_booking.application.use_cases.load_booking_context import LoadBookingContextUseCase
from salon_booking.domain.entities.company import BookingContext
from salon_booking.domain.entities.viewer import ViewerContext, safe_timezone
from salon_booking.infrastructure.booking_api.mock_booking_api import MockBookingApi
from salon_booking.infrastructure.booking_api.public_booking_api import PublicBookingApi
from salon_booking.infrastructure.http.httpx_transport import HttpxTransport
from salon_booking.infrastructure.store.memory_store import MemoryWizardSessionStore


_session_store: MemoryWizardSessionStore | None = None


@lru_cache
def get_booking_api() -> BookingApiPort:
    logger = logging.getLogger(__name__)
    if settings.USE_MOCK_API:
        logger.info("Using MockBookingApi (USE_MOCK_API=true, ENV=%s)", settings.ENV)
        return MockBookingApi()
    logger.info("Using PublicBookingApi at %s", settings.API_BASE_URL)
    transport = HttpxTransport(timeout=settings.HTTP_TIMEOUT_SECONDS)
    return PublicBookingApi(transport=transport, base_url=settings.API_BASE_URL)


def get_session_store() -> WizardSessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemoryWizardSessionStore()
    return _session_store


def get_viewer_context(timezone: str | None = None, locale: str | None = None) -> ViewerContext:
    return ViewerContext(
        timezone=safe_timezone(timezone or settings.VIEWER_TIMEZONE),
        locale=(locale or settings.VIEWER_LOCALE).lower(),
    )


def get_load_context_use_case() -> LoadBookingContextUseCase:
    return LoadBookingContextUseCase(api=get_booking_api())


def build_wizard(
    context: BookingContext,
    viewer: ViewerContext,
    api: BookingApiPort | None = None,
    today: date | None = None,
) -> BookingWizard:
    api = api or get_booking_api()
    availability = AvailabilityEngine(
        api=api,
        slug=context.slug,
        viewer=viewer,
        interval_minutes=settings.SLOT_INTERVAL_MINUTES,
        strict_duration=settings.STRICT_SLOT_DURATION,
        fetch_timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )
    return BookingWizard(
        api=api,
        context=context,
        viewer=viewer,
        availability=availability,
        today=today,
        default_phone_country_code=settings.DEFAULT_PHONE_COUNTRY_CODE,
    )


_contexts: dict[str, BookingContext] = {}


async def get_booking_context(slug: str) -> BookingContext:
    """Catalog, staff and company are fetched once per company and shared read-only."""
    if slug not in _contexts:
        _contexts[slug] = await get_load_context_use_case().execute(slug)
    return _contexts[slug]


def clear_booking_contexts() -> None:
    _contexts.clear()
