from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from salon_booking.application.ports.wizard_session_store import WizardSessionStorePort

if TYPE_CHECKING:
    from salon_booking.application.use_cases.booking_wizard import BookingWizard


class MemoryWizardSessionStore(WizardSessionStorePort):
    """Wizards live only in process memory; nothing survives a restart."""

    def __init__(self, session_limit: int = 1000) -> None:
        self._sessions: dict[str, BookingWizard] = {}
        self._session_limit = session_limit

    def create(self, wizard: "BookingWizard") -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = wizard
        if len(self._sessions) > self._session_limit:
            # dicts keep insertion order, the first key is the oldest session
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
        return session_id

    def get(self, session_id: str) -> "BookingWizard | None":
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
