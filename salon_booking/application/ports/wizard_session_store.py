from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from salon_booking.application.use_cases.booking_wizard import BookingWizard


class WizardSessionStorePort(ABC):
    @abstractmethod
    def create(self, wizard: "BookingWizard") -> str:
        """Store a new wizard and return its session id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "BookingWizard | None":
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError
