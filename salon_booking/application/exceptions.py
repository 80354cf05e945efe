from __future__ import annotations


class BookingWizardError(RuntimeError):
    """Base class for every failure raised by the booking wizard."""


class ApiUpstreamError(BookingWizardError):
    """Raised when the booking API cannot be reached (timeouts, network errors, 5xx without envelope)."""

    def __init__(self, message: str, status: int | None = None, retryable: bool = True) -> None:
        super().__init__(message)
        self.status = status
        self.retryable = retryable


class ApiContractError(BookingWizardError):
    """Raised when the booking API answers with a body that is not the expected envelope or shape."""


class ApiRejectedError(BookingWizardError):
    """Raised when the envelope reports success=false. The server message is kept verbatim."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class BookingContextLoadError(BookingWizardError):
    """Raised when company, catalog or staff cannot be loaded. The wizard cannot render; the user may retry."""

    retryable = True


class WizardValidationError(BookingWizardError):
    """Raised locally when a step gate fails. Never sent to the server."""

    def __init__(self, message: str, step: int) -> None:
        super().__init__(message)
        self.step = step


class BookingSubmissionError(BookingWizardError):
    """Raised when the server rejects a booking or the submission call fails."""

    def __init__(self, message: str, retryable: bool = True) -> None:
        super().__init__(message)
        self.retryable = retryable


class UnknownSelectionError(BookingWizardError, LookupError):
    """Raised when a service or staff id is not part of the loaded catalog or roster."""
