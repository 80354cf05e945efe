import logging

from fastapi import FastAPI

from salon_booking.api.v1.wizard import router as wizard_router
from salon_booking.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "slug", "step", "staff_id", "month", "day_count", "booking_id", "status", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Salon Booking Wizard", version="1.0.0")

app.include_router(wizard_router, prefix="/v1/wizard", tags=["wizard"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
