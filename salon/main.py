import logging

from fastapi import FastAPI

from salon.api.v1.auth import router as auth_router
from salon.api.v1.bookings import router as bookings_router
from salon.api.v1.profile import router as profile_router
from salon.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("user_id", "booking_id", "record_id", "service_id", "reason", "error"):
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

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking", version="1.0.0")

app.include_router(auth_router, tags=["auth"])
app.include_router(bookings_router, tags=["booking"])
app.include_router(profile_router, tags=["profile"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
