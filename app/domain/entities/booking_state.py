from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingState:
    status: str = "none"  # "none", "collecting_service", "collecting_date", "collecting_time", "collecting_name"
    service: str | None = None  # canonical service key, e.g. "manicure"
    client_name: str | None = None
    date_iso: str | None = None  # YYYY-MM-DD
    time_24h: str | None = None  # HH:MM
    contact: str | None = None  # caller phone number or email

    @property
    def active(self) -> bool:
        return self.status != "none"

    def missing_field(self) -> str | None:
        if not self.service:
            return "service"
        if not self.date_iso:
            return "date"
        if not self.time_24h:
            return "time"
        if not self.client_name:
            return "name"
        return None
