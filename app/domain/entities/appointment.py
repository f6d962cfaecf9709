from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class AppointmentRequest:
    client_name: str
    service: str
    date: date
    time: str  # HH:MM
    phone: str | None = None
    email: str | None = None

    def start(self, timezone: ZoneInfo) -> datetime:
        hour, minute = (int(part) for part in self.time.split(":", 1))
        return datetime.combine(self.date, time(hour, minute), tzinfo=timezone)

    def end(self, timezone: ZoneInfo, duration_minutes: int) -> datetime:
        return self.start(timezone) + timedelta(minutes=duration_minutes)


@dataclass(frozen=True)
class BookingOutcome:
    success: bool
    event_id: str | None = None
    event_url: str | None = None
    error: str | None = None
