from __future__ import annotations

import logging
from datetime import date
from zoneinfo import ZoneInfo

from app.application.ports.calendar import CalendarPort
from app.domain.entities.appointment import AppointmentRequest, BookingOutcome


def business_slots(opening_hour: int, closing_hour: int) -> list[str]:
    """Half-hour slot start times from opening up to (not including) closing."""
    slots: list[str] = []
    for hour in range(opening_hour, closing_hour):
        slots.append(f"{hour:02d}:00")
        slots.append(f"{hour:02d}:30")
    return slots


class MockCalendar(CalendarPort):
    def __init__(
        self,
        timezone: ZoneInfo | None = None,
        opening_hour: int = 10,
        closing_hour: int = 18,
    ) -> None:
        self._timezone = timezone or ZoneInfo("Europe/Madrid")
        self._opening_hour = opening_hour
        self._closing_hour = closing_hour
        self._events: dict[str, AppointmentRequest] = {}
        self._counter = 0
        self._logger = logging.getLogger(__name__)

    @property
    def events(self) -> dict[str, AppointmentRequest]:
        return dict(self._events)

    def book(self, request: AppointmentRequest) -> BookingOutcome:
        self._counter += 1
        event_id = f"mock_event_{self._counter}"
        self._events[event_id] = request
        start = request.start(self._timezone)
        self._logger.info(
            "Mock calendar event created",
            extra={"event_id": event_id, "service": request.service},
        )
        return BookingOutcome(
            success=True,
            event_id=event_id,
            event_url=f"mock://calendar/{event_id}?start={start.isoformat()}",
        )

    def cancel(self, event_id: str) -> BookingOutcome:
        if self._events.pop(event_id, None) is None:
            return BookingOutcome(success=False, event_id=event_id, error="Event not found")
        self._logger.info("Mock calendar event cancelled", extra={"event_id": event_id})
        return BookingOutcome(success=True, event_id=event_id)

    def available_times(self, day: date) -> list[str]:
        booked = {r.time for r in self._events.values() if r.date == day}
        return [slot for slot in business_slots(self._opening_hour, self._closing_hour) if slot not in booked]
