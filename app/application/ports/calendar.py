from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from app.domain.entities.appointment import AppointmentRequest, BookingOutcome


class CalendarPort(ABC):
    @abstractmethod
    def book(self, request: AppointmentRequest) -> BookingOutcome:
        """Create the calendar event. Failures are reported in the outcome, never raised."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self, event_id: str) -> BookingOutcome:
        """Cancel a calendar event."""
        raise NotImplementedError

    @abstractmethod
    def available_times(self, day: date) -> list[str]:
        """Free half-hour slot start times ("HH:MM") for a day."""
        raise NotImplementedError
