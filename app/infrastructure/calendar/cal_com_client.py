from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo

import httpx

from app.application.exceptions import CalendarError
from app.application.ports.calendar import CalendarPort
from app.core.config import settings
from app.domain.entities.appointment import AppointmentRequest, BookingOutcome
from app.infrastructure.calendar.mock_calendar import business_slots


class CalComCalendar(CalendarPort):
    def __init__(
        self,
        api_key: str | None = None,
        calendar_id: str | None = None,
        base_url: str | None = None,
        timezone: ZoneInfo | None = None,
        duration_minutes: int | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key or settings.CAL_COM_API_KEY
        self._calendar_id = calendar_id or settings.CAL_COM_CALENDAR_ID
        self._base_url = (base_url or settings.CAL_COM_BASE_URL).rstrip("/")
        self._timezone = timezone or ZoneInfo(settings.BUSINESS_TIMEZONE)
        self._duration_minutes = duration_minutes or settings.APPOINTMENT_DURATION_MINUTES
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("CAL_COM_API_KEY is required for Cal.com calendar")

    def book(self, request: AppointmentRequest) -> BookingOutcome:
        start = request.start(self._timezone)
        end = request.end(self._timezone, self._duration_minutes)
        payload: dict[str, Any] = {
            "eventTypeId": self._calendar_id,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "timeZone": str(self._timezone),
            "title": f"{request.service} - {request.client_name}",
            "description": (
                f"Appointment for {request.service}\n"
                f"Client: {request.client_name}\n"
                f"Phone: {request.phone or '-'}\n"
                f"Email: {request.email or '-'}"
            ),
            "responses": {
                "name": request.client_name,
                "email": request.email or "",
                "phone": request.phone or "",
            },
        }
        try:
            data = self._request("POST", "/bookings", json=payload)
        except CalendarError as e:
            self._logger.error("Error creating calendar event", extra={"error": str(e)})
            return BookingOutcome(success=False, error=str(e))

        event_id = data.get("id") or data.get("uid") or data.get("bookingId")
        if not event_id:
            self._logger.error("Cal.com returned no booking id", extra={"error": "missing_id"})
            return BookingOutcome(success=False, error="No event ID returned from Cal.com API")

        self._logger.info("Calendar event created", extra={"event_id": event_id, "service": request.service})
        return BookingOutcome(success=True, event_id=str(event_id), event_url=data.get("url"))

    def cancel(self, event_id: str) -> BookingOutcome:
        try:
            self._request("DELETE", f"/bookings/{event_id}")
        except CalendarError as e:
            self._logger.error("Error cancelling calendar event", extra={"event_id": event_id, "error": str(e)})
            return BookingOutcome(success=False, event_id=event_id, error=str(e))
        self._logger.info("Calendar event cancelled", extra={"event_id": event_id})
        return BookingOutcome(success=True, event_id=event_id)

    def available_times(self, day: date) -> list[str]:
        params = {
            "eventTypeId": self._calendar_id,
            "startTime": datetime.combine(day, time.min, tzinfo=self._timezone).isoformat(),
            "endTime": datetime.combine(day, time.max, tzinfo=self._timezone).isoformat(),
            "timeZone": str(self._timezone),
        }
        try:
            data = self._request("GET", "/slots", params=params)
        except CalendarError as e:
            self._logger.error("Error finding available slots", extra={"error": str(e)})
            return []

        free = {self._to_local_hhmm(raw) for raw in _iter_slot_times(data.get("slots"))}
        free.discard(None)
        allowed = business_slots(settings.OPENING_HOUR, settings.CLOSING_HOUR)
        return [slot for slot in allowed if slot in free]

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            response = self._client.request(method, f"{self._base_url}{path}", headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CalendarError(f"Cal.com {method} {path} failed: {e}") from e
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise CalendarError(f"Cal.com {method} {path} returned invalid JSON") from e
        return data if isinstance(data, dict) else {}

    def _to_local_hhmm(self, raw: str) -> str | None:
        try:
            moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except (ValueError, AttributeError):
            return None
        if moment.tzinfo is not None:
            moment = moment.astimezone(self._timezone)
        return moment.strftime("%H:%M")


def _iter_slot_times(slots: Any) -> list[str]:
    """Cal.com answers either a flat list or {"YYYY-MM-DD": [{"time": ...}, ...]}."""
    if isinstance(slots, dict):
        items = [item for day_items in slots.values() for item in (day_items or [])]
    elif isinstance(slots, list):
        items = slots
    else:
        return []
    times: list[str] = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("time")
        if isinstance(item, str):
            times.append(item)
    return times
