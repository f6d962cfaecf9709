from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.ports.calendar import CalendarPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.utils.date_parser import format_time, parse_date_preference, parse_time_preference
from app.application.utils.entity_extractor import first_service
from app.application.utils.message_rules import extract_client_name, is_cancel_request
from app.application.utils.service_vocabulary import service_label
from app.application.utils.templates import render, spoken_date
from app.domain.entities.appointment import AppointmentRequest, BookingOutcome
from app.domain.entities.booking_state import BookingState

ASK_TEMPLATES = {
    "service": "booking_ask_service",
    "date": "booking_ask_date",
    "time": "booking_ask_time",
    "name": "booking_ask_name",
}

FINAL_ACTIONS = frozenset({"booked", "failed", "cancelled"})


@dataclass(frozen=True)
class BookingResult:
    action: str  # "ask_service" | "ask_date" | "ask_time" | "ask_name" | "booked" | "failed" | "cancelled"
    message: str
    updated_state: BookingState
    outcome: BookingOutcome | None = None

    @property
    def completed(self) -> bool:
        return self.action in FINAL_ACTIONS


class BookingUseCase:
    """
    Collects service, date, time and caller name over several turns, then books the
    appointment through the calendar port.

    State lives in the conversation store under the caller's session id (the call SID
    for voice). Each turn may fill any number of fields; the next prompt always asks for
    the first missing one in the order service, date, time, name.
    """

    def __init__(
        self,
        calendar: CalendarPort,
        store: ConversationStorePort,
        timezone: ZoneInfo,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._calendar = calendar
        self._store = store
        self._timezone = timezone
        self._today = today or (lambda: datetime.now(self._timezone).date())
        self._logger = logging.getLogger(__name__)

    def is_active(self, session_id: str) -> bool:
        return self._store.get_state(session_id).booking_state.active

    def start(
        self,
        session_id: str,
        service: str | None,
        language: str,
        contact: str | None = None,
        text: str | None = None,
    ) -> BookingResult:
        state = BookingState(status="collecting_service", service=service, contact=contact)
        if text:
            state = self._fill_from_text(state, text)
        return self._advance(session_id, state, language)

    def process_turn(self, session_id: str, text: str, language: str) -> BookingResult:
        conversation = self._store.get_state(session_id)
        state = conversation.booking_state

        if is_cancel_request(text):
            self._save(session_id, BookingState())
            self._logger.info("Booking cancelled by caller", extra={"call_sid": session_id})
            return BookingResult(
                action="cancelled",
                message=render("booking_cancelled", language),
                updated_state=BookingState(),
            )

        if not state.active:
            state = BookingState(status="collecting_service", contact=state.contact)
        return self._advance(session_id, self._fill_from_text(state, text), language)

    def book_direct(self, request: AppointmentRequest, language: str) -> BookingResult:
        """Book a fully specified request (HTTP calendar API) without a conversation."""
        state = BookingState(
            status="booking",
            service=request.service,
            client_name=request.client_name,
            date_iso=request.date.isoformat(),
            time_24h=request.time,
            contact=request.phone or request.email,
        )
        return self._book(request, state, language)

    def _fill_from_text(self, state: BookingState, text: str) -> BookingState:
        updates: dict[str, str] = {}
        if not state.service:
            service = first_service(text.lower())
            if service:
                updates["service"] = service
        if not state.date_iso:
            parsed_date = parse_date_preference(text, self._today())
            if parsed_date:
                updates["date_iso"] = parsed_date.isoformat()
        if not state.time_24h:
            parsed_time = parse_time_preference(text)
            if parsed_time:
                updates["time_24h"] = format_time(*parsed_time)
        if not state.client_name:
            name = extract_client_name(text, expecting_name=state.status == "collecting_name")
            if name:
                updates["client_name"] = name
        return replace(state, **updates) if updates else state

    def _advance(self, session_id: str, state: BookingState, language: str) -> BookingResult:
        missing = state.missing_field()
        if missing is None:
            request = AppointmentRequest(
                client_name=state.client_name or "",
                service=state.service or "",
                date=date.fromisoformat(state.date_iso or ""),
                time=state.time_24h or "",
                phone=state.contact,
            )
            result = self._book(request, state, language)
            self._save(session_id, BookingState())
            return result

        state = replace(state, status=f"collecting_{missing}")
        self._save(session_id, state)
        return BookingResult(
            action=f"ask_{missing}",
            message=self._ask(missing, state, language),
            updated_state=state,
        )

    def _ask(self, missing: str, state: BookingState, language: str) -> str:
        values: dict[str, str] = {}
        if state.service:
            values["service"] = service_label(state.service, language)
        if state.date_iso:
            values["date"] = spoken_date(date.fromisoformat(state.date_iso), language)
        return render(ASK_TEMPLATES[missing], language, **values)

    def _book(self, request: AppointmentRequest, state: BookingState, language: str) -> BookingResult:
        outcome = self._calendar.book(request)
        if not outcome.success:
            self._logger.error(
                "Calendar booking failed",
                extra={"service": request.service, "error": outcome.error},
            )
            return BookingResult(
                action="failed",
                message=render("booking_failed", language),
                updated_state=replace(state, status="none"),
                outcome=outcome,
            )

        self._logger.info(
            "Appointment booked",
            extra={"service": request.service, "event_id": outcome.event_id},
        )
        return BookingResult(
            action="booked",
            message=render(
                "booking_confirmed",
                language,
                name=request.client_name,
                service=service_label(request.service, language),
                date=spoken_date(request.date, language),
                time=request.time,
            ),
            updated_state=replace(state, status="none"),
            outcome=outcome,
        )

    def _save(self, session_id: str, booking_state: BookingState) -> None:
        conversation = self._store.get_state(session_id)
        self._store.set_state(session_id, replace(conversation, booking_state=booking_state))
