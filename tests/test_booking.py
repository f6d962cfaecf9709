from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

from app.application.ports.calendar import CalendarPort
from app.application.use_cases.booking import BookingUseCase
from app.application.utils.templates import render
from app.domain.entities.appointment import AppointmentRequest, BookingOutcome
from app.infrastructure.store.memory_store import MemoryConversationStore


class FailingCalendar(CalendarPort):
    def book(self, request: AppointmentRequest) -> BookingOutcome:
        return BookingOutcome(success=False, error="calendar down")

    def cancel(self, event_id: str) -> BookingOutcome:
        return BookingOutcome(success=False, event_id=event_id, error="calendar down")

    def available_times(self, day: date) -> list[str]:
        return []


def test_collects_fields_over_several_turns(booking, calendar):
    result = booking.start("call-1", "manicure", "en")
    assert result.action == "ask_date"
    assert "for a manicure" in result.message
    assert booking.is_active("call-1")

    result = booking.process_turn("call-1", "friday at 3 pm", "en")
    assert result.action == "ask_name"
    assert result.updated_state.date_iso == "2026-03-06"
    assert result.updated_state.time_24h == "15:00"

    result = booking.process_turn("call-1", "my name is Ana", "en")
    assert result.action == "booked"
    assert result.completed
    assert result.message.startswith("Perfect Ana! Your appointment for a manicure is confirmed for Friday, March 6 at 15:00")
    assert not booking.is_active("call-1")

    [event] = calendar.events.values()
    assert event.client_name == "Ana"
    assert event.date == date(2026, 3, 6)


def test_single_utterance_books_immediately(booking, calendar):
    result = booking.start(
        "call-2",
        "manicure",
        "en",
        contact="+34600000000",
        text="book a manicure tomorrow at 10am, my name is Ana",
    )
    assert result.action == "booked"
    assert result.outcome.event_id == "mock_event_1"
    event = calendar.events["mock_event_1"]
    assert event.phone == "+34600000000"
    assert event.time == "10:00"
    assert event.date == date(2026, 3, 3)


def test_asks_for_service_first(booking):
    result = booking.start("call-3", None, "es")
    assert result.action == "ask_service"
    assert result.message == render("booking_ask_service", "es")


def test_time_question_names_the_date(booking):
    booking.start("call-4", None, "en")
    result = booking.process_turn("call-4", "a pedicure on monday", "en")
    assert result.action == "ask_time"
    assert result.updated_state.service == "pedicure"
    assert "Monday, March 9" in result.message


def test_bare_name_accepted_when_asked(booking):
    booking.start("call-5", "facial", "en", text="tomorrow at 11")
    result = booking.process_turn("call-5", "Laura", "en")
    assert result.action == "booked"
    assert result.updated_state.status == "none"
    assert "Perfect Laura!" in result.message


def test_filler_reply_keeps_asking_for_the_name(booking, calendar):
    booking.start("call-5b", "facial", "en", text="tomorrow at 11")
    result = booking.process_turn("call-5b", "thanks", "en")
    assert result.action == "ask_name"
    assert result.updated_state.client_name is None
    assert booking.is_active("call-5b")
    assert calendar.events == {}

    result = booking.process_turn("call-5b", "yes", "en")
    assert result.action == "ask_name"

    result = booking.process_turn("call-5b", "it's Ana", "en")
    assert result.action == "booked"
    assert "Perfect Ana!" in result.message


def test_spanish_filler_reply_keeps_asking_for_the_name(booking):
    booking.start("call-5c", "manicure", "es", text="mañana a las 11")
    result = booking.process_turn("call-5c", "sí, gracias", "es")
    assert result.action == "ask_name"


def test_cancel_resets_state(booking, store):
    booking.start("call-6", "manicure", "en")
    result = booking.process_turn("call-6", "cancel that", "en")
    assert result.action == "cancelled"
    assert result.completed
    assert not booking.is_active("call-6")
    assert store.get_state("call-6").booking_state.service is None


def test_calendar_failure_is_reported_not_raised(store):
    booking = BookingUseCase(FailingCalendar(), store, ZoneInfo("Europe/Madrid"), today=lambda: date(2026, 3, 2))
    result = booking.start("call-7", "manicure", "es", text="mañana a las 5 de la tarde, me llamo Lucía")
    assert result.action == "failed"
    assert result.message == render("booking_failed", "es")
    assert result.outcome.error == "calendar down"
    assert not booking.is_active("call-7")


def test_confirmation_is_spoken_without_the_event_id(booking):
    result = booking.start("call-8", "pedicure", "en", text="friday at 11, my name is Ana")
    assert result.action == "booked"
    assert result.outcome.event_id == "mock_event_1"
    assert "mock_event_1" not in result.message
    assert result.message.startswith("Perfect Ana! Your appointment for a pedicure is confirmed for Friday, March 6 at 11:00")


def test_book_direct(booking):
    request = AppointmentRequest(client_name="Ana", service="pedicure", date=date(2026, 3, 6), time="11:30")
    result = booking.book_direct(request, "es")
    assert result.action == "booked"
    assert "Tu cita para una pedicura está confirmada para el viernes 6 de marzo a las 11:30" in result.message


def test_memory_store_roundtrip():
    store = MemoryConversationStore()
    state = store.get_state("x")
    assert not state.booking_state.active
    assert store.session_count() == 0

    store.set_state("x", state)
    assert store.session_count() == 1
    store.clear("x")
    store.clear("missing")
    assert store.session_count() == 0
