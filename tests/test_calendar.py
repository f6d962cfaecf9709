from __future__ import annotations

import json
from datetime import date
from zoneinfo import ZoneInfo

import httpx
import pytest

from app.core.config import settings
from app.domain.entities.appointment import AppointmentRequest
from app.infrastructure.calendar.cal_com_client import CalComCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar, business_slots

MADRID = ZoneInfo("Europe/Madrid")
REQUEST = AppointmentRequest(
    client_name="Ana",
    service="manicure",
    date=date(2026, 3, 6),
    time="10:00",
    phone="+34600000000",
)


def _cal_com(handler) -> CalComCalendar:
    return CalComCalendar(
        api_key="test-key",
        calendar_id="42",
        base_url="https://api.cal.com/v1",
        timezone=MADRID,
        duration_minutes=60,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_business_slots():
    slots = business_slots(10, 12)
    assert slots == ["10:00", "10:30", "11:00", "11:30"]


def test_mock_calendar_books_and_frees_slots():
    calendar = MockCalendar(timezone=MADRID)
    assert len(calendar.available_times(REQUEST.date)) == 16

    outcome = calendar.book(REQUEST)
    assert outcome.success
    assert outcome.event_id == "mock_event_1"
    assert "10:00" not in calendar.available_times(REQUEST.date)
    assert "10:00" in calendar.available_times(date(2026, 3, 7))

    assert calendar.cancel("mock_event_1").success
    assert "10:00" in calendar.available_times(REQUEST.date)


def test_mock_calendar_cancel_unknown_event():
    outcome = MockCalendar().cancel("nope")
    assert not outcome.success
    assert outcome.error == "Event not found"


def test_cal_com_book_posts_booking():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 123, "url": "https://cal.com/booking/123"})

    outcome = _cal_com(handler).book(REQUEST)

    assert outcome.success
    assert outcome.event_id == "123"
    assert outcome.event_url == "https://cal.com/booking/123"
    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/bookings"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["start"] == "2026-03-06T10:00:00+01:00"
    assert seen["body"]["end"] == "2026-03-06T11:00:00+01:00"
    assert seen["body"]["responses"]["phone"] == "+34600000000"


def test_cal_com_book_http_error_becomes_failed_outcome():
    outcome = _cal_com(lambda request: httpx.Response(500, json={"message": "boom"})).book(REQUEST)
    assert not outcome.success
    assert "POST /bookings failed" in outcome.error


def test_cal_com_book_without_id():
    outcome = _cal_com(lambda request: httpx.Response(200, json={"status": "ok"})).book(REQUEST)
    assert not outcome.success
    assert outcome.error == "No event ID returned from Cal.com API"


def test_cal_com_cancel():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/v1/bookings/abc"
        return httpx.Response(204)

    outcome = _cal_com(handler).cancel("abc")
    assert outcome.success
    assert outcome.event_id == "abc"


def test_cal_com_available_times_filters_to_business_hours(monkeypatch):
    monkeypatch.setattr(settings, "OPENING_HOUR", 10)
    monkeypatch.setattr(settings, "CLOSING_HOUR", 18)

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/slots"
        assert request.url.params["eventTypeId"] == "42"
        return httpx.Response(
            200,
            json={
                "slots": {
                    "2026-03-06": [
                        {"time": "2026-03-06T09:00:00Z"},
                        {"time": "2026-03-06T10:00:00+01:00"},
                        {"time": "2026-03-06T16:30:00+01:00"},
                        {"time": "2026-03-06T19:00:00+01:00"},
                        {"time": "garbage"},
                    ]
                }
            },
        )

    assert _cal_com(handler).available_times(date(2026, 3, 6)) == ["10:00", "16:30"]


def test_cal_com_available_times_on_error():
    assert _cal_com(lambda request: httpx.Response(503)).available_times(date(2026, 3, 6)) == []


def test_cal_com_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "CAL_COM_API_KEY", None)
    with pytest.raises(ValueError):
        CalComCalendar(client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200))))
