from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.v1.schemas import (
    AppointmentSchema,
    AvailableTimesResponseSchema,
    BookRequestSchema,
    BookResponseSchema,
    CancelRequestSchema,
    CancelResponseSchema,
    ParsedDateTimeSchema,
    ParseDateTimeResponseSchema,
    TextRequestSchema,
)
from app.application.ports.calendar import CalendarPort
from app.application.use_cases.booking import BookingUseCase
from app.application.utils.date_parser import parse_datetime
from app.application.utils.message_rules import resolve_language
from app.application.utils.templates import render, spoken_date
from app.domain.entities.appointment import AppointmentRequest
from app.wiring.dependencies import get_booking_use_case, get_calendar, get_timezone

router = APIRouter()
logger = logging.getLogger(__name__)


def _failure(error: str, exc: Exception) -> JSONResponse:
    logger.exception(error, extra={"error": str(exc)})
    return JSONResponse(status_code=500, content={"success": False, "error": error, "message": str(exc)})


@router.post("/book", response_model=BookResponseSchema)
def book(
    req: BookRequestSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    language = resolve_language(req.language, req.service)
    request = AppointmentRequest(
        client_name=req.client_name.strip(),
        service=req.service.strip(),
        date=req.date,
        time=req.time,
        phone=req.phone,
        email=req.email,
    )
    try:
        result = uc.book_direct(request, language)
    except Exception as e:
        return _failure("Failed to book appointment", e)

    outcome = result.outcome
    if outcome is None or not outcome.success:
        return BookResponseSchema(
            success=False,
            response=result.message,
            error=outcome.error if outcome else None,
        )
    return BookResponseSchema(
        success=True,
        response=result.message,
        appointment=AppointmentSchema(
            event_id=outcome.event_id,
            event_url=outcome.event_url,
            client_name=request.client_name,
            service=request.service,
            date=request.date,
            time=request.time,
        ),
    )


@router.get("/available", response_model=AvailableTimesResponseSchema)
def available(
    day: date = Query(alias="date"),
    language: str = "en",
    calendar: CalendarPort = Depends(get_calendar),
):
    language = resolve_language(language, "")
    try:
        times = calendar.available_times(day)
    except Exception as e:
        return _failure("Failed to get available times", e)

    spoken = spoken_date(day, language)
    if times:
        response = render("available_times", language, date=spoken, times=", ".join(times))
    else:
        response = render("no_available_times", language, date=spoken)
    return AvailableTimesResponseSchema(date=day, available_times=times, response=response)


@router.post("/parse-datetime", response_model=ParseDateTimeResponseSchema)
def parse_date_time(
    req: TextRequestSchema,
    tz: ZoneInfo = Depends(get_timezone),
):
    if not req.text.strip():
        return JSONResponse(status_code=400, content={"success": False, "error": "Text is required"})
    language = resolve_language(req.language, req.text)
    parsed_date, parsed_time = parse_datetime(req.text, datetime.now(tz).date())
    parsed = ParsedDateTimeSchema(
        date=parsed_date.isoformat() if parsed_date else None,
        time=parsed_time,
    )
    if parsed_date and parsed_time:
        response = render("datetime_parsed", language, date=spoken_date(parsed_date, language), time=parsed_time)
        return ParseDateTimeResponseSchema(success=True, response=response, parsed=parsed)
    return ParseDateTimeResponseSchema(success=False, response=render("datetime_unparsed", language), parsed=parsed)


@router.post("/cancel", response_model=CancelResponseSchema)
def cancel(
    req: CancelRequestSchema,
    calendar: CalendarPort = Depends(get_calendar),
):
    language = resolve_language(req.language, "")
    try:
        outcome = calendar.cancel(req.event_id)
    except Exception as e:
        return _failure("Failed to cancel appointment", e)

    if outcome.success:
        logger.info("Appointment cancelled", extra={"event_id": req.event_id})
        return CancelResponseSchema(success=True, response=render("appointment_cancelled", language), event_id=req.event_id)
    logger.warning("Cancellation failed", extra={"event_id": req.event_id, "error": outcome.error})
    return CancelResponseSchema(
        success=False,
        response=render("appointment_cancel_failed", language),
        event_id=req.event_id,
        error=outcome.error,
    )
