from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from app.api.v1.schemas import CallsResponseSchema, CallSummarySchema
from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.process_message import ProcessMessageUseCase
from app.application.utils.message_rules import resolve_language
from app.application.utils.templates import render
from app.core.config import settings
from app.domain.entities.intent import IntentType
from app.infrastructure.voice.twiml import TwimlBuilder
from app.infrastructure.voice.webhook_verify import public_url, verify_twilio_signature
from app.wiring.dependencies import (
    get_booking_use_case,
    get_conversation_store,
    get_process_message_use_case,
    get_twilio_client,
    get_twiml_builder,
)

router = APIRouter()
logger = logging.getLogger(__name__)

PROCESS_PATH = "/api/voice/process"
APPOINTMENT_PATH = "/api/voice/appointment"
ENDED_CALL_STATUSES = frozenset({"completed", "failed", "busy", "no-answer", "canceled"})
CALL_HISTORY_LIMIT = 20


def _xml(twiml: VoiceResponse) -> Response:
    return Response(content=str(twiml), media_type="application/xml")


def _action(path: str, language: str) -> str:
    return f"{path}?lang={language}"


async def _verified_form(request: Request) -> dict[str, str]:
    form = await request.form()
    params = {key: str(value) for key, value in form.items()}
    url = public_url(str(request.url), settings.PUBLIC_BASE_URL)
    signature = request.headers.get("X-Twilio-Signature")
    if not verify_twilio_signature(url, params, signature, settings.TWILIO_AUTH_TOKEN, settings.ENV):
        logger.warning("Rejected Twilio webhook with bad signature", extra={"call_sid": params.get("CallSid")})
        raise HTTPException(status_code=403, detail="Invalid Twilio signature")
    return params


def _language(request: Request, form: dict[str, str], store: ConversationStorePort | None = None) -> str:
    """The `lang` query wins, then the language this call has been speaking, then the form hint."""
    hint = request.query_params.get("lang")
    call_sid = form.get("CallSid")
    if not hint and store is not None and call_sid:
        hint = store.get_state(call_sid).language
    hint = hint or form.get("Language") or settings.DEFAULT_LANGUAGE
    return resolve_language(hint, form.get("SpeechResult", ""))


def _goodbye_text(language: str) -> str:
    return render("goodbye", language, business=settings.BUSINESS_NAME)


@router.post("/incoming")
async def incoming_call(
    request: Request,
    twiml: TwimlBuilder = Depends(get_twiml_builder),
) -> Response:
    form = await _verified_form(request)
    language = _language(request, form)
    logger.info("Incoming call", extra={"call_sid": form.get("CallSid"), "language": language})
    welcome = render("call_welcome", language, business=settings.BUSINESS_NAME)
    return _xml(twiml.prompt(welcome, language, _action(PROCESS_PATH, language)))


@router.post("/process")
async def process_speech(
    request: Request,
    uc: ProcessMessageUseCase = Depends(get_process_message_use_case),
    booking: BookingUseCase = Depends(get_booking_use_case),
    store: ConversationStorePort = Depends(get_conversation_store),
    twiml: TwimlBuilder = Depends(get_twiml_builder),
) -> Response:
    form = await _verified_form(request)
    language = _language(request, form, store)
    call_sid = form.get("CallSid") or "anonymous"
    speech = (form.get("SpeechResult") or "").strip()

    if not speech:
        return _xml(twiml.prompt(render("not_understood", language), language, _action(PROCESS_PATH, language)))

    try:
        processed = uc.execute(speech, language, session_id=call_sid)
        intent = processed.intent

        if intent.type == IntentType.goodbye:
            store.clear(call_sid)
            return _xml(twiml.farewell(processed.response, language))

        if intent.is_appointment:
            result = booking.start(call_sid, intent.service, language, contact=form.get("From"), text=speech)
            if result.completed:
                store.clear(call_sid)
                return _xml(twiml.farewell(result.message, language, closing=_goodbye_text(language)))
            # the scheduling prompt already asks for the service or the date
            text = processed.response if result.action in {"ask_service", "ask_date"} else result.message
            return _xml(twiml.prompt(text, language, _action(APPOINTMENT_PATH, language)))

        return _xml(twiml.prompt(processed.response, language, _action(PROCESS_PATH, language)))
    except Exception as e:
        logger.exception("Error processing speech", extra={"call_sid": call_sid, "error": str(e)})
        return _xml(twiml.prompt(render("call_error", language), language, _action(PROCESS_PATH, language)))


@router.post("/appointment")
async def appointment_turn(
    request: Request,
    booking: BookingUseCase = Depends(get_booking_use_case),
    store: ConversationStorePort = Depends(get_conversation_store),
    twiml: TwimlBuilder = Depends(get_twiml_builder),
) -> Response:
    form = await _verified_form(request)
    language = _language(request, form, store)
    call_sid = form.get("CallSid") or "anonymous"
    speech = (form.get("SpeechResult") or "").strip()

    if not speech:
        return _xml(twiml.prompt(render("not_understood", language), language, _action(APPOINTMENT_PATH, language)))

    try:
        result = booking.process_turn(call_sid, speech, language)
    except Exception as e:
        logger.exception("Error processing appointment", extra={"call_sid": call_sid, "error": str(e)})
        store.clear(call_sid)
        return _xml(twiml.farewell(render("booking_failed", language), language))

    if result.action == "cancelled":
        return _xml(twiml.prompt(result.message, language, _action(PROCESS_PATH, language)))
    if result.completed:
        store.clear(call_sid)
        return _xml(twiml.farewell(result.message, language, closing=_goodbye_text(language)))
    return _xml(twiml.prompt(result.message, language, _action(APPOINTMENT_PATH, language)))


@router.post("/status")
async def call_status(
    request: Request,
    store: ConversationStorePort = Depends(get_conversation_store),
) -> Response:
    form = await _verified_form(request)
    call_sid = form.get("CallSid")
    status = (form.get("CallStatus") or "").lower()
    last_intent = store.get_state(call_sid).last_intent if call_sid else None
    logger.info("Call status update", extra={"call_sid": call_sid, "reason": status, "intent": last_intent})
    if call_sid and status in ENDED_CALL_STATUSES:
        store.clear(call_sid)
    return Response(status_code=200)


@router.get("/calls", response_model=CallsResponseSchema)
def call_history(client: Client | None = Depends(get_twilio_client)):
    try:
        if client is None:
            raise RuntimeError("Twilio credentials are not configured")
        calls = client.calls.list(limit=CALL_HISTORY_LIMIT)
    except Exception as e:
        logger.exception("Error fetching calls", extra={"error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to fetch call history", "message": str(e)},
        )
    return CallsResponseSchema(
        calls=[
            CallSummarySchema(
                sid=call.sid,
                status=call.status,
                duration=call.duration,
                start_time=call.start_time,
                end_time=call.end_time,
                from_=call.from_,
                to=call.to,
            )
            for call in calls
        ]
    )
