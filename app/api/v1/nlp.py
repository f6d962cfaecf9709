from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.v1.schemas import (
    ConversationRequestSchema,
    ConversationResponseSchema,
    DiagnosticResponseSchema,
    EntitySchema,
    HealthResponseSchema,
    IntentsResponseSchema,
    ProcessResponseSchema,
    ScheduleResponseSchema,
    SearchHitSchema,
    SearchRequestSchema,
    SearchResponseSchema,
    ServiceCategorySchema,
    ServiceResponseSchema,
    ServiceVariantSchema,
    ServicesResponseSchema,
    TextRequestSchema,
)
from app.application.use_cases.process_message import ProcessedMessage, ProcessMessageUseCase
from app.domain.entities.knowledge_base import NlpContext
from app.wiring.dependencies import get_nlp_context, get_process_message_use_case

router = APIRouter()
logger = logging.getLogger(__name__)

CONTEXT_WINDOW = 3


def _failure(error: str, exc: Exception) -> JSONResponse:
    logger.exception(error, extra={"error": str(exc)})
    return JSONResponse(status_code=500, content={"success": False, "error": error, "message": str(exc)})


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": error})


def _entities(processed: ProcessedMessage) -> list[EntitySchema]:
    return [EntitySchema(type=e.type, value=e.value) for e in processed.intent.entities]


@router.post("/process", response_model=ProcessResponseSchema)
def process(
    req: TextRequestSchema,
    uc: ProcessMessageUseCase = Depends(get_process_message_use_case),
):
    if not req.text.strip():
        return _bad_request("Text is required")
    try:
        processed = uc.execute(req.text, req.language)
    except Exception as e:
        return _failure("Failed to process request", e)
    return ProcessResponseSchema(
        response=processed.response,
        intent=processed.intent.type.value,
        confidence=processed.intent.confidence,
        language=processed.language,
        entities=_entities(processed),
    )


@router.post("/test", response_model=DiagnosticResponseSchema)
def test_intent(
    req: TextRequestSchema,
    uc: ProcessMessageUseCase = Depends(get_process_message_use_case),
):
    if not req.text.strip():
        return _bad_request("Text is required")
    try:
        processed = uc.execute(req.text, req.language)
    except Exception as e:
        return _failure("Failed to test NLP", e)
    return DiagnosticResponseSchema(
        input=req.text,
        intent=processed.intent.to_dict(),
        response=processed.response,
        language=processed.language,
    )


@router.post("/conversation", response_model=ConversationResponseSchema)
def conversation(
    req: ConversationRequestSchema,
    uc: ProcessMessageUseCase = Depends(get_process_message_use_case),
):
    if not req.messages:
        return _bad_request("Messages array is required")
    try:
        processed = uc.execute(req.messages[-1].text, req.language)
    except Exception as e:
        return _failure("Failed to process conversation", e)
    context = req.messages[-CONTEXT_WINDOW:] if len(req.messages) > 1 else []
    return ConversationResponseSchema(
        response=processed.response,
        intent=processed.intent.type.value,
        confidence=processed.intent.confidence,
        language=processed.language,
        entities=_entities(processed),
        context=context,
    )


@router.get("/intents", response_model=IntentsResponseSchema)
def intents(context: NlpContext = Depends(get_nlp_context)):
    patterns = {name: list(phrases) for name, phrases in context.patterns.patterns.items()}
    return IntentsResponseSchema(intents=list(patterns), patterns=patterns)


@router.get("/services", response_model=ServicesResponseSchema)
def services(context: NlpContext = Depends(get_nlp_context)):
    items = [ServiceCategorySchema.from_entity(s) for s in context.kb.services]
    return ServicesResponseSchema(services=items, total_services=len(items))


@router.get("/services/{category}", response_model=ServiceResponseSchema)
def service_category(category: str, context: NlpContext = Depends(get_nlp_context)):
    needle = category.strip().lower()
    for service in context.kb.services:
        name = service.category.lower()
        if needle in name or needle in "-".join(name.split()):
            return ServiceResponseSchema(service=ServiceCategorySchema.from_entity(service))
    raise HTTPException(status_code=404, detail="Service category not found")


@router.get("/schedule", response_model=ScheduleResponseSchema)
def schedule(context: NlpContext = Depends(get_nlp_context)):
    facts = context.kb.schedule
    return ScheduleResponseSchema(
        business_hours=dict(facts.business_hours or {}),
        location=asdict(facts.location) if facts.location else {},
        parking=asdict(facts.parking) if facts.parking else {},
    )


@router.post("/search", response_model=SearchResponseSchema)
def search(req: SearchRequestSchema, context: NlpContext = Depends(get_nlp_context)):
    if not req.query.strip():
        return _bad_request("Search query is required")
    term = req.query.strip().lower()
    results: list[SearchHitSchema] = []
    for service in context.kb.services:
        service_schema = ServiceCategorySchema.from_entity(service)
        if term in service.category.lower():
            results.append(SearchHitSchema(type="category", service=service_schema, match=service.category))
        for variant in service.variants:
            if term in variant.name.lower() or term in variant.description.lower():
                results.append(
                    SearchHitSchema(
                        type="variant",
                        service=service_schema,
                        variant=ServiceVariantSchema.from_entity(variant),
                        match=variant.name,
                    )
                )
    return SearchResponseSchema(query=req.query, results=results, total_results=len(results))


@router.get("/health", response_model=HealthResponseSchema)
def health(context: NlpContext = Depends(get_nlp_context)):
    return HealthResponseSchema(
        status="healthy",
        data_loaded={
            "services": len(context.kb.services),
            "intents": len(context.patterns.patterns),
            "schedule": context.kb.schedule.business_hours is not None,
        },
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
