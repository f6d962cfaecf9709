from __future__ import annotations

import logging
from typing import Callable

from app.application.utils.entity_extractor import extract_entities
from app.application.utils.message_rules import contains_any, normalize_text, resolve_language
from app.application.utils.service_vocabulary import (
    APPOINTMENT_KEYWORDS,
    APPOINTMENT_SERVICE_TERMS,
    DETAILED_INFO_PHRASES,
    PARKING_KEYWORDS,
    SERVICE_INQUIRY_PHRASES,
    SPECIFIC_SERVICE_TERMS,
    TRANSPORT_KEYWORDS,
)
from app.domain.entities.intent import Entity, Intent, IntentType
from app.domain.entities.knowledge_base import NlpContext

PATTERN_CONFIDENCE = 0.9
DETECTOR_CONFIDENCE = 0.8
LOOSE_INQUIRY_CONFIDENCE = 0.7
DEFAULT_CONFIDENCE = 0.5

Detector = Callable[[str, str], "Intent | None"]


def _match_service(text: str, table: dict[str, tuple[str, ...]]) -> tuple[str, str] | None:
    for canonical, forms in table.items():
        matched = contains_any(text, forms)
        if matched:
            return canonical, matched
    return None


def detect_specific_service(text: str, language: str) -> Intent | None:
    hit = _match_service(text, SPECIFIC_SERVICE_TERMS)
    if hit:
        service, _ = hit
        return Intent(
            type=IntentType.specific_service,
            confidence=DETECTOR_CONFIDENCE,
            language=language,
            original_text=text,
            entities=(Entity(type="service", value=service),),
            service=service,
        )
    if contains_any(text, SERVICE_INQUIRY_PHRASES):
        return Intent(
            type=IntentType.service_inquiry,
            confidence=LOOSE_INQUIRY_CONFIDENCE,
            language=language,
            original_text=text,
        )
    return None


def detect_detailed_service_info(text: str, language: str) -> Intent | None:
    if not contains_any(text, DETAILED_INFO_PHRASES):
        return None
    return Intent(
        type=IntentType.detailed_service_info,
        confidence=DETECTOR_CONFIDENCE,
        language=language,
        original_text=text,
        entities=extract_entities(text),
    )


def detect_specific_appointment(text: str, language: str) -> Intent | None:
    """
    Appointment keyword plus a service term -> specific_appointment (0.9);
    keyword alone -> appointment_booking (0.8); no keyword -> None so that
    later entries in the priority list can still claim the text.
    """
    if not contains_any(text, APPOINTMENT_KEYWORDS):
        return None
    hit = _match_service(text, APPOINTMENT_SERVICE_TERMS)
    if hit:
        service, _ = hit
        return Intent(
            type=IntentType.specific_appointment,
            confidence=PATTERN_CONFIDENCE,
            language=language,
            original_text=text,
            entities=(Entity(type="service", value=service),),
            service=service,
        )
    return Intent(
        type=IntentType.appointment_booking,
        confidence=DETECTOR_CONFIDENCE,
        language=language,
        original_text=text,
    )


def _keyword_detector(intent_type: IntentType, keywords: tuple[str, ...]) -> Detector:
    def detect(text: str, language: str) -> Intent | None:
        if not contains_any(text, keywords):
            return None
        return Intent(type=intent_type, confidence=DETECTOR_CONFIDENCE, language=language, original_text=text)

    return detect


# Evaluation order is behaviour: the first entry producing an intent wins.
PRIORITY: tuple[tuple[IntentType, Detector | None], ...] = (
    (IntentType.greeting, None),
    (IntentType.goodbye, None),
    (IntentType.specific_appointment, detect_specific_appointment),
    (IntentType.appointment_booking, None),
    (IntentType.service_inquiry, None),
    (IntentType.specific_service, detect_specific_service),
    (IntentType.price_inquiry, None),
    (IntentType.hours_inquiry, None),
    (IntentType.location_inquiry, None),
    (IntentType.parking_inquiry, _keyword_detector(IntentType.parking_inquiry, PARKING_KEYWORDS)),
    (IntentType.transport_inquiry, _keyword_detector(IntentType.transport_inquiry, TRANSPORT_KEYWORDS)),
    (IntentType.detailed_service_info, detect_detailed_service_info),
    (IntentType.general_inquiry, None),
)


class ClassifyIntentUseCase:
    def __init__(self, context: NlpContext) -> None:
        self._context = context
        self._logger = logging.getLogger(__name__)

    def execute(self, text: str | None, language: str | None = "en") -> Intent:
        normalized = normalize_text(text)
        resolved_language = resolve_language(language, normalized)

        for intent_type, detector in PRIORITY:
            intent = self._check(normalized, intent_type, detector, resolved_language)
            if intent is not None:
                self._logger.debug(
                    "Intent matched",
                    extra={
                        "intent": intent.type.value,
                        "confidence": intent.confidence,
                        "language": resolved_language,
                        "service": intent.service,
                    },
                )
                return intent

        self._logger.info(
            "No specific intent, defaulting to general inquiry",
            extra={"intent": IntentType.general_inquiry.value, "language": resolved_language},
        )
        return Intent(
            type=IntentType.general_inquiry,
            confidence=DEFAULT_CONFIDENCE,
            language=resolved_language,
            original_text=normalized,
            entities=extract_entities(normalized),
        )

    classify = execute

    def _check(
        self,
        text: str,
        intent_type: IntentType,
        detector: Detector | None,
        language: str,
    ) -> Intent | None:
        phrases = self._context.patterns.phrases_for(intent_type.value)
        if contains_any(text, phrases):
            return Intent(
                type=intent_type,
                confidence=PATTERN_CONFIDENCE,
                language=language,
                original_text=text,
                entities=extract_entities(text),
            )
        if detector is not None:
            return detector(text, language)
        return None
