from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IntentType(str, Enum):
    greeting = "greeting"
    goodbye = "goodbye"
    specific_appointment = "specific_appointment"
    appointment_booking = "appointment_booking"
    service_inquiry = "service_inquiry"
    specific_service = "specific_service"
    price_inquiry = "price_inquiry"
    hours_inquiry = "hours_inquiry"
    location_inquiry = "location_inquiry"
    parking_inquiry = "parking_inquiry"
    transport_inquiry = "transport_inquiry"
    detailed_service_info = "detailed_service_info"
    general_inquiry = "general_inquiry"


APPOINTMENT_INTENTS = frozenset({IntentType.specific_appointment, IntentType.appointment_booking})


@dataclass(frozen=True)
class Entity:
    type: str  # "service" | "time" | "price"
    value: str


@dataclass(frozen=True)
class Intent:
    type: IntentType
    confidence: float
    language: str
    original_text: str
    entities: tuple[Entity, ...] = field(default_factory=tuple)
    service: str | None = None

    @property
    def primary_service(self) -> str | None:
        """Service named by the intent itself, else by a leading service entity."""
        if self.service:
            return self.service
        if self.entities and self.entities[0].type == "service":
            return self.entities[0].value
        return None

    @property
    def is_appointment(self) -> bool:
        return self.type in APPOINTMENT_INTENTS

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "confidence": self.confidence,
            "language": self.language,
            "originalText": self.original_text,
            "entities": [{"type": e.type, "value": e.value} for e in self.entities],
            "service": self.service,
        }
