from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.service_catalog import ServiceCategory, ServiceVariant


class EntitySchema(BaseModel):
    type: str
    value: str


class TextRequestSchema(BaseModel):
    text: str = ""
    language: str = "en"


class ProcessResponseSchema(BaseModel):
    success: bool = True
    response: str
    intent: str
    confidence: float
    language: str
    entities: list[EntitySchema] = Field(default_factory=list)


class DiagnosticResponseSchema(BaseModel):
    success: bool = True
    input: str
    intent: dict[str, Any]
    response: str
    language: str


class ConversationMessageSchema(BaseModel):
    text: str
    role: str | None = None


class ConversationRequestSchema(BaseModel):
    messages: list[ConversationMessageSchema] = Field(default_factory=list)
    language: str = "en"


class ConversationResponseSchema(ProcessResponseSchema):
    context: list[ConversationMessageSchema] = Field(default_factory=list)


class IntentsResponseSchema(BaseModel):
    success: bool = True
    intents: list[str]
    patterns: dict[str, list[str]]


class ServiceVariantSchema(BaseModel):
    name: str
    description: str = ""
    price_original_eur: float | None = None
    price_discounted_eur: float | None = None
    duration: str | None = None

    @classmethod
    def from_entity(cls, variant: ServiceVariant) -> "ServiceVariantSchema":
        return cls(
            name=variant.name,
            description=variant.description,
            price_original_eur=variant.price_original_eur,
            price_discounted_eur=variant.price_discounted_eur,
            duration=variant.duration,
        )


class ServiceCategorySchema(BaseModel):
    category: str
    url: str = ""
    variants: list[ServiceVariantSchema] = Field(default_factory=list)
    price_original_eur: float | None = None
    price_discounted_eur: float | None = None
    duration: str | None = None

    @classmethod
    def from_entity(cls, category: ServiceCategory) -> "ServiceCategorySchema":
        return cls(
            category=category.category,
            url=category.url,
            variants=[ServiceVariantSchema.from_entity(v) for v in category.variants],
            price_original_eur=category.price_original,
            price_discounted_eur=category.price_discounted,
            duration=category.duration,
        )


class ServicesResponseSchema(BaseModel):
    success: bool = True
    services: list[ServiceCategorySchema]
    total_services: int


class ServiceResponseSchema(BaseModel):
    success: bool = True
    service: ServiceCategorySchema


class ScheduleResponseSchema(BaseModel):
    success: bool = True
    business_hours: dict[str, str] = Field(default_factory=dict)
    location: dict[str, Any] = Field(default_factory=dict)
    parking: dict[str, Any] = Field(default_factory=dict)


class SearchRequestSchema(BaseModel):
    query: str = ""
    language: str = "en"


class SearchHitSchema(BaseModel):
    type: str  # "category" | "variant"
    service: ServiceCategorySchema
    variant: ServiceVariantSchema | None = None
    match: str


class SearchResponseSchema(BaseModel):
    success: bool = True
    query: str
    results: list[SearchHitSchema]
    total_results: int


class HealthResponseSchema(BaseModel):
    success: bool = True
    status: str
    data_loaded: dict[str, Any]
    timestamp: str


class BookRequestSchema(BaseModel):
    client_name: str = Field(min_length=1)
    service: str = Field(min_length=1)
    date: dt.date
    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    email: str | None = None
    phone: str | None = None
    language: str = "en"


class AppointmentSchema(BaseModel):
    event_id: str | None = None
    event_url: str | None = None
    client_name: str
    service: str
    date: dt.date
    time: str


class BookResponseSchema(BaseModel):
    success: bool
    response: str
    appointment: AppointmentSchema | None = None
    error: str | None = None


class AvailableTimesResponseSchema(BaseModel):
    success: bool = True
    date: dt.date
    available_times: list[str]
    response: str


class ParsedDateTimeSchema(BaseModel):
    date: str | None = None
    time: str | None = None


class ParseDateTimeResponseSchema(BaseModel):
    success: bool
    response: str
    parsed: ParsedDateTimeSchema


class CancelRequestSchema(BaseModel):
    event_id: str = Field(min_length=1)
    language: str = "en"


class CancelResponseSchema(BaseModel):
    success: bool
    response: str
    event_id: str
    error: str | None = None


class CallSummarySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sid: str
    status: str | None = None
    duration: str | None = None
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None


class CallsResponseSchema(BaseModel):
    success: bool = True
    calls: list[CallSummarySchema]
