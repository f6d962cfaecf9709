from __future__ import annotations

import logging
from typing import Callable

from app.application.utils.service_vocabulary import search_terms_for, service_label
from app.application.utils.templates import day_name, format_price, render
from app.domain.entities.intent import Intent, IntentType
from app.domain.entities.knowledge_base import NlpContext
from app.domain.entities.service_catalog import ServiceCategory

MAX_LISTED_VARIANTS = 3


class GenerateReplyUseCase:
    """Turns a classified intent into a templated answer using the knowledge base."""

    def __init__(self, context: NlpContext, business_name: str = "Hera's Nails and Lashes") -> None:
        self._context = context
        self._business_name = business_name
        self._logger = logging.getLogger(__name__)
        self._handlers: dict[IntentType, Callable[[Intent, str], str]] = {
            IntentType.service_inquiry: self._services_overview,
            IntentType.specific_service: self._specific_service,
            IntentType.detailed_service_info: self._detailed_service,
            IntentType.price_inquiry: self._prices,
            IntentType.hours_inquiry: self._hours,
            IntentType.location_inquiry: self._location,
            IntentType.parking_inquiry: self._parking,
            IntentType.transport_inquiry: self._transport,
            IntentType.specific_appointment: self._appointment,
            IntentType.appointment_booking: self._appointment,
            IntentType.greeting: self._greeting,
            IntentType.goodbye: self._goodbye,
        }

    def execute(self, intent: Intent | None, language: str = "en") -> str:
        if intent is None:
            return render("general", language)
        handler = self._handlers.get(intent.type)
        if handler is None:
            return render("general", language)
        return handler(intent, language)

    respond = execute

    def _services_overview(self, intent: Intent, language: str) -> str:
        names = self._context.kb.category_names
        if not names:
            return render("services_empty", language)
        return render("services_overview", language, count=len(names), categories=", ".join(names))

    def _specific_service(self, intent: Intent, language: str) -> str:
        service = intent.primary_service
        category = self._find_category(service)
        if category is None:
            self._logger.info("Service not in catalog", extra={"service": service, "language": language})
            return render("service_not_found", language, service=service or "")

        reply = render(
            "service_summary",
            language,
            category=category.category,
            count=len(category.variants),
            price_range=_price_range(category, language),
        )
        if category.variants:
            names = ", ".join(v.name for v in category.variants[:MAX_LISTED_VARIANTS])
            reply += render("service_examples", language, names=names)
        return reply + render("service_followup", language)

    def _detailed_service(self, intent: Intent, language: str) -> str:
        service = intent.primary_service
        hit = self._context.kb.find_variant(search_terms_for(service)) if service else None
        if hit is None:
            return render("detail_not_found", language)

        _, variant = hit
        price = format_price(variant.price) if variant.price is not None else render("price_on_request", language)
        return render(
            "service_detail",
            language,
            name=variant.name,
            description=variant.description,
            price=price,
            duration=variant.duration or render("duration_variable", language),
        )

    def _prices(self, intent: Intent, language: str) -> str:
        service = intent.primary_service
        if not service:
            prices = self._context.kb.all_prices()
            if not prices:
                return render("prices_unavailable", language)
            return render(
                "prices_overview",
                language,
                min_price=format_price(min(prices)),
                max_price=format_price(max(prices)),
            )

        category = self._find_category(service)
        if category is None:
            return render("price_not_found", language, service=service)
        return render(
            "price_for_category",
            language,
            category=category.category,
            price_range=_price_range(category, language),
        )

    def _hours(self, intent: Intent, language: str) -> str:
        hours = self._context.kb.schedule.business_hours
        if not hours:
            return render("hours_fallback", language)
        closed = render("closed", language)
        entries = []
        for day, time_range in hours.items():
            if time_range.strip().lower() in {"closed", "cerrado"}:
                time_range = closed
            entries.append(f"{day_name(day, language)}: {time_range}")
        return render("hours_list", language, hours=", ".join(entries))

    def _location(self, intent: Intent, language: str) -> str:
        location = self._context.kb.schedule.location
        if location is None:
            return render("location_fallback", language)
        return render(
            "location",
            language,
            address=location.address or render("default_address", language),
            directions=location.directions_for(language) or render("default_directions", language),
        )

    def _parking(self, intent: Intent, language: str) -> str:
        parking = self._context.kb.schedule.parking
        if parking is None:
            return render("parking_fallback", language)
        reply = render("parking_intro", language)
        for option in parking.options:
            reply += render(
                "parking_option",
                language,
                type=option.type,
                location=option.location,
                distance=option.distance,
                cost=option.cost,
            )
        return reply + render("parking_outro", language)

    def _transport(self, intent: Intent, language: str) -> str:
        location = self._context.kb.schedule.location
        transport = location.public_transport if location else None
        if transport is None:
            return render("transport_fallback", language)
        reply = render("transport_intro", language)
        if transport.bus:
            reply += render("transport_bus", language, lines=", ".join(t.line for t in transport.bus))
        if transport.metro:
            reply += render("transport_metro", language, lines=", ".join(t.line for t in transport.metro))
        return reply + render("transport_outro", language)

    def _appointment(self, intent: Intent, language: str) -> str:
        if intent.service:
            return render("appointment_for_service", language, service=service_label(intent.service, language))
        return render("appointment_generic", language)

    def _greeting(self, intent: Intent, language: str) -> str:
        return self._context.patterns.response_for("greeting", language) or render(
            "greeting", language, business=self._business_name
        )

    def _goodbye(self, intent: Intent, language: str) -> str:
        return self._context.patterns.response_for("goodbye", language) or render(
            "goodbye", language, business=self._business_name
        )

    def _find_category(self, service: str | None) -> ServiceCategory | None:
        if not service:
            return None
        return self._context.kb.find_category(search_terms_for(service))


def _price_range(category: ServiceCategory, language: str) -> str:
    if not category.variants:
        if category.flat_price is not None:
            return render("price_single", language, price=format_price(category.flat_price))
        return render("price_on_request", language)

    prices = category.variant_prices()
    if not prices:
        return render("price_on_request", language)
    low, high = min(prices), max(prices)
    if low == high:
        return render("price_single", language, price=format_price(low))
    return render("price_range", language, min_price=format_price(low), max_price=format_price(high))
