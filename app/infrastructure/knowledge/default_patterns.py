from __future__ import annotations

from app.domain.entities.knowledge_base import PatternTable

DEFAULT_PATTERNS: dict[str, tuple[str, ...]] = {
    "service_inquiry": (
        "what services do you offer",
        "what services do you have",
        "tell me about your services",
        "what do you do",
        "services",
        "qué servicios ofrecen",
        "qué servicios tienen",
        "cuéntame sobre sus servicios",
        "qué hacen",
    ),
    "price_inquiry": (
        "how much",
        "what is the price",
        "cost",
        "price",
        "pricing",
        "rates",
        "cuánto cuesta",
        "cuál es el precio",
        "precio",
        "costos",
        "tarifas",
    ),
    "hours_inquiry": (
        "what are your hours",
        "when are you open",
        "business hours",
        "schedule",
        "opening times",
        "cuáles son sus horarios",
        "cuándo están abiertos",
        "horarios",
        "horario de atención",
    ),
    "location_inquiry": (
        "where are you located",
        "address",
        "location",
        "directions",
        "how to get there",
        "dónde están ubicados",
        "dirección",
        "ubicación",
        "cómo llegar",
    ),
    "appointment_booking": (
        "book an appointment",
        "make an appointment",
        "schedule",
        "reserve",
        "booking",
        "reservar una cita",
        "hacer una cita",
        "agendar",
        "reserva",
    ),
    "greeting": (
        "hello",
        "hi",
        "good morning",
        "good afternoon",
        "good evening",
        "hola",
        "buenos días",
        "buenas tardes",
        "buenas noches",
    ),
    "goodbye": (
        "goodbye",
        "bye",
        "thank you",
        "thanks",
        "see you",
        "see you later",
        "adiós",
        "hasta luego",
        "gracias",
        "nos vemos",
        "hasta la vista",
    ),
}

DEFAULT_RESPONSES: dict[str, dict[str, str]] = {
    "greeting": {
        "en": "Hello! Welcome to Hera's Nails and Lashes. How can I help you today?",
        "es": "¡Hola! Bienvenido a Hera's Nails and Lashes. ¿En qué puedo ayudarte hoy?",
    },
    "goodbye": {
        "en": "Thank you for calling Hera's Nails and Lashes. Have a wonderful day!",
        "es": "Gracias por llamar a Hera's Nails and Lashes. ¡Que tengas un buen día!",
    },
}


def default_pattern_table() -> PatternTable:
    return PatternTable(
        patterns={name: tuple(phrases) for name, phrases in DEFAULT_PATTERNS.items()},
        responses={name: dict(texts) for name, texts in DEFAULT_RESPONSES.items()},
    )
