import pytest

from app.application.use_cases.generate_reply import GenerateReplyUseCase
from app.application.utils.templates import format_price, render, spoken_date
from app.domain.entities.intent import Entity, Intent, IntentType

ENGLISH_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _intent(intent_type: IntentType, language: str = "en", service: str | None = None) -> Intent:
    return Intent(type=intent_type, confidence=0.9, language=language, original_text="", service=service)


def test_services_overview_lists_categories(replies):
    reply = replies.execute(_intent(IntentType.service_inquiry), "en")
    assert "8 service categories" in reply
    assert "Manicuras" in reply
    assert "Depilación con cera" in reply


def test_specific_service_price_range_and_examples(replies):
    reply = replies.execute(_intent(IntentType.specific_service, service="manicure"), "en")
    assert "For Manicuras, we have 4 options available" in reply
    assert "Prices from 18€ to 35€" in reply
    assert "Manicura completa, Manicura semipermanente, Manicura francesa" in reply
    assert "Uñas de gel" not in reply


def test_specific_service_from_leading_entity(replies):
    intent = Intent(
        type=IntentType.specific_service,
        confidence=0.8,
        language="es",
        original_text="",
        entities=(Entity(type="service", value="eyelashes"),),
    )
    reply = replies.execute(intent, "es")
    assert reply.startswith("Para Pestañas, tenemos 3 opciones disponibles")


def test_specific_service_not_found(replies):
    reply = replies.execute(_intent(IntentType.specific_service, service="tattoo"), "en")
    assert "couldn't find specific information about tattoo" in reply


def test_detailed_service(replies):
    reply = replies.execute(_intent(IntentType.detailed_service_info, service="manicure"), "en")
    assert reply.startswith("Manicura completa:")
    assert "Price: 18€" in reply
    assert "Duration: 45 min" in reply


def test_detailed_service_without_service(replies):
    reply = replies.execute(_intent(IntentType.detailed_service_info), "en")
    assert reply == render("detail_not_found", "en")


def test_global_prices(replies):
    reply = replies.execute(_intent(IntentType.price_inquiry), "en")
    assert "€" in reply
    assert "from 10€ to 200€" in reply


def test_prices_for_category(replies):
    reply = replies.execute(_intent(IntentType.price_inquiry, service="eyebrows"), "en")
    assert reply.startswith("For Cejas: Prices from 10€ to 30€")


def test_flat_priced_category(replies):
    reply = replies.execute(_intent(IntentType.price_inquiry, service="depilación"), "es")
    assert "Precio: 12€" in reply


def test_hours_english(replies):
    reply = replies.execute(_intent(IntentType.hours_inquiry), "en")
    assert "AM" in reply and "PM" in reply
    assert "Monday: 9:30 AM - 8:30 PM" in reply
    assert "Sunday: Closed" in reply


def test_hours_spanish_has_no_english_day_names(replies):
    reply = replies.execute(_intent(IntentType.hours_inquiry, "es"), "es")
    assert "lunes: 9:30 AM - 8:30 PM" in reply
    assert "domingo: cerrado" in reply
    for day in ENGLISH_DAYS:
        assert day not in reply


def test_location_and_transport(replies):
    location = replies.execute(_intent(IntentType.location_inquiry), "en")
    assert "Calle Santos Justo y Pastor 72" in location

    transport = replies.execute(_intent(IntentType.transport_inquiry, "es"), "es")
    assert "Autobús líneas 18, 31, 40" in transport
    assert "Metro líneas 3, 5" in transport


def test_parking_lists_options(replies):
    reply = replies.execute(_intent(IntentType.parking_inquiry), "en")
    assert reply.startswith("Parking options: Private parking at Calle Ramón Asensio")
    assert "Blue/white zone" in reply


def test_appointment_prompts(replies):
    with_service = replies.execute(_intent(IntentType.specific_appointment, service="manicure"), "en")
    assert "book an appointment for a manicure" in with_service

    generic = replies.execute(_intent(IntentType.appointment_booking, "es"), "es")
    assert generic == render("appointment_generic", "es")


def test_greeting_and_goodbye_use_pattern_table_responses(replies):
    assert replies.execute(_intent(IntentType.greeting), "en").startswith("Hello! Welcome to Hera's Nails and Lashes")
    assert replies.execute(_intent(IntentType.goodbye, "es"), "es").startswith("Gracias por llamar")


def test_general_and_null_intent(replies):
    assert replies.execute(None, "en") == render("general", "en")
    assert replies.execute(_intent(IntentType.general_inquiry, "es"), "es") == render("general", "es")


@pytest.mark.parametrize(
    "intent_type, template_id",
    [
        (IntentType.service_inquiry, "services_empty"),
        (IntentType.price_inquiry, "prices_unavailable"),
        (IntentType.hours_inquiry, "hours_fallback"),
        (IntentType.location_inquiry, "location_fallback"),
        (IntentType.parking_inquiry, "parking_fallback"),
        (IntentType.transport_inquiry, "transport_fallback"),
    ],
)
def test_fallbacks_when_data_missing(empty_context, intent_type, template_id):
    replies = GenerateReplyUseCase(empty_context)
    assert replies.execute(_intent(intent_type), "en") == render(template_id, "en")


def test_unknown_language_falls_back_to_english():
    assert render("closed", "fr") == "Closed"


def test_format_price():
    assert format_price(25) == "25€"
    assert format_price(25.0) == "25€"
    assert format_price(22.5) == "22.5€"


def test_spoken_date():
    from datetime import date

    assert spoken_date(date(2026, 3, 6), "en") == "Friday, March 6"
    assert spoken_date(date(2026, 3, 6), "es") == "viernes 6 de marzo"


@pytest.mark.parametrize("text", ["", "   ", "???", "...!!!", "hello", "manicure price", "¿dónde están?"])
def test_classify_then_respond_never_raises(classifier, replies, text):
    intent = classifier.execute(text, "en")
    reply = replies.execute(intent, "en")
    assert isinstance(reply, str) and reply
