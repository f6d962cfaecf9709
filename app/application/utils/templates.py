from __future__ import annotations

from datetime import date
from typing import Any

FALLBACK_LANGUAGE = "en"

# template id -> language -> str.format template
TEMPLATES: dict[str, dict[str, str]] = {
    "greeting": {
        "en": "Hello! Welcome to {business}. How can I help you today?",
        "es": "¡Hola! Bienvenido a {business}. ¿En qué puedo ayudarte hoy?",
    },
    "goodbye": {
        "en": "Thank you for calling {business}. Have a wonderful day!",
        "es": "Gracias por llamar a {business}. ¡Que tengas un buen día!",
    },
    "general": {
        "en": "I can help you with information about our services, prices, hours, location, transportation, and appointments. What would you like to know?",
        "es": "Puedo ayudarte con información sobre nuestros servicios, precios, horarios, ubicación, transporte y citas. ¿Qué te gustaría saber?",
    },
    "not_understood": {
        "en": "I'm sorry, I didn't understand that. Could you please repeat?",
        "es": "Lo siento, no entendí eso. ¿Podrías repetir?",
    },
    "services_overview": {
        "en": "We offer {count} service categories: {categories}. What service interests you most? I can provide detailed information about prices, duration, and what each service includes.",
        "es": "Ofrecemos {count} categorías de servicios: {categories}. ¿Qué servicio te interesa más? Puedo darte información detallada sobre precios, duración y lo que incluye cada servicio.",
    },
    "services_empty": {
        "en": "Our service list is being updated right now. Would you like to hear our hours or book an appointment?",
        "es": "Estamos actualizando nuestra lista de servicios. ¿Quieres conocer nuestros horarios o reservar una cita?",
    },
    "service_not_found": {
        "en": "Sorry, we couldn't find specific information about {service}. Would you like to see all our services?",
        "es": "Lo siento, no encontramos información específica sobre {service}. ¿Te gustaría ver todos nuestros servicios?",
    },
    "service_summary": {
        "en": "For {category}, we have {count} options available. {price_range}. ",
        "es": "Para {category}, tenemos {count} opciones disponibles. {price_range}. ",
    },
    "service_examples": {
        "en": "Some options include: {names}. ",
        "es": "Algunas opciones incluyen: {names}. ",
    },
    "service_followup": {
        "en": "Would you like more information about any specific option or pricing?",
        "es": "¿Te gustaría más información sobre alguna opción específica o sobre precios?",
    },
    "detail_not_found": {
        "en": "Sorry, I couldn't find detailed information about that specific service. Could you be more specific?",
        "es": "Lo siento, no encontré información detallada sobre ese servicio específico. ¿Podrías ser más específico?",
    },
    "service_detail": {
        "en": "{name}: {description}. Price: {price}. Duration: {duration}. Would you like to book an appointment for this service?",
        "es": "{name}: {description}. Precio: {price}. Duración: {duration}. ¿Te gustaría hacer una cita para este servicio?",
    },
    "duration_variable": {
        "en": "Variable",
        "es": "Variable",
    },
    "price_single": {
        "en": "Price: {price}",
        "es": "Precio: {price}",
    },
    "price_range": {
        "en": "Prices from {min_price} to {max_price}",
        "es": "Precios desde {min_price} hasta {max_price}",
    },
    "price_on_request": {
        "en": "Price available on request",
        "es": "Precio disponible bajo consulta",
    },
    "prices_overview": {
        "en": "Our prices range from {min_price} to {max_price} depending on the service. What specific service interests you for more detailed information?",
        "es": "Nuestros precios varían desde {min_price} hasta {max_price} dependiendo del servicio. ¿Qué servicio específico te interesa para darte información más detallada?",
    },
    "prices_unavailable": {
        "en": "Our prices depend on the service. Which service are you interested in?",
        "es": "Nuestros precios dependen del servicio. ¿Qué servicio te interesa?",
    },
    "price_not_found": {
        "en": "Sorry, I couldn't find pricing information for {service}. Could you be more specific?",
        "es": "Lo siento, no encontré información de precios para {service}. ¿Podrías ser más específico?",
    },
    "price_for_category": {
        "en": "For {category}: {price_range}. Would you like more information about specific options?",
        "es": "Para {category}: {price_range}. ¿Te gustaría más información sobre las opciones específicas?",
    },
    "hours_list": {
        "en": "Our hours are: {hours}. Would you like to make an appointment?",
        "es": "Nuestros horarios son: {hours}. ¿Te gustaría hacer una cita?",
    },
    "hours_fallback": {
        "en": "Our hours are Monday through Friday from 9:30 AM to 8:30 PM, Saturdays from 9:30 AM to 2:30 PM, and closed on Sundays. Would you like to make an appointment?",
        "es": "Nuestros horarios son de lunes a viernes de 9:30 AM a 8:30 PM, sábados de 9:30 AM a 2:30 PM, y cerrados los domingos. ¿Te gustaría hacer una cita?",
    },
    "closed": {
        "en": "Closed",
        "es": "cerrado",
    },
    "location": {
        "en": "We are located at {address}. {directions} Would you like information about public transportation or parking?",
        "es": "Estamos ubicados en {address}. {directions} ¿Te gustaría información sobre transporte público o estacionamiento?",
    },
    "location_fallback": {
        "en": "We are located at Calle Santos Justo y Pastor 72, Valencia, Spain. We are near the health district and the Santos Justo y Pastor church. Would you like help with directions or transportation?",
        "es": "Estamos ubicados en Calle Santos Justo y Pastor 72, Valencia, España. Estamos cerca de la zona de la salud y de la iglesia de Santos Justo y Pastor. ¿Te gustaría ayuda con las direcciones o el transporte?",
    },
    "default_address": {
        "en": "Calle Santos Justo y Pastor 72, Valencia",
        "es": "Calle Santos Justo y Pastor 72, Valencia",
    },
    "default_directions": {
        "en": "We are in the centre of Valencia, near the La Salud area.",
        "es": "Estamos en el centro de Valencia, cerca de la zona de La Salud.",
    },
    "parking_intro": {
        "en": "Parking options: ",
        "es": "Opciones de estacionamiento: ",
    },
    "parking_option": {
        "en": "{type} at {location} ({distance}, {cost}). ",
        "es": "{type} en {location} ({distance}, {cost}). ",
    },
    "parking_outro": {
        "en": "Would you like information about public transportation as an alternative?",
        "es": "¿Te gustaría información sobre transporte público como alternativa?",
    },
    "parking_fallback": {
        "en": "We have nearby parking options. There's private parking 5-7 minutes walking distance and blue/white zone parking on nearby streets. Would you like more information?",
        "es": "Tenemos opciones de estacionamiento cercanas. Hay parking privado a 5-7 minutos caminando y zona azul/blanca en las calles cercanas. ¿Te gustaría más información?",
    },
    "transport_intro": {
        "en": "Public transportation options: ",
        "es": "Opciones de transporte público: ",
    },
    "transport_bus": {
        "en": "Bus lines {lines}. ",
        "es": "Autobús líneas {lines}. ",
    },
    "transport_metro": {
        "en": "Metro lines {lines}. ",
        "es": "Metro líneas {lines}. ",
    },
    "transport_outro": {
        "en": "Would you like information about parking as well?",
        "es": "¿Te gustaría información sobre estacionamiento también?",
    },
    "transport_fallback": {
        "en": "We have easy access by public transportation. There are multiple bus and metro options nearby. Would you like specific information about the lines?",
        "es": "Tenemos fácil acceso en transporte público. Hay múltiples opciones de autobús y metro cerca. ¿Te gustaría información específica sobre las líneas?",
    },
    "appointment_for_service": {
        "en": "Excellent! I can help you book an appointment for {service}. What date and time would you prefer? We're available Monday through Friday from 9:30 AM to 8:30 PM, and Saturdays from 9:30 AM to 2:30 PM. Would you like to book it now?",
        "es": "¡Excelente! Puedo ayudarte a reservar una cita para {service}. ¿Qué fecha y hora prefieres? Estamos disponibles de lunes a viernes de 9:30 AM a 8:30 PM, y sábados de 9:30 AM a 2:30 PM. ¿Te gustaría reservarlo ahora?",
    },
    "appointment_generic": {
        "en": "Perfect, I understand you want to book an appointment. What specific service would you like to book? I can help you with manicures, pedicures, facials, eyebrow services, and more. What date and time would you prefer?",
        "es": "Perfecto, entiendo que quieres reservar una cita. ¿Para qué servicio específico te gustaría reservar? Puedo ayudarte con manicuras, pedicuras, faciales, servicios de cejas y más. ¿Qué fecha y hora prefieres?",
    },
    "booking_ask_service": {
        "en": "Which service would you like to book? For example a manicure, a pedicure, eyebrows, eyelashes or a facial.",
        "es": "¿Qué servicio te gustaría reservar? Por ejemplo manicura, pedicura, cejas, pestañas o un tratamiento facial.",
    },
    "booking_ask_date": {
        "en": "What day would you like to come in for {service}? You can say something like tomorrow or Friday.",
        "es": "¿Qué día te gustaría venir para {service}? Puedes decir algo como mañana o el viernes.",
    },
    "booking_ask_time": {
        "en": "What time works for you on {date}? For example 10 AM or 4:30 PM.",
        "es": "¿A qué hora te viene bien el {date}? Por ejemplo a las 10 de la mañana o a las 4 y media de la tarde.",
    },
    "booking_ask_name": {
        "en": "Almost done. What name should I put the appointment under?",
        "es": "Ya casi está. ¿A nombre de quién hago la reserva?",
    },
    "booking_confirmed": {
        "en": "Perfect {name}! Your appointment for {service} is confirmed for {date} at {time}. We'll send you a reminder. Is there anything else I can help you with?",
        "es": "¡Perfecto {name}! Tu cita para {service} está confirmada para el {date} a las {time}. Te enviaremos un recordatorio. ¿Hay algo más en lo que pueda ayudarte?",
    },
    "booking_failed": {
        "en": "I'm sorry, there was an error processing your appointment. Please try again or call us directly.",
        "es": "Lo siento, hubo un error al procesar tu cita. Por favor, intenta de nuevo o llámanos directamente.",
    },
    "booking_cancelled": {
        "en": "No problem, I've cancelled that booking request. Is there anything else I can help you with?",
        "es": "No hay problema, he cancelado la solicitud de reserva. ¿Hay algo más en lo que pueda ayudarte?",
    },
    "appointment_cancelled": {
        "en": "Your appointment has been cancelled.",
        "es": "Tu cita ha sido cancelada.",
    },
    "appointment_cancel_failed": {
        "en": "I'm sorry, we couldn't cancel that appointment. Please call us directly.",
        "es": "Lo siento, no pudimos cancelar esa cita. Por favor, llámanos directamente.",
    },
    "available_times": {
        "en": "For {date}, we have available times: {times}. What time would you prefer?",
        "es": "Para {date}, tenemos horarios disponibles: {times}. ¿Qué horario prefieres?",
    },
    "no_available_times": {
        "en": "Sorry, there are no free times on {date}. Would you like to try another day?",
        "es": "Lo siento, no hay horarios libres el {date}. ¿Quieres probar otro día?",
    },
    "datetime_parsed": {
        "en": "Perfect, I understand you want an appointment for {date} at {time}. What's your name and what service would you like?",
        "es": "Perfecto, entiendo que quieres una cita para {date} a las {time}. ¿Cuál es tu nombre y qué servicio te gustaría?",
    },
    "datetime_unparsed": {
        "en": "Sorry, I couldn't understand the date and time. Please tell me something like \"tomorrow at 2 PM\" or \"Friday at 10 AM\".",
        "es": "Lo siento, no pude entender la fecha y hora. Por favor, dime algo como \"mañana a las 2 de la tarde\" o \"el viernes a las 10 de la mañana\".",
    },
    "call_welcome": {
        "en": "Hello! Welcome to {business} beauty salon in Valencia. I'm here to help you with our services, hours, location, and appointments. How can I assist you today?",
        "es": "¡Hola! Bienvenido al salón de belleza {business} en Valencia. Estoy aquí para ayudarte con nuestros servicios, horarios, ubicación y citas. ¿En qué puedo ayudarte hoy?",
    },
    "call_error": {
        "en": "I'm sorry, there was an error processing your request. Could you please try again?",
        "es": "Lo siento, hubo un error procesando tu solicitud. ¿Podrías intentar de nuevo?",
    },
}

DAY_NAMES: dict[str, dict[str, str]] = {
    "monday": {"en": "Monday", "es": "lunes"},
    "tuesday": {"en": "Tuesday", "es": "martes"},
    "wednesday": {"en": "Wednesday", "es": "miércoles"},
    "thursday": {"en": "Thursday", "es": "jueves"},
    "friday": {"en": "Friday", "es": "viernes"},
    "saturday": {"en": "Saturday", "es": "sábado"},
    "sunday": {"en": "Sunday", "es": "domingo"},
}


def get_template(template_id: str, language: str) -> str:
    bucket = TEMPLATES[template_id]
    return bucket.get(language) or bucket[FALLBACK_LANGUAGE]


def render(template_id: str, language: str, **values: Any) -> str:
    return get_template(template_id, language).format(**values)


def day_name(day: str, language: str) -> str:
    names = DAY_NAMES.get(day.strip().lower())
    if not names:
        return day
    return names.get(language) or names[FALLBACK_LANGUAGE]


def format_price(value: float) -> str:
    """Plain number with a literal euro sign: 25 -> "25€", 22.5 -> "22.5€"."""
    number = int(value) if float(value).is_integer() else value
    return f"{number}€"


MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
}

_WEEKDAY_KEYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def spoken_date(value: date, language: str) -> str:
    """Spoken form of a date, e.g. Friday, March 6 or viernes 6 de marzo."""
    weekday = day_name(_WEEKDAY_KEYS[value.weekday()], language)
    months = MONTH_NAMES.get(language) or MONTH_NAMES[FALLBACK_LANGUAGE]
    month = months[value.month - 1]
    if language == "es":
        return f"{weekday} {value.day} de {month}"
    return f"{weekday}, {month} {value.day}"
