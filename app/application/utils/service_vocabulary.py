from __future__ import annotations

# Canonical service key -> surface forms (English and Spanish), scanned in order.
# Insertion order is significant: the first canonical key with a matching form wins
# wherever only one service is taken.

ENTITY_SERVICE_TERMS: dict[str, tuple[str, ...]] = {
    "manicure": ("manicure", "manicuras", "manicura", "manicures"),
    "pedicure": ("pedicure", "pedicuras", "pedicura", "pedicures"),
    "eyebrows": ("eyebrows", "cejas", "ceja", "eyebrow"),
    "eyelashes": ("eyelashes", "pestañas", "pestaña", "eyelash", "lash", "lashes"),
    "facial": ("facial", "faciales", "facials"),
    "nails": ("nails", "uñas", "uña", "nail"),
    "micropigmentation": ("micropigmentación", "micropigmentation"),
    "pack": ("pack", "packs", "paquete", "paquetes"),
    "spa": ("spa", "spa manos", "spa de pies"),
    "lifting": ("lifting", "lifting de pestañas"),
    "laminado": ("laminado", "laminado de cejas"),
    "diseño": ("diseño", "diseños", "francesa"),
    "semipermanente": ("semipermanente", "semi-permanente"),
    "gel": ("gel", "uñas gel", "extensiones gel"),
    "depilación": ("depilación", "depilacion", "depilación con hilo"),
    "tinte": ("tinte", "tinte de pestañas", "tinte de cejas"),
}

# Broader table used to recognise a question about one specific service.
SPECIFIC_SERVICE_TERMS: dict[str, tuple[str, ...]] = {
    "manicure": ("manicuras", "manicura", "manicure", "manicures", "manicura completa", "manicura semipermanente"),
    "pedicure": ("pedicuras", "pedicura", "pedicure", "pedicures", "pedicura completa", "pedicura semipermanente"),
    "eyebrows": ("cejas", "ceja", "eyebrows", "eyebrow", "depilación de cejas", "diseño de cejas"),
    "eyelashes": ("pestañas", "pestaña", "eyelashes", "eyelash", "lash", "lashes", "lifting de pestañas"),
    "facial": ("faciales", "facial", "facials", "tratamiento facial"),
    "nails": ("uñas", "uña", "nails", "nail", "extensiones de uñas"),
    "micropigmentation": ("micropigmentación", "micropigmentation"),
    "pack": ("pack", "packs", "paquete", "paquetes"),
    "spa": ("spa", "spa manos", "spa de pies"),
    "lifting": ("lifting", "lifting de pestañas"),
    "laminado": ("laminado", "laminado de cejas"),
    "diseño": ("diseño", "diseños", "francesa"),
    "semipermanente": ("semipermanente", "semi-permanente"),
    "gel": ("gel", "uñas gel", "extensiones gel"),
    "depilación": ("depilación", "depilacion", "depilación con hilo"),
    "tinte": ("tinte", "tinte de pestañas", "tinte de cejas"),
}

# Looser phrasing that still asks about services in general.
SERVICE_INQUIRY_PHRASES = (
    "what services",
    "tell me about",
    "information about",
    "details about",
    "qué servicios",
    "cuéntame sobre",
    "información sobre",
    "detalles sobre",
    "options",
    "opciones",
    "offer",
    "ofrecen",
    "have",
    "tienen",
)

DETAILED_INFO_PHRASES = (
    "tell me more about",
    "more details",
    "what includes",
    "what is included",
    "más detalles",
    "qué incluye",
    "qué contiene",
    "descripción",
    "duration",
    "duración",
    "how long",
    "cuánto tiempo",
)

APPOINTMENT_KEYWORDS = (
    "appointment",
    "book",
    "booking",
    "reserve",
    "reservation",
    "schedule",
    "cita",
    "reservar",
    "reserva",
    "agendar",
    "agenda",
    "programar",
)

# Forms that pin an appointment request to a service. Bare "facial" or "nails" do not.
APPOINTMENT_SERVICE_TERMS: dict[str, tuple[str, ...]] = {
    "manicure": ("manicura", "manicuras", "manicure", "manicures", "manicura completa", "manicura semipermanente"),
    "pedicure": ("pedicura", "pedicuras", "pedicure", "pedicures", "pedicura completa", "pedicura semipermanente"),
    "eyebrows": ("ceja", "cejas", "depilación de cejas", "diseño de cejas"),
    "eyelashes": ("pestaña", "pestañas", "lifting de pestañas"),
    "facial": ("tratamiento facial",),
    "nails": ("extensiones de uñas",),
    "micropigmentation": ("micropigmentación", "micropigmentation"),
    "pack": ("pack", "packs", "paquete", "paquetes"),
    "spa": ("spa manos", "spa de pies"),
    "lifting": ("lifting de pestañas",),
    "laminado": ("laminado de cejas",),
    "diseño": ("francesa",),
    "semipermanente": ("semi-permanente",),
    "gel": ("uñas gel", "extensiones gel"),
    "depilación": ("depilación con hilo",),
    "tinte": ("tinte de pestañas", "tinte de cejas"),
}

PARKING_KEYWORDS = ("parking", "estacionamiento", "aparcamiento")

TRANSPORT_KEYWORDS = ("transport", "bus", "metro", "transporte", "autobús")

TIME_KEYWORDS = (
    "tomorrow",
    "today",
    "friday",
    "monday",
    "next week",
    "mañana",
    "hoy",
    "viernes",
    "lunes",
    "próxima semana",
)

PRICE_KEYWORDS = ("price", "cost", "how much", "precio", "costo", "cuánto")

# Canonical key -> substrings looked up in catalog category and variant names.
CATALOG_SEARCH_TERMS: dict[str, tuple[str, ...]] = {
    "manicure": ("manicuras", "manicura", "manicure"),
    "pedicure": ("pedicuras", "pedicura", "pedicure"),
    "eyebrows": ("cejas", "eyebrow"),
    "eyelashes": ("pestañas", "eyelash"),
    "facial": ("faciales", "facial"),
    "nails": ("manicuras", "uñas", "nail"),
    "micropigmentation": ("micropigmentación", "micropigmentation"),
    "pack": ("pack",),
    "spa": ("spa",),
    "lifting": ("lifting",),
    "laminado": ("laminado",),
    "diseño": ("diseño", "francesa"),
    "semipermanente": ("semipermanente",),
    "gel": ("gel",),
    "depilación": ("depilación",),
    "tinte": ("tinte",),
}

SERVICE_LABELS: dict[str, dict[str, str]] = {
    "manicure": {"en": "a manicure", "es": "una manicura"},
    "pedicure": {"en": "a pedicure", "es": "una pedicura"},
    "eyebrows": {"en": "eyebrows", "es": "cejas"},
    "eyelashes": {"en": "eyelashes", "es": "pestañas"},
    "facial": {"en": "a facial", "es": "un tratamiento facial"},
    "nails": {"en": "nails", "es": "uñas"},
    "micropigmentation": {"en": "micropigmentation", "es": "micropigmentación"},
    "pack": {"en": "a pack", "es": "un pack"},
    "spa": {"en": "a spa treatment", "es": "un tratamiento spa"},
    "lifting": {"en": "a lash lift", "es": "un lifting de pestañas"},
    "laminado": {"en": "a brow lamination", "es": "un laminado de cejas"},
    "diseño": {"en": "nail design", "es": "diseño de uñas"},
    "semipermanente": {"en": "a semi-permanent polish", "es": "un esmaltado semipermanente"},
    "gel": {"en": "gel nails", "es": "uñas de gel"},
    "depilación": {"en": "hair removal", "es": "depilación"},
    "tinte": {"en": "a tint", "es": "un tinte"},
}


def search_terms_for(service: str) -> tuple[str, ...]:
    return CATALOG_SEARCH_TERMS.get(service, (service,))


def service_label(service: str, language: str) -> str:
    labels = SERVICE_LABELS.get(service)
    if not labels:
        return service
    return labels.get(language) or labels["en"]
