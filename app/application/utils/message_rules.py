from __future__ import annotations

import re
from typing import Iterable

SUPPORTED_LANGUAGES = ("en", "es")

SPANISH_MARKERS = (
    "hola",
    "gracias",
    "por",
    "qué",
    "cómo",
    "dónde",
    "cuándo",
    "cuánto",
    "servicios",
    "precio",
    "horarios",
)

CANCEL_KEYWORDS = (
    "cancel",
    "stop",
    "never mind",
    "no thanks",
    "cancelar",
    "no gracias",
    "olvídalo",
)

NAME_PATTERNS = (
    re.compile(r"\bmy name is ([^\W\d_]+(?: [^\W\d_]+)?)"),
    re.compile(r"\bcall me ([^\W\d_]+)"),
    re.compile(r"\bme llamo ([^\W\d_]+(?: [^\W\d_]+)?)"),
    re.compile(r"\bmi nombre es ([^\W\d_]+(?: [^\W\d_]+)?)"),
)

# Only trusted right after the caller was asked for their name ("I'm free friday" is not a name).
WEAK_NAME_PATTERNS = (
    re.compile(r"\bi'?m ([^\W\d_]+)"),
    re.compile(r"\bi am ([^\W\d_]+)"),
    re.compile(r"\bsoy ([^\W\d_]+)"),
)

# Words around a bare answer to "what name should I use" that are never part of the name.
NAME_FILLER_WORDS = frozenset(
    {
        "thanks", "thank", "you", "yes", "yeah", "no", "not", "ok", "okay", "sure", "please",
        "it's", "its", "it", "is", "i'm", "im", "i", "am", "my", "name", "hi", "hello", "just",
        "gracias", "sí", "si", "vale", "claro", "soy", "es", "me", "llamo", "mi", "nombre",
        "por", "favor", "hola", "pues", "bueno",
    }
)

NAME_WORD_RE = re.compile(r"[^\W\d_]+(?:['’][^\W\d_]+)?")


def normalize_text(text: str | None) -> str:
    """Lower-case and trim. Diacritics are kept: Spanish keywords depend on them."""
    return (text or "").lower().strip()


def contains_any(text: str, phrases: Iterable[str]) -> str | None:
    """Return the first phrase that occurs as a substring of text."""
    for phrase in phrases:
        if phrase and phrase.lower() in text:
            return phrase
    return None


def detect_language(text: str) -> str:
    return "es" if contains_any(text, SPANISH_MARKERS) else "en"


def resolve_language(hint: str | None, text: str = "") -> str:
    """
    Map a caller-supplied language hint to "en" or "es".
    Accepts locale codes ("es-ES", "en_US"); "auto" runs detect_language on the text.
    """
    code = (hint or "en").strip().lower().replace("_", "-")
    if code == "auto":
        return detect_language(normalize_text(text))
    base = code.split("-", 1)[0]
    return base if base in SUPPORTED_LANGUAGES else "en"


def is_cancel_request(text: str) -> bool:
    return contains_any(normalize_text(text), CANCEL_KEYWORDS) is not None


def extract_client_name(text: str, expecting_name: bool = False) -> str | None:
    normalized = normalize_text(text)
    for pattern in NAME_PATTERNS:
        match = pattern.search(normalized)
        if match:
            return match.group(1).title()

    if expecting_name:
        for pattern in WEAK_NAME_PATTERNS:
            match = pattern.search(normalized)
            if match and match.group(1) not in NAME_FILLER_WORDS:
                return match.group(1).title()
        words = [w.replace("’", "'") for w in NAME_WORD_RE.findall(normalized)]
        names = [w for w in words if w not in NAME_FILLER_WORDS]
        if 0 < len(names) <= 3:
            return " ".join(names).title()
    return None
