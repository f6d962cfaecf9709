from __future__ import annotations

import re
from datetime import date, timedelta

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
    "lunes": 0,
    "martes": 1,
    "miercoles": 2,
    "miércoles": 2,
    "jueves": 3,
    "viernes": 4,
    "sabado": 5,
    "sábado": 5,
    "domingo": 6,
}

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}

NEXT_WEEK_PHRASES = ("next week", "próxima semana", "proxima semana", "semana que viene")

# "mañana" alone is tomorrow; inside these phrases it is the morning
MORNING_PHRASES = ("de la mañana", "por la mañana", "en la mañana")

_MONTH_ALTERNATION = "|".join(sorted(MONTHS, key=len, reverse=True))
_DAY_MONTH = re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+(?:de\s+|of\s+)?({_MONTH_ALTERNATION})\b")
_MONTH_DAY = re.compile(rf"\b({_MONTH_ALTERNATION})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b")
_ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")
_NUMERIC_DATE = re.compile(r"\b(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2,4}))?\b")

_CLOCK = re.compile(r"\b(\d{1,2})[:h](\d{2})\s*(am|pm|a\.m\.|p\.m\.)?")
_MERIDIEM = re.compile(r"\b(\d{1,2})\s*(am|pm|a\.m\.|p\.m\.)")
_SPANISH_PERIOD = re.compile(
    r"\b(\d{1,2})(?:\s+y\s+(media|cuarto))?\s+(?:de|por)\s+la\s+(mañana|tarde|noche)"
)
_BARE_HOUR = re.compile(r"\b(?:at|a las|a la)\s+(\d{1,2})(?:\s+y\s+(media|cuarto))?\b")


def _strip_morning(text: str) -> str:
    for phrase in MORNING_PHRASES:
        text = text.replace(phrase, " ")
    return text


def _future_date(reference: date, month: int, day: int, year: int | None = None) -> date | None:
    """Build a date; without an explicit year, roll past dates into next year."""
    try:
        if year is not None:
            return date(year, month, day)
        candidate = date(reference.year, month, day)
        if candidate < reference:
            candidate = date(reference.year + 1, month, day)
        return candidate
    except ValueError:
        return None


def parse_date_preference(text: str, reference_date: date) -> date | None:
    """
    Resolve a spoken/typed date against reference_date (today in the business timezone).

    Understands ISO dates, "today"/"hoy", "tomorrow"/"mañana", "pasado mañana", weekday
    names (next occurrence, never today), "next week"/"próxima semana", "5 de marzo",
    "march 5" and day-first numerics ("12/3", "12/03/2025").
    """
    normalized = text.lower().strip()

    iso = _ISO_DATE.search(normalized)
    if iso:
        return _future_date(reference_date, int(iso.group(2)), int(iso.group(3)), int(iso.group(1)))

    without_morning = _strip_morning(normalized)

    if "pasado mañana" in without_morning or "day after tomorrow" in without_morning:
        return reference_date + timedelta(days=2)
    if "today" in without_morning or re.search(r"\bhoy\b", without_morning):
        return reference_date
    if "tomorrow" in without_morning or "mañana" in without_morning:
        return reference_date + timedelta(days=1)

    for name, weekday in WEEKDAYS.items():
        if re.search(rf"\b{name}\b", without_morning):
            days_ahead = (weekday - reference_date.weekday()) % 7 or 7
            return reference_date + timedelta(days=days_ahead)

    day_month = _DAY_MONTH.search(without_morning)
    if day_month:
        return _future_date(reference_date, MONTHS[day_month.group(2)], int(day_month.group(1)))
    month_day = _MONTH_DAY.search(without_morning)
    if month_day:
        return _future_date(reference_date, MONTHS[month_day.group(1)], int(month_day.group(2)))

    numeric = _NUMERIC_DATE.search(without_morning)
    if numeric:
        day, month = int(numeric.group(1)), int(numeric.group(2))
        year = numeric.group(3)
        if year is not None:
            full_year = int(year) + 2000 if len(year) == 2 else int(year)
            return _future_date(reference_date, month, day, full_year)
        return _future_date(reference_date, month, day)

    if any(phrase in without_morning for phrase in NEXT_WEEK_PHRASES):
        return reference_date + timedelta(days=7)

    return None


def _minutes_word(word: str | None) -> int:
    if word == "media":
        return 30
    if word == "cuarto":
        return 15
    return 0


def _apply_meridiem(hour: int, meridiem: str | None) -> int:
    if meridiem is None:
        return hour
    if meridiem.startswith("p") and hour != 12:
        return hour + 12
    if meridiem.startswith("a") and hour == 12:
        return 0
    return hour


def parse_time_preference(text: str) -> tuple[int, int] | None:
    """Parse a time of day. Returns (hour, minute) in 24h, or None."""
    normalized = text.lower().strip()

    if "noon" in normalized or "mediodía" in normalized or "mediodia" in normalized:
        return (12, 0)

    candidates: list[tuple[int, int]] = []

    clock = _CLOCK.search(normalized)
    if clock:
        candidates.append((_apply_meridiem(int(clock.group(1)), clock.group(3)), int(clock.group(2))))

    if not candidates:
        meridiem = _MERIDIEM.search(normalized)
        if meridiem:
            candidates.append((_apply_meridiem(int(meridiem.group(1)), meridiem.group(2)), 0))

    if not candidates:
        period = _SPANISH_PERIOD.search(normalized)
        if period:
            hour = int(period.group(1))
            if period.group(3) in ("tarde", "noche") and hour < 12:
                hour += 12
            candidates.append((hour, _minutes_word(period.group(2))))

    if not candidates:
        bare = _BARE_HOUR.search(normalized)
        if bare:
            hour = int(bare.group(1))
            # salon hours: "at 3" means the afternoon
            if 1 <= hour <= 7:
                hour += 12
            candidates.append((hour, _minutes_word(bare.group(2))))

    for hour, minute in candidates:
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return (hour, minute)
    return None


def format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def parse_datetime(text: str, reference_date: date) -> tuple[date | None, str | None]:
    """Date and "HH:MM" time found in one utterance; either may be None."""
    parsed_time = parse_time_preference(text)
    return (
        parse_date_preference(text, reference_date),
        format_time(*parsed_time) if parsed_time else None,
    )
