from datetime import date

import pytest

from app.application.utils.date_parser import (
    format_time,
    parse_date_preference,
    parse_datetime,
    parse_time_preference,
)

# A Monday
REF = date(2026, 3, 2)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", date(2026, 3, 2)),
        ("hoy", date(2026, 3, 2)),
        ("tomorrow", date(2026, 3, 3)),
        ("mañana por la mañana", date(2026, 3, 3)),
        ("pasado mañana", date(2026, 3, 4)),
        ("this friday", date(2026, 3, 6)),
        ("el viernes", date(2026, 3, 6)),
        ("monday", date(2026, 3, 9)),
        ("5 de marzo", date(2026, 3, 5)),
        ("march 20th", date(2026, 3, 20)),
        ("march 1", date(2027, 3, 1)),
        ("12/03", date(2026, 3, 12)),
        ("12/04/2026", date(2026, 4, 12)),
        ("2026-04-10", date(2026, 4, 10)),
        ("next week", date(2026, 3, 9)),
    ],
)
def test_parse_date_preference(text, expected):
    assert parse_date_preference(text, REF) == expected


@pytest.mark.parametrize("text", ["whenever works", "", "31/02"])
def test_unparseable_dates(text):
    assert parse_date_preference(text, REF) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3 pm", (15, 0)),
        ("at 10am", (10, 0)),
        ("10:30", (10, 30)),
        ("4:30 pm", (16, 30)),
        ("12 am", (0, 0)),
        ("12 pm", (12, 0)),
        ("noon", (12, 0)),
        ("a las 5 de la tarde", (17, 0)),
        ("a las 10 de la mañana", (10, 0)),
        ("a las 4 y media de la tarde", (16, 30)),
        ("at 3", (15, 0)),
        ("at 11", (11, 0)),
        ("17h30", (17, 30)),
    ],
)
def test_parse_time_preference(text, expected):
    assert parse_time_preference(text) == expected


def test_no_time_found():
    assert parse_time_preference("sometime next week") is None
    assert parse_time_preference("25:00") is None


def test_format_time():
    assert format_time(9, 5) == "09:05"


def test_parse_datetime_combines_both():
    assert parse_datetime("tomorrow at 2 pm", REF) == (date(2026, 3, 3), "14:00")
    assert parse_datetime("el viernes a las 10 de la mañana", REF) == (date(2026, 3, 6), "10:00")
    assert parse_datetime("friday", REF) == (date(2026, 3, 6), None)
    assert parse_datetime("nothing useful", REF) == (None, None)
