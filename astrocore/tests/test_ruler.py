"""Tests for the ruler of the day."""

from datetime import UTC, date, datetime

import pytest
from aeonis.schemas.chart import Planet

from astrocore.ruler import get_ruler_of_day, get_ruler_recommendation, get_ruler_symbol


@pytest.mark.parametrize(
    ("day", "planet", "name"),
    [
        (date(2024, 6, 17), Planet.MOON, "Monday"),
        (date(2024, 6, 18), Planet.MARS, "Tuesday"),
        (date(2024, 6, 19), Planet.MERCURY, "Wednesday"),
        (date(2024, 6, 20), Planet.JUPITER, "Thursday"),
        (date(2024, 6, 21), Planet.VENUS, "Friday"),
        (date(2024, 6, 22), Planet.SATURN, "Saturday"),
        (date(2024, 6, 23), Planet.SUN, "Sunday"),
    ],
)
def test_ruler_of_each_weekday(day, planet, name):
    ruler = get_ruler_of_day(day)
    assert ruler.planet == planet
    assert ruler.day_name == name
    assert ruler.color.startswith("#")


def test_datetime_uses_its_own_date():
    assert get_ruler_of_day(datetime(2024, 6, 23, 23, 59, tzinfo=UTC)).planet == Planet.SUN


def test_defaults_to_today():
    assert get_ruler_of_day() == get_ruler_of_day(datetime.now(UTC).date())


def test_symbol():
    assert get_ruler_symbol(date(2024, 6, 22)) == "♄"
    assert get_ruler_symbol(date(2024, 6, 24)) == "☽"


def test_recommendation():
    rec = get_ruler_recommendation(date(2024, 6, 21))
    assert rec.planet == Planet.VENUS
    assert rec.symbol == "♀"
    assert rec.day_name == "Friday"
    assert rec.color == "#22C55E"
    assert rec.recommendation.startswith("Today is ruled by Venus. Venus Invocation.")
