"""
Fallback Generator Tests
Catalog template selection, day-count fitting and free-text day parsing
"""

import pytest

from tourplan.config import settings
from tourplan.interfaces.destination_catalog import DestinationCatalog, destination_catalog
from tourplan.llm.field_extractor import TravelRequest
from tourplan.llm.fallback_generator import (
    FallbackGenerator, GENERIC_TEMPLATE, GENERIC_TEXT_ITINERARY,
    DEFAULT_DESTINATION, DEFAULT_DURATION, DEFAULT_BUDGET, DEFAULT_DAY_ACTIVITIES,
    parse_itinerary_text, requested_day_count, generate_fallback_plan
)


@pytest.fixture
def generator():
    return FallbackGenerator(destination_catalog)


def test_catalog_template_used_for_known_destination(generator):
    plan = generator.generate(TravelRequest(destination="Delhi", duration="3 days", people=2, budget="₹30000 budget"))
    template = destination_catalog.get("delhi")

    assert plan.destination == "Delhi"
    assert plan.people == 2
    assert plan.budget == "₹30000 budget"
    assert [day.day for day in plan.itinerary] == ["Day 1", "Day 2", "Day 3"]
    assert plan.itinerary == list(template.itinerary)
    assert plan.accommodations == template.accommodations
    assert plan.transportation == template.transportation


def test_itinerary_padded_to_requested_days(generator):
    plan = generator.generate(TravelRequest(destination="Delhi", duration="5 days"))
    template = destination_catalog.get("delhi")

    assert len(plan.itinerary) == 5
    assert plan.itinerary[:3] == list(template.itinerary)
    assert [day.day for day in plan.itinerary[3:]] == ["Day 4", "Day 5"]
    assert "Delhi" in plan.itinerary[4].activities


def test_itinerary_truncated_to_requested_days(generator):
    plan = generator.generate(TravelRequest(destination="Delhi", duration="2 days"))
    template = destination_catalog.get("delhi")

    assert plan.itinerary == list(template.itinerary[:2])


def test_weeks_are_taken_literally_as_days(generator):
    plan = generator.generate(TravelRequest(destination="Delhi", duration="1 week"))
    assert len(plan.itinerary) == 1


def test_substring_lookup(generator):
    plan = generator.generate(TravelRequest(destination="South Goa Beaches"))
    assert plan.itinerary == list(destination_catalog.get("goa").itinerary)


def test_unknown_destination_uses_generic_template(generator):
    plan = generator.generate(TravelRequest(destination="Atlantis"))

    assert plan.destination == "Atlantis"
    assert plan.itinerary == list(GENERIC_TEMPLATE.itinerary)
    assert plan.itinerary[-1].day == "Final Day"


def test_empty_request_is_total(generator):
    plan = generator.generate(TravelRequest())

    assert plan.destination == DEFAULT_DESTINATION
    assert plan.duration == DEFAULT_DURATION
    assert plan.budget == DEFAULT_BUDGET
    assert plan.people == 1
    assert len(plan.itinerary) >= 1
    assert plan.accommodations
    assert plan.transportation


def test_generate_is_deterministic(generator):
    request = TravelRequest(destination="Kerala", duration="6 days", people=3)
    assert generator.generate(request) == generator.generate(request)


def test_custom_catalog():
    catalog = DestinationCatalog.from_dict({
        "lisbon": {
            "itinerary": [{"day": "Day 1", "activities": "Alfama walk and tram 28"}],
            "accommodations": "Baixa guesthouses",
            "transportation": "Metro and trams"
        }
    })
    plan = FallbackGenerator(catalog).generate(TravelRequest(destination="Lisbon", duration="2 days"))

    assert plan.accommodations == "Baixa guesthouses"
    assert [day.day for day in plan.itinerary] == ["Day 1", "Day 2"]


@pytest.mark.parametrize("duration,expected", [
    ("5 days", 5),
    ("3 nights", 3),
    ("0 days", None),
    ("a few days", None),
    (None, None),
])
def test_requested_day_count(duration, expected):
    assert requested_day_count(duration) == expected


def test_parse_every_day_marker():
    text = ("Day 1: Arrive and visit the Red Fort. "
            "Day 2: Morning: Qutub Minar, afternoon lunch in Hauz Khas. "
            "Day 3: Shopping at Chandni Chowk and departure.")
    itinerary = parse_itinerary_text(text)

    assert [day.day for day in itinerary] == ["Day 1", "Day 2", "Day 3"]
    assert itinerary[0].activities.startswith("Arrive and visit the Red Fort")
    assert "Qutub Minar" in itinerary[1].activities
    assert "Morning" not in itinerary[1].activities
    assert ":" not in itinerary[1].activities


def test_parse_spelled_out_day_numbers():
    itinerary = parse_itinerary_text("Day one: beach walk at sunrise. Day two: spice plantation tour")
    assert [day.day for day in itinerary] == ["Day 1", "Day 2"]


def test_parse_short_block_gets_default_activities():
    itinerary = parse_itinerary_text("Day 1: Rest. Day 2: Full day at the Taj Mahal and Agra Fort")
    assert itinerary[0].activities == DEFAULT_DAY_ACTIVITIES
    assert "Taj Mahal" in itinerary[1].activities


def test_parse_without_markers_returns_generic_days():
    assert parse_itinerary_text("We recommend a relaxing holiday.") == list(GENERIC_TEXT_ITINERARY)
    assert parse_itinerary_text(None) == list(GENERIC_TEXT_ITINERARY)


def test_convenience_function():
    assert generate_fallback_plan(TravelRequest(destination="Goa")).destination == "Goa"


def test_huge_duration_is_capped(generator):
    request = TravelRequest(destination="Goa", duration="2000000 days")
    plan = generator.generate(request)

    assert len(plan.itinerary) == settings.MAX_ITINERARY_DAYS
    assert plan.itinerary[-1].day == f"Day {settings.MAX_ITINERARY_DAYS}"
    assert plan.duration == "2000000 days"


@pytest.mark.parametrize("duration,expected", [
    ("30 days", 30),
    ("31 days", 30),
    ("9" * 5000 + " days", 30),
    ("007 days", 7),
    ("000 days", None),
])
def test_requested_day_count_cap(duration, expected):
    assert requested_day_count(duration, max_days=30) == expected
