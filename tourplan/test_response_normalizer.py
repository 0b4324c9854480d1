"""
Response Normalizer Tests
Coercion of LLM replies (clean JSON, wrapped JSON, odd shapes, prose, garbage)
"""

import json

import pytest

from tourplan.interfaces.destination_catalog import destination_catalog
from tourplan.llm.field_extractor import TravelRequest
from tourplan.llm.fallback_generator import FallbackGenerator, DEFAULT_ACCOMMODATIONS, DEFAULT_TRANSPORTATION
from tourplan.llm.response_normalizer import (
    ActivityShape, ResponseNormalizer, DEFAULT_ACTIVITIES,
    classify_activities, extract_section, flatten_activities, parse_json_object
)
from tourplan.schemas.plan_schemas import PlanSource, TourPlan


@pytest.fixture
def normalizer():
    return ResponseNormalizer(FallbackGenerator(destination_catalog))


@pytest.fixture
def request_info():
    return TravelRequest(destination="Goa", duration="3 days", people=2, budget="₹30000 budget")


def make_reply(**overrides):
    plan = {
        "destination": "Goa",
        "duration": "3 days",
        "budget": "₹30000",
        "people": 2,
        "itinerary": [
            {"day": "Day 1", "activities": "Baga beach, dinner at Tito's Lane"},
            {"day": "Day 2", "activities": "Old Goa churches, Panjim walk"},
            {"day": "Day 3", "activities": "Dudhsagar falls day trip"},
        ],
        "accommodations": "Beach huts in Palolem (₹2,000/night)",
        "transportation": "Rent a scooter (₹400/day)",
    }
    plan.update(overrides)
    return plan


def test_clean_json_reply(normalizer, request_info):
    result = normalizer.normalize_with_source(json.dumps(make_reply()), request_info)

    assert result.source == PlanSource.AI
    assert result.plan.destination == "Goa"
    assert len(result.plan.itinerary) == 3
    assert result.plan.transportation == "Rent a scooter (₹400/day)"


def test_json_wrapped_in_prose_and_fences(normalizer, request_info):
    text = "Sure! Here is your plan:\n```json\n" + json.dumps(make_reply()) + "\n```\nEnjoy!"
    result = normalizer.normalize_with_source(text, request_info)

    assert result.source == PlanSource.AI
    assert result.plan.itinerary[1].activities == "Old Goa churches, Panjim walk"


def test_nested_plan_is_unwrapped(normalizer, request_info):
    text = json.dumps({"tourPlan": make_reply()})
    assert normalizer.normalize(text, request_info).accommodations.startswith("Beach huts")


def test_timed_activities_are_flattened(normalizer, request_info):
    reply = make_reply(itinerary=[
        {"day": "Day 1", "activities": [
            {"time": "9 AM", "activity": "Visit Fort Aguada"},
            {"time": "1 PM", "activity": "Lunch at Candolim"},
        ]},
    ])
    plan = normalizer.normalize(json.dumps(reply), request_info)

    assert plan.itinerary[0].activities == "9 AM: Visit Fort Aguada, 1 PM: Lunch at Candolim"


def test_missing_fields_come_from_request(normalizer, request_info):
    reply = make_reply()
    del reply["budget"]
    del reply["people"]
    del reply["transportation"]
    result = normalizer.normalize_with_source(json.dumps(reply), request_info)

    assert result.source == PlanSource.AI_PARTIAL
    assert result.plan.budget == "₹30000 budget"
    assert result.plan.people == 2
    assert result.plan.transportation


def test_numeric_and_string_fields_are_coerced(normalizer, request_info):
    reply = make_reply(people="4 adults", budget=50000, itinerary=[
        {"day": 2, "activities": ["Spice farm", "Cashew tasting"]},
        {"day": 1, "activities": {"morning": "Beach", "evening": "Night market"}},
    ])
    plan = normalizer.normalize(json.dumps(reply), request_info)

    assert plan.people == 4
    assert plan.budget == "50000"
    assert [day.day for day in plan.itinerary] == ["Day 1", "Day 2"]
    assert plan.itinerary[0].activities == "morning: Beach, evening: Night market"
    assert plan.itinerary[1].activities == "Spice farm, Cashew tasting"


def test_unnumbered_labels_keep_reply_order(normalizer, request_info):
    reply = make_reply(itinerary=[
        {"day": "Arrival", "activities": "Check in and relax by the pool"},
        {"day": "Day 2", "activities": ""},
    ])
    plan = normalizer.normalize(json.dumps(reply), request_info)

    assert [day.day for day in plan.itinerary] == ["Arrival", "Day 2"]
    assert plan.itinerary[1].activities == DEFAULT_ACTIVITIES


def test_json_without_itinerary_parses_day_text(normalizer, request_info):
    reply = make_reply(itinerary=[])
    text = json.dumps(reply) + "\nDay 1: Calangute beach and water sports. Day 2: Fontainhas heritage walk."
    result = normalizer.normalize_with_source(text, request_info)

    assert result.source == PlanSource.AI_PARTIAL
    assert [day.day for day in result.plan.itinerary] == ["Day 1", "Day 2"]


@pytest.mark.parametrize("raw", [
    None,
    "",
    "   ",
    "I'm sorry, I can't help with that.",
    "{not json at all",
    "[1, 2, 3]",
    b"\xff\xfe",
    "{" * 5000 + "}" * 5000,
])
def test_unusable_replies_fall_back(normalizer, request_info, raw):
    result = normalizer.normalize_with_source(raw, request_info)

    assert result.source == PlanSource.FALLBACK
    assert result.plan == normalizer.fallback.generate(request_info)


def test_normalize_is_total_with_empty_request(normalizer):
    plan = normalizer.normalize("garbage", TravelRequest())
    assert isinstance(plan, TourPlan)
    assert plan.itinerary


@pytest.mark.parametrize("value,shape", [
    ("text", ActivityShape.TEXT),
    (["a", "b"], ActivityShape.TEXT_LIST),
    ([{"time": "9", "activity": "a"}], ActivityShape.TIMED_LIST),
    ({"morning": "a"}, ActivityShape.MAPPING),
    (42, ActivityShape.OTHER),
])
def test_classify_activities(value, shape):
    assert classify_activities(value) == shape


def test_flatten_activities_edge_cases():
    assert flatten_activities(None) == ""
    assert flatten_activities([{"activity": "Museum"}, "Lunch", None]) == "Museum, Lunch"
    assert flatten_activities([{"note": "bring water"}]) == "note: bring water"


def test_extract_section():
    text = "Day 1: Beach\n\nAccommodations: Beach huts in Palolem\n\nTransportation: Scooter rental\n"
    assert extract_section(text, "accommodations") == "Beach huts in Palolem"
    assert extract_section(text, "transportation") == "Scooter rental"
    assert extract_section(text, "weather") is None


def test_parse_json_object():
    assert parse_json_object('{"a": 1}') == {"a": 1}
    assert parse_json_object('noise {"a": 1} noise') == {"a": 1}
    assert parse_json_object("[1]") is None
    assert parse_json_object("nothing") is None


def test_structured_sections_are_flattened(normalizer, request_info):
    reply = make_reply(
        accommodations=["Hotel A", "Hotel B"],
        transportation={"airport": "Prepaid taxi", "local": "Scooter"}
    )
    result = normalizer.normalize_with_source(json.dumps(reply), request_info)

    assert result.source == PlanSource.AI_PARTIAL
    assert result.plan.accommodations == "Hotel A, Hotel B"
    assert result.plan.transportation == "airport: Prepaid taxi, local: Scooter"


def test_empty_structured_section_uses_default(normalizer, request_info):
    reply = make_reply(accommodations=[], transportation=42)
    plan = normalizer.normalize(json.dumps(reply), request_info)

    assert plan.accommodations == DEFAULT_ACCOMMODATIONS
    assert plan.transportation == DEFAULT_TRANSPORTATION
