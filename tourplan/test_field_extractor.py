"""
Field Extractor Tests
Destination, duration, people and budget extraction from chatbot messages
"""

import pytest

from tourplan.llm.field_extractor import TravelInfoExtractor, TravelRequest, extract_travel_info


@pytest.fixture
def extractor():
    return TravelInfoExtractor(match_policy="last")


def test_full_request(extractor):
    request = extractor.extract("I want to visit Kerala for 5 days with 2 people and a 50k budget")

    assert request.destination == "Kerala"
    assert request.duration == "5 days"
    assert request.people == 2
    assert "50k" in request.budget
    assert request.is_actionable


def test_no_destination_needs_clarification(extractor):
    request = extractor.extract("plan me a nice relaxing trip")

    assert request.destination is None
    assert not request.is_actionable
    assert request.duration is None
    assert request.people is None
    assert request.budget is None


def test_empty_and_none_input(extractor):
    for text in ("", None):
        request = extractor.extract(text)
        assert request.destination is None
        assert request.raw_query == ""


def test_multiword_destination_is_title_cased(extractor):
    assert extractor.extract("a week in himachal pradesh").destination == "Himachal Pradesh"
    assert extractor.extract("ANDAMAN AND NICOBAR beaches").destination == "Andaman And Nicobar"


def test_match_policy_last_vs_first():
    text = "Munnar, Kerala for 3 days"
    # gazetteer lists kerala before munnar
    assert TravelInfoExtractor(match_policy="last").extract(text).destination == "Munnar"
    assert TravelInfoExtractor(match_policy="first").extract(text).destination == "Kerala"


def test_unknown_match_policy_defaults_to_last():
    extractor = TravelInfoExtractor(match_policy="random")
    assert extractor.match_policy == "last"


def test_custom_gazetteer():
    extractor = TravelInfoExtractor(gazetteer=["Lisbon", "Porto"], match_policy="first")
    assert extractor.extract("Porto then Lisbon").destination == "Lisbon"


@pytest.mark.parametrize("text,expected", [
    ("goa for 5 days", "5 days"),
    ("goa for 1 day", "1 day"),
    ("goa 3nights", "3 nights"),
    ("goa for 2 weeks", "2 weeks"),
    ("goa soon", None),
])
def test_duration(extractor, text, expected):
    assert extractor.extract(text).duration == expected


@pytest.mark.parametrize("text,expected", [
    ("goa with 4 adults", 4),
    ("goa for 3 travellers", 3),
    ("goa 1 person", 1),
    ("goa with 0 people", None),
    ("goa alone", None),
])
def test_people(extractor, text, expected):
    assert extractor.extract(text).people == expected


@pytest.mark.parametrize("text,expected", [
    ("goa with ₹40000 budget", "₹40000 budget"),
    ("goa 800 dollars", "800 dollars"),
    ("goa 20k-30k budget", "20k-30k budget"),
    ("goa 1,50,000 rupees", "1,50,000 rupees"),
    ("goa with a budget of 30k", "budget of 30k"),
])
def test_budget(extractor, text, expected):
    assert extractor.extract(text).budget == expected


def test_extract_is_idempotent(extractor):
    text = "Jaipur and Udaipur for 6 days, 2 adults, ₹60000 budget"
    first = extractor.extract(text)
    second = extractor.extract(text)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_to_dict_uses_camel_case():
    data = TravelRequest(destination="Goa", specific_locations=["Baga"]).to_dict()
    assert data["specificLocations"] == ["Baga"]
    assert "raw_query" not in data


def test_convenience_function():
    assert extract_travel_info("Agra for 2 days").destination == "Agra"
