# llm/fallback_generator.py
"""
Fallback Itinerary Generator
Deterministic, non-AI tour plans used when the LLM is unavailable or its
reply cannot be parsed:
- Destination templates from the catalog (substring lookup)
- Itinerary stretched or truncated to the requested number of days
- Day-by-day parsing of free text ("Day 1: ... Day 2: ...")
"""

import re
from typing import List, Optional
from loguru import logger

from ..config import settings
from ..interfaces.destination_catalog import (
    DestinationCatalog, DestinationTemplate, destination_catalog
)
from ..schemas.plan_schemas import ItineraryDay, TourPlan
from .field_extractor import TravelRequest


DEFAULT_DESTINATION = "Your destination"
DEFAULT_DURATION = "Your trip duration"
DEFAULT_BUDGET = "As per your budget"
DEFAULT_PEOPLE = 1

DEFAULT_ACCOMMODATIONS = "Options range from budget to luxury based on your preferences"
DEFAULT_TRANSPORTATION = "Local transportation options including taxi, public transit, and rental vehicles"
DEFAULT_DAY_ACTIVITIES = "Explore local attractions and cuisine"

GENERIC_TEMPLATE = DestinationTemplate(
    itinerary=(
        ItineraryDay(day="Day 1", activities="Arrival and check-in to accommodation, local area exploration"),
        ItineraryDay(day="Day 2", activities="Visit main attractions and landmarks"),
        ItineraryDay(day="Day 3", activities="Experience local culture, cuisine and shopping"),
        ItineraryDay(day="Final Day", activities="Leisure time and departure"),
    ),
    accommodations=DEFAULT_ACCOMMODATIONS,
    transportation=DEFAULT_TRANSPORTATION
)

# Used when free text has no day markers at all
GENERIC_TEXT_ITINERARY = (
    ItineraryDay(day="Day 1", activities="Arrival and exploration"),
    ItineraryDay(day="Day 2", activities="Visit main attractions"),
    ItineraryDay(day="Day 3", activities="Departure"),
)

SPELLED_NUMBERS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}

DAY_MARKER_PATTERN = re.compile(
    r"\bday\s*(\d+|" + "|".join(SPELLED_NUMBERS) + r")\b",
    re.IGNORECASE
)
TIME_OF_DAY_PATTERN = re.compile(r"\b(?:morning|afternoon|evening)\b", re.IGNORECASE)
LEADING_NUMBER_PATTERN = re.compile(r"(\d+)")

MIN_ACTIVITY_LENGTH = 10


def parse_itinerary_text(text: Optional[str]) -> List[ItineraryDay]:
    """
    Split free text into days on "Day <n>" markers.

    The text between one marker and the next (or the end) is that day's
    activities, minus the marker, time-of-day words and colons.

    Args:
        text: Unstructured itinerary text, e.g. an LLM reply that was not JSON

    Returns:
        One ItineraryDay per marker, or a generic 3-day itinerary
    """
    text = text or ""
    markers = list(DAY_MARKER_PATTERN.finditer(text))

    if not markers:
        return list(GENERIC_TEXT_ITINERARY)

    itinerary = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        block = text[marker.end():end]

        activities = TIME_OF_DAY_PATTERN.sub("", block).replace(":", "")
        activities = " ".join(activities.split())

        number = marker.group(1).lower()
        number = str(SPELLED_NUMBERS.get(number, number))

        itinerary.append(ItineraryDay(
            day=f"Day {int(number)}",
            activities=activities if len(activities) > MIN_ACTIVITY_LENGTH else DEFAULT_DAY_ACTIVITIES
        ))

    return itinerary


def requested_day_count(duration: Optional[str], max_days: Optional[int] = None) -> Optional[int]:
    """
    First integer in the duration string, e.g. "5 days" -> 5,
    capped at max_days (MAX_ITINERARY_DAYS by default).
    """
    if not duration:
        return None
    match = LEADING_NUMBER_PATTERN.search(duration)
    if not match:
        return None

    digits = match.group(1).lstrip("0")
    if not digits:
        return None

    limit = max_days or settings.MAX_ITINERARY_DAYS
    # compare lengths first so absurdly long digit runs are never converted
    if len(digits) > len(str(limit)) or int(digits) > limit:
        logger.info(f"Requested {digits[:12]} days, capping itinerary at {limit}")
        return limit
    return int(digits)


class FallbackGenerator:
    """
    Builds complete tour plans from catalog templates.
    Pure and total: every request, even an empty one, gets a plan.
    """

    def __init__(self, catalog: Optional[DestinationCatalog] = None):
        self.catalog = catalog if catalog is not None else destination_catalog

    def select_template(self, destination: Optional[str]) -> DestinationTemplate:
        """Catalog template for the destination, or the generic template"""
        template = self.catalog.match(destination)
        return template if template is not None else GENERIC_TEMPLATE

    def generate(self, request: TravelRequest) -> TourPlan:
        """
        Generate a tour plan without the LLM.

        Args:
            request: Extracted trip fields; any of them may be missing

        Returns:
            TourPlan sized to the requested duration when one is given
        """
        template = self.select_template(request.destination)
        itinerary = self.fit_itinerary(list(template.itinerary), request.duration, request.destination)

        logger.info(f"Fallback plan for {request.destination or 'unknown destination'}: "
                    f"{len(itinerary)} days")

        return TourPlan(
            destination=request.destination or DEFAULT_DESTINATION,
            duration=request.duration or DEFAULT_DURATION,
            budget=request.budget or DEFAULT_BUDGET,
            people=request.people or DEFAULT_PEOPLE,
            itinerary=itinerary,
            accommodations=template.accommodations or DEFAULT_ACCOMMODATIONS,
            transportation=template.transportation or DEFAULT_TRANSPORTATION
        )

    def fit_itinerary(self, itinerary: List[ItineraryDay], duration: Optional[str],
                      destination: Optional[str] = None) -> List[ItineraryDay]:
        """Pad with filler days or truncate so the plan covers the requested days"""
        days = requested_day_count(duration)
        if days is None or days == len(itinerary):
            return itinerary

        if days < len(itinerary):
            return itinerary[:days]

        place = destination or "your destination"
        padded = list(itinerary)
        for i in range(len(itinerary) + 1, days + 1):
            padded.append(ItineraryDay(
                day=f"Day {i}",
                activities=f"Explore local attractions, relaxation, and optional activities in {place}"
            ))
        return padded

    def parse_itinerary_text(self, text: Optional[str]) -> List[ItineraryDay]:
        return parse_itinerary_text(text)


# ============================================
# Global Instance
# ============================================

fallback_generator = FallbackGenerator()


# ============================================
# Convenience Function
# ============================================

def generate_fallback_plan(request: TravelRequest) -> TourPlan:
    """Fallback plan with the default catalog"""
    return fallback_generator.generate(request)
