# llm/response_normalizer.py
"""
Response Normalizer for LLM tour plans
Turns whatever the provider returned into a valid TourPlan:
- Parses the reply as JSON, or the widest {...} span inside it
- Fills missing fields from the extracted request
- Flattens the many shapes models use for a day's activities
- Falls back to the catalog itinerary when nothing parses
Never raises: every input yields a fully populated TourPlan.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, List, Callable, Union
from loguru import logger

from ..schemas.plan_schemas import ItineraryDay, TourPlan, PlanSource
from .field_extractor import TravelRequest
from .fallback_generator import (
    FallbackGenerator, fallback_generator, parse_itinerary_text,
    DEFAULT_DESTINATION, DEFAULT_DURATION, DEFAULT_BUDGET, DEFAULT_PEOPLE,
    DEFAULT_ACCOMMODATIONS, DEFAULT_TRANSPORTATION
)

DEFAULT_ACTIVITIES = "Explore local attractions"

JSON_SPAN_PATTERN = re.compile(r"\{[\s\S]*\}")
DAY_NUMBER_PATTERN = re.compile(r"\d+")

# Labelled sections in prose replies, e.g. "Accommodations: ..." up to a blank line
SECTION_PATTERNS = {
    "accommodations": re.compile(
        r"^[\s*#-]*(?:accommodations?|hotels?)\s*\**\s*:\s*(.+?)(?=\n\s*\n|\Z)",
        re.IGNORECASE | re.MULTILINE | re.DOTALL
    ),
    "transportation": re.compile(
        r"^[\s*#-]*(?:transportation|transport|getting around)\s*\**\s*:\s*(.+?)(?=\n\s*\n|\Z)",
        re.IGNORECASE | re.MULTILINE | re.DOTALL
    ),
}


class ActivityShape(str, Enum):
    """Shapes seen in the 'activities' field of an itinerary day"""
    TEXT = "text"              # "Visit the fort, lunch by the lake"
    TEXT_LIST = "text_list"    # ["Visit the fort", "Lunch"]
    TIMED_LIST = "timed_list"  # [{"time": "9 AM", "activity": "Visit the fort"}, ...]
    MAPPING = "mapping"        # {"morning": "Fort", "evening": "Market"}
    OTHER = "other"


@dataclass(frozen=True)
class NormalizedPlan:
    """A normalized plan and the path that produced it"""
    plan: TourPlan
    source: PlanSource


# ============================================
# Activities flattening
# ============================================

def classify_activities(value: Any) -> ActivityShape:
    if isinstance(value, str):
        return ActivityShape.TEXT
    if isinstance(value, dict):
        return ActivityShape.MAPPING
    if isinstance(value, (list, tuple)):
        if any(isinstance(item, dict) for item in value):
            return ActivityShape.TIMED_LIST
        return ActivityShape.TEXT_LIST
    return ActivityShape.OTHER


def _flatten_text(value: str) -> str:
    return value.strip()


def _flatten_text_list(value: List[Any]) -> str:
    return ", ".join(part for part in (_stringify(item) for item in value) if part)


def _flatten_timed_entry(entry: Any) -> str:
    if not isinstance(entry, dict):
        return _stringify(entry)

    activity = entry.get("activity") or entry.get("description") or entry.get("name")
    time = entry.get("time")
    if activity is None and time is None:
        return _flatten_mapping(entry)

    activity_text = _stringify(activity)
    time_text = _stringify(time)
    if time_text and activity_text:
        return f"{time_text}: {activity_text}"
    return activity_text or time_text


def _flatten_timed_list(value: List[Any]) -> str:
    return ", ".join(part for part in (_flatten_timed_entry(item) for item in value) if part)


def _flatten_mapping(value: Dict[str, Any]) -> str:
    parts = []
    for key, item in value.items():
        text = _stringify(item)
        if text:
            parts.append(f"{key}: {text}")
    return ", ".join(parts)


def _flatten_other(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


_FLATTENERS: Dict[ActivityShape, Callable[[Any], str]] = {
    ActivityShape.TEXT: _flatten_text,
    ActivityShape.TEXT_LIST: _flatten_text_list,
    ActivityShape.TIMED_LIST: _flatten_timed_list,
    ActivityShape.MAPPING: _flatten_mapping,
    ActivityShape.OTHER: _flatten_other,
}


def _stringify(value: Any) -> str:
    return _FLATTENERS[classify_activities(value)](value)


def flatten_activities(value: Any) -> str:
    """Collapse any supported activities shape into one descriptive string"""
    return _stringify(value)


# ============================================
# Text helpers
# ============================================

def extract_section(text: Optional[str], section: str) -> Optional[str]:
    """Text of a labelled section ("Transportation: ...") up to the next blank line"""
    pattern = SECTION_PATTERNS.get(section)
    if not text or pattern is None:
        return None
    match = pattern.search(text)
    if match:
        content = match.group(1).strip()
        return content or None
    return None


def parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the whole text as a JSON object, else the widest {...} span"""
    try:
        parsed = json.loads(text)
        if isinstance(parsed, dict):
            return parsed
    except ValueError:
        pass

    match = JSON_SPAN_PATTERN.search(text)
    if match:
        try:
            parsed = json.loads(match.group(0))
            if isinstance(parsed, dict):
                return parsed
        except ValueError:
            logger.warning("Could not parse JSON span in LLM response")

    return None


def _unwrap_plan(data: Dict[str, Any]) -> Dict[str, Any]:
    """Some models nest the plan, e.g. {"tourPlan": {...}}"""
    if "itinerary" in data or len(data) != 1:
        return data
    inner = next(iter(data.values()))
    if isinstance(inner, dict) and "itinerary" in inner:
        return inner
    return data


def _to_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _to_people(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        people = int(round(value))
        return people if people > 0 else None
    if isinstance(value, str):
        match = DAY_NUMBER_PATTERN.search(value)
        if match and int(match.group(0)) > 0:
            return int(match.group(0))
    return None


def _day_label(value: Any, position: int) -> str:
    if isinstance(value, bool):
        return f"Day {position}"
    if isinstance(value, (int, float)):
        return f"Day {int(value)}"
    if isinstance(value, str) and value.strip():
        label = value.strip()
        return f"Day {label}" if label.isdigit() else label
    return f"Day {position}"


def _day_number(label: str) -> Optional[int]:
    match = DAY_NUMBER_PATTERN.search(label)
    return int(match.group(0)) if match else None


class ResponseNormalizer:
    """
    Validates and repairs LLM tour plan replies.
    Uses the fallback generator for anything that cannot be salvaged.
    """

    def __init__(self, fallback: Optional[FallbackGenerator] = None):
        self.fallback = fallback if fallback is not None else fallback_generator

    def normalize(self, raw_response: Union[str, bytes, None], request: TravelRequest) -> TourPlan:
        """
        Normalize a provider reply into a TourPlan.

        Args:
            raw_response: Provider text (may be empty, prose, or broken JSON)
            request: Fields extracted from the user's request

        Returns:
            A valid TourPlan, falling back to the catalog itinerary
        """
        return self.normalize_with_source(raw_response, request).plan

    def normalize_with_source(self, raw_response: Union[str, bytes, None],
                              request: TravelRequest) -> NormalizedPlan:
        """Same as normalize(), also reporting which path produced the plan"""
        try:
            text = self._as_text(raw_response)
            data = parse_json_object(text) if text.strip() else None
            if data is not None:
                return self._coerce(_unwrap_plan(data), text, request)
            logger.warning("LLM response contained no usable JSON, using fallback plan")
        except Exception as e:
            logger.warning(f"Could not coerce LLM response into a tour plan: {e}")

        return NormalizedPlan(self.fallback.generate(request), PlanSource.FALLBACK)

    def _as_text(self, raw_response: Union[str, bytes, None]) -> str:
        if raw_response is None:
            return ""
        if isinstance(raw_response, bytes):
            return raw_response.decode("utf-8", errors="replace")
        if isinstance(raw_response, str):
            return raw_response
        return str(raw_response)

    def _coerce(self, data: Dict[str, Any], text: str, request: TravelRequest) -> NormalizedPlan:
        repaired = []

        def scalar(name: str, request_value: Optional[str], default: str) -> str:
            value = _to_text(data.get(name))
            if value is not None:
                return value
            repaired.append(name)
            return request_value or default

        destination = scalar("destination", request.destination, DEFAULT_DESTINATION)
        duration = scalar("duration", request.duration, DEFAULT_DURATION)
        budget = scalar("budget", request.budget, DEFAULT_BUDGET)

        people = _to_people(data.get("people"))
        if people is None:
            repaired.append("people")
            people = request.people or DEFAULT_PEOPLE

        itinerary = self._coerce_itinerary(data.get("itinerary"))
        if not itinerary:
            repaired.append("itinerary")
            itinerary = parse_itinerary_text(text)

        accommodations = self._coerce_section(data, text, "accommodations", DEFAULT_ACCOMMODATIONS, repaired)
        transportation = self._coerce_section(data, text, "transportation", DEFAULT_TRANSPORTATION, repaired)

        plan = TourPlan(
            destination=destination,
            duration=duration,
            budget=budget,
            people=people,
            itinerary=itinerary,
            accommodations=accommodations,
            transportation=transportation
        )

        if repaired:
            logger.info(f"Repaired LLM tour plan fields: {', '.join(repaired)}")
            return NormalizedPlan(plan, PlanSource.AI_PARTIAL)
        return NormalizedPlan(plan, PlanSource.AI)

    def _coerce_itinerary(self, value: Any) -> List[ItineraryDay]:
        if not isinstance(value, list) or not value:
            return []

        days = []
        for position, entry in enumerate(value, start=1):
            if isinstance(entry, dict):
                label = _day_label(entry.get("day"), position)
                raw_activities = entry.get("activities")
                if raw_activities is None:
                    raw_activities = entry.get("description") or entry.get("activity")
                activities = flatten_activities(raw_activities)
            else:
                label = f"Day {position}"
                activities = flatten_activities(entry)

            days.append(ItineraryDay(day=label, activities=activities or DEFAULT_ACTIVITIES))

        numbers = [_day_number(day.day) for day in days]
        if all(number is not None for number in numbers):
            days = [day for _, day in sorted(zip(numbers, days), key=lambda pair: pair[0])]
        return days

    def _coerce_section(self, data: Dict[str, Any], text: str, name: str,
                        default: str, repaired: List[str]) -> str:
        value = data.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()

        repaired.append(name)
        if isinstance(value, (list, dict)):
            flattened = flatten_activities(value)
            if flattened:
                return flattened
        return extract_section(text, name) or default


# ============================================
# Global Instance
# ============================================

response_normalizer = ResponseNormalizer()


# ============================================
# Convenience Function
# ============================================

def normalize_response(raw_response: Union[str, bytes, None], request: TravelRequest) -> TourPlan:
    """Normalize a provider reply with the default fallback generator"""
    return response_normalizer.normalize(raw_response, request)
