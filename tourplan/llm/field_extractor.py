# llm/field_extractor.py
"""
Travel Info Extractor for the chatbot widget
Extracts structured trip fields from a free-text request:
- Destination (single place from a fixed gazetteer)
- Duration, number of people, budget
A request without a destination needs clarification before any
itinerary is generated.
"""

import re
from typing import Optional, Dict, Any, List, Sequence
from dataclasses import dataclass, field
from loguru import logger

from ..config import settings


@dataclass
class TravelRequest:
    """Structured trip request extracted from natural language"""
    destination: Optional[str] = None
    specific_locations: List[str] = field(default_factory=list)
    duration: Optional[str] = None
    people: Optional[int] = None
    budget: Optional[str] = None
    raw_query: str = ""

    @property
    def is_actionable(self) -> bool:
        return self.destination is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "specificLocations": list(self.specific_locations),
            "duration": self.duration,
            "people": self.people,
            "budget": self.budget
        }


# Cities first, then states/regions
DEFAULT_GAZETTEER = (
    # Major Cities
    "delhi", "mumbai", "bangalore", "hyderabad", "chennai", "kolkata",
    "ahmedabad", "pune", "jaipur", "udaipur", "jodhpur", "goa", "kerala",
    "varanasi", "agra", "amritsar", "shimla", "manali", "darjeeling", "ooty",
    "munnar", "alleppey", "kodaikanal", "mahabalipuram", "hampi", "mysore",
    "kochi", "kanyakumari", "gangtok", "leh",
    # States/Regions
    "rajasthan", "himachal pradesh", "uttarakhand", "tamil nadu", "karnataka",
    "maharashtra", "gujarat", "punjab", "west bengal", "sikkim", "ladakh",
    "andaman and nicobar", "lakshadweep", "kashmir",
)

MATCH_POLICIES = ("first", "last")

# Longer unit spellings come first so "5 days" is kept whole
DURATION_PATTERN = re.compile(r"(\d+)\s*(days|day|nights|night|weeks|week)")

PEOPLE_PATTERN = re.compile(
    r"(\d+)\s*(person|people|adults|adult|travelers|traveler|travellers|traveller"
    r"|families|family|groups|group)"
)

# Western (50,000) and Indian (1,50,000) digit grouping
_AMOUNT = r"\d+(?:,\d{2,3})*(?:\.\d+)?"
_GLYPH = r"[₹€£$]"

BUDGET_PATTERN = re.compile(
    rf"({_GLYPH})?({_AMOUNT})k?"
    rf"(\s*(?:-|to)\s*({_GLYPH})?({_AMOUNT})k?)?"
    r"\s*(budget|dollars|dollar|usd|euros|euro|eur|rupees|rupee|inr|pounds|pound|gbp)"
)

# "budget of ₹40000", "budget is 30k", "budget: $800"
BUDGET_PHRASE_PATTERN = re.compile(
    rf"budget\s*(?:of|is|around|about|:)?\s*{_GLYPH}?\s?{_AMOUNT}k?"
)


class TravelInfoExtractor:
    """
    Parses free-text trip requests into a TravelRequest.
    Rule-based, deterministic and side-effect free.
    """

    def __init__(self, gazetteer: Optional[Sequence[str]] = None, match_policy: Optional[str] = None):
        self.gazetteer = tuple(place.lower() for place in (gazetteer or DEFAULT_GAZETTEER))

        policy = (match_policy or settings.DESTINATION_MATCH_POLICY).lower()
        if policy not in MATCH_POLICIES:
            logger.warning(f"Unknown destination match policy '{policy}', using 'last'")
            policy = "last"
        self.match_policy = policy

    def extract(self, text: Optional[str]) -> TravelRequest:
        """
        Extract trip fields from a user's request.

        Args:
            text: Free-text request typed into the chatbot

        Returns:
            TravelRequest; destination is None when no known place was found
        """
        text = text or ""
        query = text.lower()

        request = TravelRequest(raw_query=text)
        request.destination = self._extract_destination(query)
        request.duration = self._extract_duration(query)
        request.people = self._extract_people(query)
        request.budget = self._extract_budget(query)

        logger.debug(f"Extracted travel info: {request.to_dict()}")
        return request

    def _extract_destination(self, query: str) -> Optional[str]:
        """Scan the gazetteer in order; the match policy decides which hit wins"""
        destination = None
        for place in self.gazetteer:
            if place in query:
                destination = place.title()
                if self.match_policy == "first":
                    break
        return destination

    def _extract_duration(self, query: str) -> Optional[str]:
        match = DURATION_PATTERN.search(query)
        if match:
            return f"{match.group(1)} {match.group(2)}"
        return None

    def _extract_people(self, query: str) -> Optional[int]:
        match = PEOPLE_PATTERN.search(query)
        if match:
            count = int(match.group(1))
            if count > 0:
                return count
        return None

    def _extract_budget(self, query: str) -> Optional[str]:
        """Budget is kept verbatim, currency glyph included"""
        match = BUDGET_PATTERN.search(query)
        if match:
            return match.group(0).strip()

        match = BUDGET_PHRASE_PATTERN.search(query)
        if match:
            return match.group(0).strip()

        return None


# ============================================
# Global Instance
# ============================================

travel_info_extractor = TravelInfoExtractor()


# ============================================
# Convenience Function
# ============================================

def extract_travel_info(text: Optional[str]) -> TravelRequest:
    """Extract a TravelRequest with the default extractor"""
    return travel_info_extractor.extract(text)
