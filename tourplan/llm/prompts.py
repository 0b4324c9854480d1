"""
Langchain Prompt Templates
Defines the tour plan prompt sent to the LLM provider
"""

from typing import Optional

from langchain_core.prompts import PromptTemplate

from ..config import settings
from .field_extractor import TravelRequest

NOT_SPECIFIED = "Not specified"

SYSTEM_PROMPT = "You are a helpful travel planning assistant. You always answer with a single valid JSON object."

# Glyphs and unit words the field extractor accepts, mapped to ISO codes
CURRENCY_MARKERS = (
    ("₹", "INR"), ("€", "EUR"), ("£", "GBP"), ("$", "USD"),
    ("rupee", "INR"), ("inr", "INR"),
    ("dollar", "USD"), ("usd", "USD"),
    ("euro", "EUR"), ("eur", "EUR"),
    ("pound", "GBP"), ("gbp", "GBP"),
)

# ============================================
# Tour Plan Prompt
# ============================================

TOUR_PLAN_PROMPT = PromptTemplate(
    input_variables=["destination", "duration", "people", "budget", "budget_note",
                     "specific_locations", "currency"],
    template="""Create a detailed travel itinerary for a trip to {destination}.

Trip details:
- Duration: {duration}
- Number of people: {people}
- Budget: {budget}{budget_note}
- Specific locations of interest: {specific_locations}

Please provide a detailed travel plan with the following structure:
1. Day-by-day itinerary with specific activities and timings
2. Accommodation recommendations based on the budget (prices in {currency})
3. Transportation options and tips (costs in {currency})
4. Must-see attractions and local experiences
5. Estimated costs for major activities (in {currency})

Express every cost in {currency}.

Format your response as a JSON object with these exact properties:
{{
  "destination": "string",
  "duration": "string",
  "budget": "string (in {currency})",
  "people": number,
  "itinerary": [
    {{
      "day": "string (e.g., 'Day 1')",
      "activities": "string (comma-separated list of activities with costs in {currency})"
    }}
  ],
  "accommodations": "string (with costs in {currency})",
  "transportation": "string (with costs in {currency})"
}}

Return ONLY the JSON object. Do not include any explanation or markdown formatting."""
)


def detect_currency(budget: Optional[str]) -> Optional[str]:
    """ISO code of the currency a budget phrase is written in, if any"""
    if not budget:
        return None
    lowered = budget.lower()
    for marker, code in CURRENCY_MARKERS:
        if marker in lowered:
            return code
    return None


def build_prompt(request: TravelRequest,
                 currency_symbol: Optional[str] = None,
                 currency_code: Optional[str] = None) -> str:
    """
    Render the tour plan prompt for a request.

    All costs are requested in the local currency. A budget written in
    another currency is passed through unchanged together with an explicit
    instruction to convert it.

    Args:
        request: Extracted trip fields
        currency_symbol: Local currency glyph, defaults to settings
        currency_code: Local currency ISO code, defaults to settings

    Returns:
        Prompt text for the LLM provider
    """
    symbol = currency_symbol or settings.LOCAL_CURRENCY_SYMBOL
    code = (currency_code or settings.LOCAL_CURRENCY_CODE).upper()
    currency = f"{symbol} ({code})" if symbol != code else code

    budget_note = ""
    if request.budget:
        budget_currency = detect_currency(request.budget)
        if budget_currency and budget_currency != code:
            budget_note = f" (stated in {budget_currency}; convert it to {code} before planning)"
        else:
            budget_note = f" (all costs in {symbol})"

    locations = ", ".join(request.specific_locations) if request.specific_locations else NOT_SPECIFIED

    return TOUR_PLAN_PROMPT.format(
        destination=request.destination or "[destination]",
        duration=request.duration or NOT_SPECIFIED,
        people=request.people or NOT_SPECIFIED,
        budget=request.budget or NOT_SPECIFIED,
        budget_note=budget_note,
        specific_locations=locations,
        currency=currency
    )

