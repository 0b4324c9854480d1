# agents/tour_planner.py
"""
Tour Planner Agent (chat-facing)
Turns one chatbot message into a tour plan:
1. Extract trip fields from the message
2. Ask for clarification when no destination was recognised
3. Prompt the LLM provider for an itinerary
4. Normalize the reply, or fall back to the catalog itinerary

Uses:
- Field Extractor for understanding the request
- Prompt Builder for the provider prompt
- LLM Provider as the only fallible step
- Response Normalizer / Fallback Generator for a guaranteed plan
"""

from typing import Optional
from loguru import logger

from ..llm.field_extractor import TravelInfoExtractor, TravelRequest, travel_info_extractor
from ..llm.prompts import build_prompt
from ..llm.provider import LLMProvider, ProviderError, llm_provider
from ..llm.response_normalizer import ResponseNormalizer, NormalizedPlan, response_normalizer
from ..schemas.plan_schemas import GeneratePlanResponse, PlanSource

CLARIFICATION_MESSAGE = (
    "I'd need a bit more information to create your tour plan. Could you please specify "
    "your destination, how many days you'll be traveling, number of people, and your budget?"
)
PLAN_MESSAGE = "Here's a custom tour plan based on your preferences:"
SIMPLIFIED_PLAN_MESSAGE = "Here's a custom tour plan based on your preferences (simplified version):"


class TourPlanner:
    """
    Chatbot tour planning pipeline.
    Provider failures never reach the caller; they divert to the fallback plan.
    """

    def __init__(self, extractor: Optional[TravelInfoExtractor] = None,
                 provider: Optional[LLMProvider] = None,
                 normalizer: Optional[ResponseNormalizer] = None):
        self.extractor = extractor or travel_info_extractor
        self.provider = provider or llm_provider
        self.normalizer = normalizer or response_normalizer

    async def generate_plan(self, user_prompt: str) -> GeneratePlanResponse:
        """
        Process a chatbot message and produce a tour plan or a clarification.

        Args:
            user_prompt: Free-text trip request

        Returns:
            GeneratePlanResponse with a message, and a tourPlan unless
            clarification is needed
        """
        request = self.extractor.extract(user_prompt)

        if not request.is_actionable:
            logger.info("No destination recognised, asking for clarification")
            return GeneratePlanResponse(message=CLARIFICATION_MESSAGE)

        result = await self.plan_for_request(request)
        message = SIMPLIFIED_PLAN_MESSAGE if result.source == PlanSource.FALLBACK else PLAN_MESSAGE

        logger.info(f"Tour plan for {request.destination} ready: source={result.source.value}, "
                    f"days={len(result.plan.itinerary)}")

        return GeneratePlanResponse(message=message, tourPlan=result.plan)

    async def plan_for_request(self, request: TravelRequest) -> NormalizedPlan:
        """Provider path with fallback; total for any request"""
        raw_response = await self._generate_text(request)

        if raw_response is None:
            return NormalizedPlan(self.normalizer.fallback.generate(request), PlanSource.FALLBACK)

        return self.normalizer.normalize_with_source(raw_response, request)

    async def _generate_text(self, request: TravelRequest) -> Optional[str]:
        if not self.provider.available:
            logger.warning(f"LLM provider '{self.provider.name}' unavailable, using fallback plan")
            return None

        prompt = build_prompt(request)
        try:
            return await self.provider.generate(prompt)
        except ProviderError as e:
            logger.warning(f"AI processing error, using fallback plan: {e}")
            return None


# ============================================
# Global Instance
# ============================================

tour_planner = TourPlanner()


# ============================================
# Convenience Function
# ============================================

async def generate_plan(user_prompt: str) -> GeneratePlanResponse:
    """Generate a plan with the default planner"""
    return await tour_planner.generate_plan(user_prompt)
