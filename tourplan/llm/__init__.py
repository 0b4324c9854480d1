# llm/__init__.py
"""
LLM Components Package

Contains the travel-request interpreter:
- field_extractor: Free text to structured TravelRequest
- prompts: TravelRequest to provider prompt
- provider: OpenAI-compatible / Ollama text generation
- response_normalizer: Provider reply to a valid TourPlan
- fallback_generator: Deterministic catalog-based TourPlan
"""

from .field_extractor import TravelRequest, TravelInfoExtractor, travel_info_extractor, extract_travel_info
from .prompts import build_prompt, detect_currency
from .fallback_generator import FallbackGenerator, fallback_generator, generate_fallback_plan, parse_itinerary_text
from .response_normalizer import ResponseNormalizer, response_normalizer, normalize_response
from .provider import LLMProvider, ProviderError, llm_provider

__all__ = [
    "TravelRequest",
    "TravelInfoExtractor",
    "travel_info_extractor",
    "extract_travel_info",
    "build_prompt",
    "detect_currency",
    "FallbackGenerator",
    "fallback_generator",
    "generate_fallback_plan",
    "parse_itinerary_text",
    "ResponseNormalizer",
    "response_normalizer",
    "normalize_response",
    "LLMProvider",
    "ProviderError",
    "llm_provider"
]
