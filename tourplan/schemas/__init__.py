# schemas/__init__.py
"""
Pydantic Schemas Package

Contains all Pydantic v2 models for:
- Tour plans and itinerary days
- Chatbot API requests/responses
- Custom trip requests and admin updates
"""

from .plan_schemas import (
    # Enums
    TripStatus, PlanSource,
    # Tour plan
    ItineraryDay, TourPlan,
    # Chatbot
    GeneratePlanRequest, GeneratePlanResponse,
    # Custom trips
    UserDetails, SubmitPlanRequest, TripStatusUpdate, CustomTrip,
    # Service
    HealthResponse
)

__all__ = [
    # Enums
    "TripStatus", "PlanSource",
    # Tour plan
    "ItineraryDay", "TourPlan",
    # Chatbot
    "GeneratePlanRequest", "GeneratePlanResponse",
    # Custom trips
    "UserDetails", "SubmitPlanRequest", "TripStatusUpdate", "CustomTrip",
    # Service
    "HealthResponse"
]
