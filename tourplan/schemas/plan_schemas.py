# schemas/plan_schemas.py
"""
Pydantic v2 schemas for the Tour Plan Service
Field names of TourPlan and its nested days are the external contract
shared with the chatbot widget and the admin screens.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================
# Enums
# ============================================

class TripStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class PlanSource(str, Enum):
    AI = "ai"                  # provider reply parsed cleanly
    AI_PARTIAL = "ai_partial"  # provider reply parsed, some fields repaired
    FALLBACK = "fallback"      # deterministic catalog itinerary


# ============================================
# Tour Plan
# ============================================

class ItineraryDay(BaseModel):
    """One day of an itinerary"""
    model_config = ConfigDict(frozen=True)

    day: str = Field(..., min_length=1, description="'Day <n>' or a terminal label like 'Final Day'")
    activities: str = Field(..., min_length=1)


class TourPlan(BaseModel):
    """Canonical structured itinerary"""
    model_config = ConfigDict(frozen=True)

    destination: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    budget: str = Field(..., min_length=1)
    people: int = Field(1, ge=1)
    itinerary: List[ItineraryDay] = Field(..., min_length=1)
    accommodations: str = Field(..., min_length=1)
    transportation: str = Field(..., min_length=1)


# ============================================
# Chatbot API
# ============================================

class GeneratePlanRequest(BaseModel):
    """Chatbot widget request"""
    userPrompt: Optional[str] = Field(None, max_length=2000, description="User's free-text trip request")


class GeneratePlanResponse(BaseModel):
    """Either a clarification (message only) or a message with a plan"""
    message: str
    tourPlan: Optional[TourPlan] = None


# ============================================
# Custom Trip Requests
# ============================================

class UserDetails(BaseModel):
    """Submitter of a custom trip"""
    name: str = "Anonymous User"
    email: Optional[str] = None
    phone: Optional[str] = None
    userId: Optional[str] = None


class SubmitPlanRequest(BaseModel):
    """Plan submission from the chatbot or the custom trip form"""
    tourPlan: Optional[TourPlan] = None
    userDetails: Optional[UserDetails] = None


class TripStatusUpdate(BaseModel):
    """Admin review of a custom trip"""
    status: Optional[TripStatus] = None
    adminNotes: Optional[str] = None


class CustomTrip(BaseModel):
    """Stored custom trip request"""
    id: str
    tourPlan: TourPlan
    userDetails: UserDetails = Field(default_factory=UserDetails)
    status: TripStatus = TripStatus.PENDING
    adminNotes: Optional[str] = None
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updatedAt: Optional[datetime] = None


# ============================================
# Service
# ============================================

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    components: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str
