# api/chatbot.py
"""
Chatbot API Endpoints
Backs the trip planning chat widget:
- Generate a tour plan from a free-text message
- Submit a generated plan as a custom trip request
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from ..agents.tour_planner import TourPlanner, tour_planner
from ..interfaces.trip_store import TripStore
from ..schemas.plan_schemas import GeneratePlanRequest, GeneratePlanResponse, SubmitPlanRequest
from .custom_trips import get_trip_store

EMPTY_PROMPT_MESSAGE = "Please provide a prompt for the travel plan."
PLAN_ERROR_MESSAGE = "Sorry, I'm having trouble creating your plan right now. Please try again."
MISSING_PLAN_MESSAGE = "Tour plan is required"
SUBMIT_ERROR_MESSAGE = "Failed to submit tour plan"
SUBMITTED_MESSAGE = "Custom trip request submitted successfully"


router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])


# ============================================
# Dependencies
# ============================================

def get_tour_planner() -> TourPlanner:
    return tour_planner


# ============================================
# Endpoints
# ============================================

@router.post("/generate-plan", response_model=GeneratePlanResponse, response_model_exclude_none=True)
async def generate_plan(request: GeneratePlanRequest, planner: TourPlanner = Depends(get_tour_planner)):
    """
    Turn a chat message into a tour plan.

    Returns only a message when the destination could not be recognised,
    otherwise the message and the plan.
    """
    user_prompt = (request.userPrompt or "").strip()
    if not user_prompt:
        return JSONResponse(status_code=400, content={"message": EMPTY_PROMPT_MESSAGE})

    logger.info(f"Generate plan request: '{user_prompt[:80]}'")

    try:
        return await planner.generate_plan(user_prompt)
    except Exception as e:
        logger.error(f"Error generating tour plan: {e}")
        return JSONResponse(status_code=500, content={"message": PLAN_ERROR_MESSAGE})


@router.post("/submit-plan", status_code=201)
async def submit_plan(request: SubmitPlanRequest, store: TripStore = Depends(get_trip_store)):
    """Submit a chatbot plan for review by the travel team"""
    if request.tourPlan is None:
        return JSONResponse(status_code=400, content={"message": MISSING_PLAN_MESSAGE})

    try:
        trip = store.create_trip(request.tourPlan, request.userDetails)
    except Exception as e:
        logger.error(f"Error submitting custom trip: {e}")
        return JSONResponse(status_code=500, content={"message": SUBMIT_ERROR_MESSAGE})

    return {"message": SUBMITTED_MESSAGE, "tripId": trip.id}
