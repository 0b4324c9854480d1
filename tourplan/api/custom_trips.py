# api/custom_trips.py
"""
Custom Trips API
Custom trip requests and their admin review:
- Submit a request (status "pending")
- List all requests, newest first
- Update status / admin notes, emailing the submitter on a status change
"""

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from ..interfaces.notifier import EmailNotifier, email_notifier
from ..interfaces.trip_store import TripStore, trip_store
from ..schemas.plan_schemas import SubmitPlanRequest, TripStatusUpdate

SERVER_ERROR = {"success": False, "message": "Server error"}


router = APIRouter(prefix="/api/custom-trips", tags=["custom-trips"])


# ============================================
# Dependencies
# ============================================

def get_trip_store() -> TripStore:
    return trip_store


def get_notifier() -> EmailNotifier:
    return email_notifier


# ============================================
# Endpoints
# ============================================

@router.post("", status_code=201)
async def create_custom_trip(request: SubmitPlanRequest, store: TripStore = Depends(get_trip_store)):
    """Create a new custom trip request"""
    if request.tourPlan is None:
        return JSONResponse(status_code=400, content={"success": False, "message": "Tour plan is required"})

    try:
        trip = store.create_trip(request.tourPlan, request.userDetails)
    except Exception as e:
        logger.error(f"Error submitting custom trip: {e}")
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    return {
        "success": True,
        "message": "Custom trip request submitted successfully",
        "tripId": trip.id
    }


@router.get("")
async def list_custom_trips(store: TripStore = Depends(get_trip_store)):
    """All custom trip requests, newest first (admin)"""
    try:
        trips = store.list_trips()
    except Exception as e:
        logger.error(f"Error fetching custom trips: {e}")
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    return {"success": True, "data": [trip.model_dump(mode="json") for trip in trips]}


@router.put("/{trip_id}")
async def update_custom_trip(
    trip_id: str,
    update: TripStatusUpdate,
    background_tasks: BackgroundTasks,
    store: TripStore = Depends(get_trip_store),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """
    Update a custom trip's status and admin notes (admin).

    When the status changes and the submitter left an email, the status
    letter is sent after the response.
    """
    try:
        result = store.update_trip(trip_id, status=update.status, admin_notes=update.adminNotes)
    except Exception as e:
        logger.error(f"Error updating custom trip: {e}")
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    if result is None:
        return JSONResponse(status_code=404, content={"success": False, "message": "Custom trip not found"})

    trip, previous_status = result
    if trip.status != previous_status and trip.userDetails.email:
        background_tasks.add_task(notifier.notify_status_change, trip, previous_status)

    return {
        "success": True,
        "message": "Custom trip updated successfully",
        "customTrip": trip.model_dump(mode="json")
    }
