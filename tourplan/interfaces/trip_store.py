# interfaces/trip_store.py
"""
Custom Trip Store
Persists tour plans users submit for review:
- Submission (status "pending")
- Admin listing, newest first
- Status / admin notes updates
Reads and writes MongoDB when configured, otherwise keeps trips in memory.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Any, Optional, List, Tuple
from loguru import logger

from ..config import settings
from ..schemas.plan_schemas import CustomTrip, TourPlan, TripStatus, UserDetails

try:
    from pymongo import MongoClient, DESCENDING
    from pymongo.errors import PyMongoError
    MONGO_AVAILABLE = True
except ImportError:
    MONGO_AVAILABLE = False

COLLECTION_NAME = "customtrips"


class TripStore:
    """
    Stores custom trip requests.
    Supports MongoDB for persistence, falls back to in-memory.
    """

    def __init__(self, mongo_uri: Optional[str] = None, mongo_db: Optional[str] = None,
                 timeout_ms: Optional[int] = None):
        self.mongo_client = None
        self.collection = None
        self._memory_store: Dict[str, Dict[str, Any]] = {}

        mongo_uri = settings.MONGO_URI if mongo_uri is None else mongo_uri
        mongo_db = mongo_db or settings.MONGO_DB
        timeout_ms = timeout_ms or settings.MONGO_TIMEOUT_MS

        if not mongo_uri:
            logger.info("TripStore: MONGO_URI not set, using in-memory store")
            return
        if not MONGO_AVAILABLE:
            logger.warning("TripStore: pymongo not installed, using in-memory store")
            return

        try:
            self.mongo_client = MongoClient(mongo_uri, serverSelectionTimeoutMS=timeout_ms)
            self.mongo_client.admin.command("ping")
            self.collection = self.mongo_client[mongo_db][COLLECTION_NAME]
            logger.info(f"TripStore connected to MongoDB: {mongo_db}.{COLLECTION_NAME}")
        except Exception as e:
            logger.warning(f"TripStore MongoDB connection failed, using in-memory store: {e}")
            self.mongo_client = None
            self.collection = None

    @property
    def backend(self) -> str:
        return "mongodb" if self.collection is not None else "memory"

    def create_trip(self, tour_plan: TourPlan, user_details: Optional[UserDetails] = None) -> CustomTrip:
        """Store a new pending trip request"""
        trip = CustomTrip(
            id=f"trip_{uuid.uuid4().hex[:12]}",
            tourPlan=tour_plan,
            userDetails=user_details or UserDetails(),
            status=TripStatus.PENDING,
            createdAt=datetime.now(timezone.utc)
        )
        self._save_trip(trip)

        logger.info(f"Created custom trip {trip.id} for {trip.userDetails.name}: "
                    f"{tour_plan.destination}, {tour_plan.duration}")
        return trip

    def get_trip(self, trip_id: str) -> Optional[CustomTrip]:
        """Get a trip by ID"""
        if self.collection is not None:
            try:
                document = self.collection.find_one({"_id": trip_id})
                if document:
                    return self._from_document(document)
            except PyMongoError as e:
                logger.error(f"MongoDB get error: {e}")

        data = self._memory_store.get(trip_id)
        return CustomTrip(**data) if data else None

    def list_trips(self) -> List[CustomTrip]:
        """All trips, newest first"""
        if self.collection is not None:
            try:
                documents = self.collection.find().sort("createdAt", DESCENDING)
                return [self._from_document(document) for document in documents]
            except PyMongoError as e:
                logger.error(f"MongoDB list error: {e}")

        # ties on createdAt keep the most recently inserted first
        trips = [CustomTrip(**data) for data in reversed(list(self._memory_store.values()))]
        trips.sort(key=lambda trip: trip.createdAt, reverse=True)
        return trips

    def update_trip(self, trip_id: str, status: Optional[TripStatus] = None,
                    admin_notes: Optional[str] = None) -> Optional[Tuple[CustomTrip, TripStatus]]:
        """
        Update status and/or admin notes.
        Missing values keep the stored ones.

        Returns:
            (updated trip, previous status), or None when the trip does not exist
        """
        trip = self.get_trip(trip_id)
        if trip is None:
            logger.warning(f"Custom trip not found: {trip_id}")
            return None

        previous_status = trip.status
        updated = trip.model_copy(update={
            "status": status or trip.status,
            "adminNotes": admin_notes or trip.adminNotes,
            "updatedAt": datetime.now(timezone.utc)
        })
        self._save_trip(updated)

        logger.info(f"Updated custom trip {trip_id}: {previous_status.value} -> {updated.status.value}")
        return updated, previous_status

    def _save_trip(self, trip: CustomTrip):
        document = trip.model_dump(mode="json")

        if self.collection is not None:
            try:
                self.collection.replace_one({"_id": trip.id}, {"_id": trip.id, **document}, upsert=True)
                return
            except PyMongoError as e:
                logger.error(f"MongoDB save error for trip: {e}")

        self._memory_store[trip.id] = document

    def _from_document(self, document: Dict[str, Any]) -> CustomTrip:
        data = dict(document)
        data["id"] = str(data.pop("_id", data.get("id", "")))
        return CustomTrip(**data)


# ============================================
# Global Instance
# ============================================

trip_store = TripStore()
