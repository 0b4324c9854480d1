# interfaces/__init__.py
"""
Interfaces Package

Contains data sources and outbound channels:
- destination_catalog: Read-only fallback itinerary templates
- trip_store: Custom trip requests (MongoDB or in-memory)
- notifier: Status emails to trip submitters
"""

from .destination_catalog import CatalogError, DestinationTemplate, DestinationCatalog, destination_catalog
from .trip_store import TripStore, trip_store
from .notifier import EmailNotifier, email_notifier, build_status_email, notify_status_change

__all__ = [
    "CatalogError",
    "DestinationTemplate",
    "DestinationCatalog",
    "destination_catalog",
    "TripStore",
    "trip_store",
    "EmailNotifier",
    "email_notifier",
    "build_status_email",
    "notify_status_change"
]
