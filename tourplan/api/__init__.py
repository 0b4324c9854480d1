# api/__init__.py
"""
API Endpoints Package

Contains all FastAPI routers for the service:
- chatbot: Tour plan generation and submission
- custom_trips: Custom trip requests and admin review
"""

from .chatbot import router as chatbot_router
from .custom_trips import router as custom_trips_router

__all__ = [
    "chatbot_router",
    "custom_trips_router"
]
