# agents/__init__.py
"""
Agents Package

Contains the chat-facing agents:
- tour_planner: Chatbot message to tour plan (AI with deterministic fallback)
"""

from .tour_planner import (
    TourPlanner,
    tour_planner,
    generate_plan,
    CLARIFICATION_MESSAGE,
    PLAN_MESSAGE,
    SIMPLIFIED_PLAN_MESSAGE
)

__all__ = [
    "TourPlanner",
    "tour_planner",
    "generate_plan",
    "CLARIFICATION_MESSAGE",
    "PLAN_MESSAGE",
    "SIMPLIFIED_PLAN_MESSAGE"
]
