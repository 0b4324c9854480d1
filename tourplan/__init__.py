# tourplan/__init__.py
"""
Tour Plan Service Package

Turns a traveller's free-text request into a structured tour plan:
- Field extraction (destination, duration, people, budget)
- LLM itinerary generation (OpenAI-compatible or Ollama)
- Normalization of whatever the model returns
- Deterministic catalog itinerary when the model fails
- Custom trip requests with admin review and status emails
"""

__version__ = "1.0.0"
__author__ = "Travel Mate Team"

# Package structure:
# tourplan/
# ├── __init__.py           <- This file
# ├── main.py               <- FastAPI application entry
# ├── config.py             <- Configuration settings
# │
# ├── agents/               <- Agents
# │   └── tour_planner.py   <- Chat-facing planning pipeline
# │
# ├── api/                  <- FastAPI Routers
# │   ├── chatbot.py        <- /api/chatbot
# │   └── custom_trips.py   <- /api/custom-trips
# │
# ├── interfaces/           <- Data sources and outbound channels
# │   ├── destination_catalog.py <- Fallback itinerary templates
# │   ├── trip_store.py     <- Custom trip requests
# │   └── notifier.py       <- Status emails
# │
# ├── llm/                  <- LLM Components
# │   ├── field_extractor.py     <- NL to structured TravelRequest
# │   ├── prompts.py             <- Provider prompt
# │   ├── provider.py            <- OpenAI / Ollama calls
# │   ├── response_normalizer.py <- Provider reply to TourPlan
# │   └── fallback_generator.py  <- Catalog-based TourPlan
# │
# ├── schemas/              <- Pydantic Models
# │   └── plan_schemas.py
# │
# └── data/
#     └── destinations.json <- Destination catalog
