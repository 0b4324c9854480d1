"""
Tour Plan Service - FastAPI Application
LLM Provider:
- If OPENAI_API_KEY is set: use OpenAI (or any OpenAI-compatible endpoint)
- If no OPENAI_API_KEY: use Ollama (llama3.2)
- Either way, a catalog itinerary is returned when the provider fails
"""

import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .config import settings
from .api import chatbot_router, custom_trips_router
from .interfaces.destination_catalog import destination_catalog
from .interfaces.notifier import email_notifier
from .interfaces.trip_store import trip_store
from .llm.provider import llm_provider
from .schemas.plan_schemas import HealthResponse

# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
           "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

SERVICE_NAME = "tour-plan-service"


def component_status() -> dict:
    """Current state of every backing component"""
    return {
        "llm": {
            "provider": llm_provider.name,
            "model": llm_provider.model_name,
            "status": "ready" if llm_provider.available else "unavailable (fallback plans only)"
        },
        "destination_catalog": f"{len(destination_catalog)} destinations",
        "trip_store": trip_store.backend,
        "email": "configured" if email_notifier.configured else "not configured"
    }


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("=" * 50)
    logger.info(f"Starting {settings.APP_NAME} Tour Plan Service")
    logger.info("=" * 50)
    logger.info(f"Environment: {settings.API_ENV}")

    for name, status in component_status().items():
        logger.info(f"  {name}: {status}")

    yield

    logger.info("Tour Plan Service shutdown complete")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title=f"{settings.APP_NAME} Tour Plan Service",
    description="Turns free-text trip requests into day-by-day tour plans. Supports OpenAI and Ollama "
                "with a deterministic catalog fallback.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chatbot_router)
app.include_router(custom_trips_router)


# ============================================
# REST Endpoints
# ============================================

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": f"{settings.APP_NAME} Tour Plan Service",
        "version": __version__,
        "status": "running",
        "llm_provider": llm_provider.name,
        "docs": "/docs",
        "endpoints": [
            "/api/health",
            "/api/chatbot/generate-plan",
            "/api/chatbot/submit-plan",
            "/api/custom-trips"
        ]
    }


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Detailed health check"""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=__version__,
        components=component_status(),
        timestamp=datetime.now().isoformat()
    )


# ============================================
# Main
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tourplan.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_ENV == "development"
    )
