"""
Tour Plan Service Configuration
Loads settings from environment variables
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_CATALOG_PATH = str(Path(__file__).parent / "data" / "destinations.json")


class Settings:
    """Application settings loaded from environment"""

    APP_NAME: str = os.getenv("APP_NAME", "Travel Mate")

    # LLM Configuration
    # "openai" (any OpenAI-compatible endpoint, e.g. OpenRouter), "ollama" or "none".
    # Empty means: openai when a key is set, otherwise ollama.
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "").strip().lower()
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
    OLLAMA_BASE_URL: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    OLLAMA_MODEL: str = os.getenv("OLLAMA_MODEL", "llama3.2")
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "60"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "1500"))
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_JSON_MODE: bool = os.getenv("LLM_JSON_MODE", "true").lower() in ("1", "true", "yes")

    # Itinerary conventions
    LOCAL_CURRENCY_SYMBOL: str = os.getenv("LOCAL_CURRENCY_SYMBOL", "₹")
    LOCAL_CURRENCY_CODE: str = os.getenv("LOCAL_CURRENCY_CODE", "INR")
    DESTINATION_CATALOG_PATH: str = os.getenv("DESTINATION_CATALOG_PATH", DEFAULT_CATALOG_PATH)
    # "last": a later gazetteer match overwrites an earlier one; "first": first match wins
    DESTINATION_MATCH_POLICY: str = os.getenv("DESTINATION_MATCH_POLICY", "last").strip().lower()
    # Longest itinerary a plan is stretched to; larger requested durations are capped
    MAX_ITINERARY_DAYS: int = int(os.getenv("MAX_ITINERARY_DAYS", "30"))

    # MongoDB Configuration (empty URI keeps custom trips in memory)
    MONGO_URI: str = os.getenv("MONGO_URI", "")
    MONGO_DB: str = os.getenv("MONGO_DB", "travel_mate")
    MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "3000"))

    # SMTP Configuration
    SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    EMAIL_USER: str = os.getenv("EMAIL_USER", "")
    EMAIL_PASS: str = os.getenv("EMAIL_PASS", "")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "")

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_ENV: str = os.getenv("API_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS Configuration
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def has_openai_key(self) -> bool:
        """A real key, not the sample value from .env.example"""
        return bool(self.OPENAI_API_KEY) and not self.OPENAI_API_KEY.startswith("sk-your")

    @property
    def llm_provider(self) -> str:
        """Resolve which LLM backend to use"""
        if self.LLM_PROVIDER in ("openai", "ollama", "none"):
            return self.LLM_PROVIDER
        return "openai" if self.has_openai_key else "ollama"

    @property
    def email_sender(self) -> str:
        return self.EMAIL_FROM or self.EMAIL_USER


# Global settings instance
settings = Settings()
