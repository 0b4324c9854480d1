# llm/provider.py
"""
LLM Provider
Single boundary for calls to the text-generation backend:
- OpenAI or any OpenAI-compatible endpoint (e.g. OpenRouter) when a key is set
- Ollama (local) otherwise
Every failure surfaces as ProviderError so callers can fall back.
"""

from typing import Optional
from loguru import logger
import httpx

from ..config import settings
from .prompts import SYSTEM_PROMPT

# Try to import OpenAI
try:
    from openai import AsyncOpenAI
    OPENAI_AVAILABLE = True
except ImportError:
    OPENAI_AVAILABLE = False


class ProviderError(Exception):
    """The LLM backend could not produce text"""


class LLMProvider:
    """
    Async text generation against OpenAI-compatible APIs or Ollama.
    """

    def __init__(self, provider: Optional[str] = None, api_key: Optional[str] = None,
                 model: Optional[str] = None, base_url: Optional[str] = None,
                 ollama_base_url: Optional[str] = None, ollama_model: Optional[str] = None,
                 timeout: Optional[float] = None, max_tokens: Optional[int] = None,
                 temperature: Optional[float] = None, json_mode: Optional[bool] = None):
        self.provider = (provider or settings.llm_provider).lower()
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.base_url = base_url if base_url is not None else settings.OPENAI_BASE_URL
        self.ollama_base_url = (ollama_base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.ollama_model = ollama_model or settings.OLLAMA_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self.json_mode = settings.LLM_JSON_MODE if json_mode is None else json_mode

        self.openai_client = None
        if self.provider == "openai":
            if not OPENAI_AVAILABLE:
                logger.error("OpenAI library not installed. Run: pip install openai")
            elif not self.api_key:
                logger.warning("LLMProvider: OPENAI_API_KEY is not set, AI plans disabled")
            else:
                try:
                    self.openai_client = AsyncOpenAI(
                        api_key=self.api_key,
                        base_url=self.base_url or None,
                        timeout=self.timeout
                    )
                    logger.info(f"LLMProvider: OpenAI-compatible client ready ({self.model})")
                except Exception as e:
                    logger.warning(f"LLMProvider: OpenAI init failed: {e}")
        elif self.provider == "ollama":
            logger.info(f"LLMProvider: Ollama ({self.ollama_model}) at {self.ollama_base_url}")

    @property
    def name(self) -> str:
        return self.provider

    @property
    def model_name(self) -> Optional[str]:
        if self.provider == "openai":
            return self.model
        if self.provider == "ollama":
            return self.ollama_model
        return None

    @property
    def available(self) -> bool:
        if self.provider == "openai":
            return self.openai_client is not None
        return self.provider == "ollama"

    async def generate(self, prompt: str, system_prompt: str = SYSTEM_PROMPT) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: User prompt
            system_prompt: Instructions for the model

        Returns:
            Raw model text

        Raises:
            ProviderError: backend unavailable, unreachable or returned nothing
        """
        if self.provider == "openai":
            return await self._call_openai(prompt, system_prompt)
        if self.provider == "ollama":
            return await self._call_ollama(prompt, system_prompt)
        raise ProviderError("No LLM provider configured")

    async def _call_openai(self, prompt: str, system_prompt: str) -> str:
        if self.openai_client is None:
            raise ProviderError("OpenAI client not available")

        kwargs = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt}
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature
        }
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.openai_client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise ProviderError(f"OpenAI API error: {e}") from e

        if not response.choices or response.choices[0].message is None:
            raise ProviderError("Invalid response format from OpenAI API")

        content = response.choices[0].message.content
        if not content:
            raise ProviderError("Empty response from OpenAI API")
        return content

    async def _call_ollama(self, prompt: str, system_prompt: str) -> str:
        payload = {
            "model": self.ollama_model,
            "prompt": f"{system_prompt}\n\n{prompt}",
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens
            }
        }
        if self.json_mode:
            payload["format"] = "json"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.ollama_base_url}/api/generate", json=payload)
        except httpx.ConnectError as e:
            logger.error("Cannot connect to Ollama. Make sure Ollama is running.")
            raise ProviderError("Cannot connect to Ollama") from e
        except httpx.HTTPError as e:
            logger.error(f"Ollama API error: {e}")
            raise ProviderError(f"Ollama API error: {e}") from e

        if response.status_code != 200:
            logger.error(f"Ollama error: {response.status_code}")
            raise ProviderError(f"Ollama error ({response.status_code}): {response.text[:200]}")

        try:
            result = response.json()
        except ValueError as e:
            raise ProviderError("Ollama returned invalid JSON") from e

        content = result.get("response") if isinstance(result, dict) else None
        if not content:
            raise ProviderError("Empty response from Ollama")
        return content


# ============================================
# Global Instance
# ============================================

llm_provider = LLMProvider()
