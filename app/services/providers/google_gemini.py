"""Google Gemini ``generateContent`` client."""
from __future__ import annotations

import logging

import httpx

from app.config import Settings
from app.services.providers.base import SYSTEM_PROMPTS, HttpCompletionProvider, ProviderInvocationError


logger = logging.getLogger(__name__)


class GoogleGeminiProvider(HttpCompletionProvider):
    """Completions from Google Gemini via the public REST API."""

    name = "googlegemini"

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(timeout=settings.ai_timeout_seconds, client=client)
        self.api_key = settings.google_ai_api_key
        self.model = settings.gemini_model
        self.base_url = settings.gemini_base_url.rstrip("/")

    async def _complete(self, prompt: str, purpose: str) -> str:
        if not self.api_key:
            raise ProviderInvocationError(self.name, "Google AI API key not configured")

        logger.info("Calling Google Gemini | model=%s purpose=%s", self.model, purpose)
        payload = {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPTS[purpose]}]},
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "maxOutputTokens": 1000,
                "topP": 0.95,
                "topK": 40,
            },
        }
        body = await self._post_json(
            f"{self.base_url}/v1beta/models/{self.model}:generateContent",
            payload,
            params={"key": self.api_key},
        )

        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as err:
            logger.warning("Unexpected response format from Google Gemini: %s", str(body)[:500])
            raise ProviderInvocationError(self.name, "unexpected response format") from err

        return self._require_text(text)
