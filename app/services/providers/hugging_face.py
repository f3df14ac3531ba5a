"""HuggingFace inference router client (OpenAI-compatible chat completions)."""
from __future__ import annotations

import logging

import httpx

from app.config import Settings
from app.services.providers.base import SYSTEM_PROMPTS, HttpCompletionProvider, ProviderInvocationError


logger = logging.getLogger(__name__)


class HuggingFaceProvider(HttpCompletionProvider):
    """Completions from a model served through the HuggingFace inference router."""

    name = "huggingface"

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(timeout=settings.ai_timeout_seconds, client=client)
        self.api_key = settings.huggingface_api_key
        self.model = settings.huggingface_model
        self.url = settings.huggingface_url

    async def _complete(self, prompt: str, purpose: str) -> str:
        if not self.api_key:
            raise ProviderInvocationError(self.name, "HuggingFace API key not configured")

        logger.info("Calling HuggingFace inference router | model=%s purpose=%s", self.model, purpose)
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPTS[purpose]},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": 1000,
            "temperature": 0.7,
            "stream": False,
        }
        body = await self._post_json(
            self.url,
            payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

        try:
            text = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as err:
            logger.warning("Unexpected response format from HuggingFace: %s", str(body)[:500])
            raise ProviderInvocationError(self.name, "unexpected response format") from err

        return self._require_text(text)
