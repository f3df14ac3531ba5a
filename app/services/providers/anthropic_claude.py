"""Anthropic Claude client."""
from __future__ import annotations

import logging

from anthropic import APIError, AsyncAnthropic

from app.config import Settings
from app.services.providers.base import SYSTEM_PROMPTS, BaseCompletionProvider, ProviderInvocationError


logger = logging.getLogger(__name__)


class AnthropicProvider(BaseCompletionProvider):
    """Completions from Claude via the Anthropic SDK."""

    name = "anthropic"

    def __init__(self, settings: Settings) -> None:
        self.api_key = settings.anthropic_api_key
        self.model = settings.anthropic_model
        self.timeout = settings.ai_timeout_seconds
        self._client: AsyncAnthropic | None = None

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def _complete(self, prompt: str, purpose: str) -> str:
        if not self.api_key:
            raise ProviderInvocationError(self.name, "Anthropic API key not configured")

        logger.info("Calling Claude | model=%s purpose=%s", self.model, purpose)
        try:
            response = await self._get_client().messages.create(
                model=self.model,
                max_tokens=1024,
                temperature=0.7,
                system=SYSTEM_PROMPTS[purpose],
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as err:
            logger.error("Claude request failed: %s", err)
            raise ProviderInvocationError(self.name, str(err)) from err

        try:
            text = response.content[0].text
        except (AttributeError, IndexError) as err:
            raise ProviderInvocationError(self.name, "unexpected response format") from err

        return self._require_text(text)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
