"""Shared contract for text-generation backends."""
from __future__ import annotations

import logging
from typing import Protocol

import httpx


logger = logging.getLogger(__name__)

FITNESS = "fitness"
HEALTH = "health"
MOTIVATION = "motivation"

# System context sent ahead of the prompt; this is what distinguishes the operations.
SYSTEM_PROMPTS = {
    FITNESS: "You are a fitness expert analyzing workout data. Provide professional insights.",
    HEALTH: "You are a health professional analyzing fitness data for wellness insights.",
    MOTIVATION: "You are an enthusiastic fitness coach. Provide motivational and encouraging responses.",
}


class ProviderInvocationError(Exception):
    """Raised when a backend cannot produce a completion for any reason."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class CompletionProvider(Protocol):
    """The three completion operations every backend offers."""

    async def get_fitness_analysis(self, prompt: str) -> str: ...

    async def get_health_analysis(self, prompt: str) -> str: ...

    async def get_motivation(self, prompt: str) -> str: ...


class BaseCompletionProvider:
    """Routes the three operations to a single ``_complete(prompt, purpose)``."""

    name = "unknown"

    async def get_fitness_analysis(self, prompt: str) -> str:
        return await self._complete(prompt, FITNESS)

    async def get_health_analysis(self, prompt: str) -> str:
        return await self._complete(prompt, HEALTH)

    async def get_motivation(self, prompt: str) -> str:
        return await self._complete(prompt, MOTIVATION)

    async def _complete(self, prompt: str, purpose: str) -> str:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release pooled connections; a no-op for clients without state."""

    def _require_text(self, text: str | None) -> str:
        if text is None or not text.strip():
            raise ProviderInvocationError(self.name, "empty completion")
        return text.strip()


class HttpCompletionProvider(BaseCompletionProvider):
    """Backend reached over HTTP with an optional injected ``httpx.AsyncClient``."""

    def __init__(self, timeout: float, client: httpx.AsyncClient | None = None) -> None:
        self._timeout = timeout
        self._client = client

    async def _post_json(self, url: str, payload: dict, **kwargs) -> dict:
        """POST ``payload`` and return the decoded JSON body."""

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, json=payload, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as err:
            status = err.response.status_code
            self._log_status(status, err.response.text)
            raise ProviderInvocationError(self.name, f"HTTP {status}") from err
        except httpx.TimeoutException as err:
            logger.warning("%s request timed out after %.1fs", self.name, self._timeout)
            raise ProviderInvocationError(self.name, "timeout") from err
        except httpx.HTTPError as err:
            raise ProviderInvocationError(self.name, f"transport error: {err}") from err
        except ValueError as err:
            logger.warning("%s returned invalid JSON: %s", self.name, err)
            raise ProviderInvocationError(self.name, "invalid JSON response") from err

    def _log_status(self, status: int, body: str) -> None:
        if status == 401:
            logger.error("%s UNAUTHORIZED: check the API key", self.name)
        elif status == 429:
            logger.warning("%s RATE LIMITED: request quota exceeded", self.name)
        else:
            logger.error("%s API error: %s - %s", self.name, status, body[:500])
