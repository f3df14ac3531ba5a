"""Selection of the text-generation backend for a request."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from app.config import Settings, get_settings
from app.models.analysis_type import AnalysisKind
from app.services.providers.anthropic_claude import AnthropicProvider
from app.services.providers.base import CompletionProvider
from app.services.providers.google_gemini import GoogleGeminiProvider
from app.services.providers.hugging_face import HuggingFaceProvider


logger = logging.getLogger(__name__)

PROVIDER_ALIASES = {
    "gemini": "googlegemini",
    "google": "googlegemini",
    "claude": "anthropic",
    "hf": "huggingface",
}


def _normalize(name: str) -> str:
    key = name.strip().lower()
    return PROVIDER_ALIASES.get(key, key)


class ProviderRouter:
    """Maps provider hints onto registered backends and analysis types onto operations."""

    def __init__(self, providers: Mapping[str, CompletionProvider], default_provider: str) -> None:
        self._providers = {_normalize(name): provider for name, provider in providers.items()}
        self.default_provider = _normalize(default_provider)
        if self.default_provider not in self._providers:
            raise ValueError(
                f"Default AI provider '{default_provider}' is not registered "
                f"(available: {', '.join(sorted(self._providers))})"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRouter":
        providers: dict[str, CompletionProvider] = {
            GoogleGeminiProvider.name: GoogleGeminiProvider(settings),
            HuggingFaceProvider.name: HuggingFaceProvider(settings),
            AnthropicProvider.name: AnthropicProvider(settings),
        }
        return cls(providers, settings.default_ai_provider)

    @property
    def provider_names(self) -> list[str]:
        return sorted(self._providers)

    def resolve(self, hint: str | None) -> tuple[str, CompletionProvider]:
        """Return ``(name, provider)`` for ``hint``; unknown or missing hints use the default."""

        if hint and hint.strip():
            name = _normalize(hint)
            if name in self._providers:
                return name, self._providers[name]
            logger.info("Unknown AI provider %r - using default %s", hint, self.default_provider)
        return self.default_provider, self._providers[self.default_provider]

    async def complete_analysis(self, provider: CompletionProvider, kind: AnalysisKind, prompt: str) -> str:
        """Invoke the operation matching ``kind``; only health analyses use the health completion."""

        if kind is AnalysisKind.HEALTH:
            return await provider.get_health_analysis(prompt)
        return await provider.get_fitness_analysis(prompt)

    async def complete_motivation(self, provider: CompletionProvider, prompt: str) -> str:
        return await provider.get_motivation(prompt)

    async def aclose(self) -> None:
        """Close pooled clients held by the registered backends."""

        for name, provider in self._providers.items():
            close = getattr(provider, "aclose", None)
            if close is not None:
                logger.debug("Closing %s client", name)
                await close()


@lru_cache()
def get_provider_router() -> ProviderRouter:
    """Process-wide router so backend clients and their connection pools are reused."""

    return ProviderRouter.from_settings(get_settings())
