"""AI-backed workout analysis with deterministic fallback."""
from __future__ import annotations

import asyncio
import logging

from app.config import get_settings
from app.models.analysis_type import resolve_analysis_type
from app.models.schemas import AnalysisArtifact, AnalysisRequest
from app.services.fallback_synthesizer import synthesize_fallback
from app.services.prompt_builder import build_analysis_prompt
from app.services.provider_router import ProviderRouter, get_provider_router
from app.services.providers.base import ProviderInvocationError
from app.services.response_parser import parse_analysis_response


logger = logging.getLogger(__name__)


class WorkoutAnalysisService:
    """Turns workout analysis requests into structured artifacts."""

    def __init__(self, router: ProviderRouter | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self.router = router or get_provider_router()
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds

    async def analyze(
        self,
        request: AnalysisRequest,
        provider: str | None = None,
        timeout: float | None = None,
    ) -> AnalysisArtifact:
        """
        Analyze recent workouts with the selected backend.

        Backend failures never propagate: errors, unusable envelopes and
        deadline expiry all produce the canned fallback for the request's
        analysis type, tagged with the provider that was attempted.

        Args:
            request: Validated analysis request
            provider: Optional provider hint; unknown hints use the default
            timeout: Deadline in seconds for the backend call (defaults to settings)

        Returns:
            AnalysisArtifact with parsed or synthesized content
        """
        provider_name, capability = self.router.resolve(provider)
        analysis_type = resolve_analysis_type(request.analysis_type)
        deadline = timeout if timeout is not None else self.timeout

        logger.info(
            "Analyzing %d workouts with %s | analysis_type=%s",
            len(request.recent_workouts),
            provider_name,
            analysis_type.label,
        )
        prompt = build_analysis_prompt(request)

        try:
            raw_response = await asyncio.wait_for(
                self.router.complete_analysis(capability, analysis_type.kind, prompt),
                timeout=deadline,
            )
        except ProviderInvocationError as err:
            logger.warning("Analysis with %s failed, using fallback: %s", provider_name, err.message)
            return synthesize_fallback(request, provider_name)
        except asyncio.TimeoutError:
            logger.warning("Analysis with %s exceeded %.1fs deadline, using fallback", provider_name, deadline)
            return synthesize_fallback(request, provider_name)
        except Exception:
            logger.exception("Unexpected error analyzing workouts with %s, using fallback", provider_name)
            return synthesize_fallback(request, provider_name)

        parsed = parse_analysis_response(raw_response)
        result = AnalysisArtifact(
            analysis=parsed.analysis,
            key_insights=parsed.key_insights,
            recommendations=parsed.recommendations,
            provider=provider_name,
        )
        logger.info(
            "Generated analysis with %s: %d insights and %d recommendations | request_id=%s",
            provider_name,
            len(result.key_insights or []),
            len(result.recommendations or []),
            result.request_id,
        )
        return result

    async def analyze_with_huggingface(self, request: AnalysisRequest, timeout: float | None = None) -> AnalysisArtifact:
        return await self.analyze(request, provider="huggingface", timeout=timeout)

    async def analyze_with_gemini(self, request: AnalysisRequest, timeout: float | None = None) -> AnalysisArtifact:
        return await self.analyze(request, provider="googlegemini", timeout=timeout)
