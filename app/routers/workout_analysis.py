"""API endpoints for AI-powered workout analysis."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import AnalysisArtifact, AnalysisRequest
from app.services.workout_analysis import WorkoutAnalysisService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workout-analysis", tags=["workout_analysis"])


@lru_cache()
def get_analysis_service() -> WorkoutAnalysisService:
    return WorkoutAnalysisService()


AnalysisServiceDep = Annotated[WorkoutAnalysisService, Depends(get_analysis_service)]


async def _run_analysis(
    service: WorkoutAnalysisService,
    request: AnalysisRequest,
    provider: str | None,
) -> AnalysisArtifact:
    try:
        return await service.analyze(request, provider=provider)
    except Exception as e:
        logger.exception("Failed to analyze workouts | provider=%s", provider or "default")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to analyze workouts: {str(e)}",
        )


@router.post("/analyze", response_model=AnalysisArtifact)
async def analyze_workouts(
    request: AnalysisRequest,
    service: AnalysisServiceDep,
    provider: str | None = None,
):
    """
    Analyze recent workouts with the requested (or default) AI provider.

    Returns:
        AnalysisArtifact: Analysis text, key insights and recommendations
    """
    logger.info(
        "Handling analysis request | type=%s workouts=%d provider=%s",
        request.analysis_type,
        len(request.recent_workouts),
        provider or "default",
    )
    return await _run_analysis(service, request, provider)


@router.post("/analyze/huggingface", response_model=AnalysisArtifact)
async def analyze_workouts_huggingface(request: AnalysisRequest, service: AnalysisServiceDep):
    """Analyze recent workouts with the HuggingFace inference router."""
    return await _run_analysis(service, request, "huggingface")


@router.post("/analyze/googlegemini", response_model=AnalysisArtifact)
async def analyze_workouts_gemini(request: AnalysisRequest, service: AnalysisServiceDep):
    """Analyze recent workouts with Google Gemini."""
    return await _run_analysis(service, request, "googlegemini")
