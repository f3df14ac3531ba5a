"""API endpoint for motivational coaching messages."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import MotivationArtifact, MotivationRequest
from app.services.motivation_coach import MotivationCoachService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/motivation", tags=["motivation"])


@lru_cache()
def get_motivation_service() -> MotivationCoachService:
    return MotivationCoachService()


@router.post("", response_model=MotivationArtifact)
async def get_motivation(
    request: MotivationRequest,
    service: Annotated[MotivationCoachService, Depends(get_motivation_service)],
    provider: str | None = None,
):
    """Generate a motivational message with quote and actionable tips."""

    try:
        return await service.generate(request, provider=provider)
    except Exception as e:
        logger.exception("Failed to generate motivational message")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to generate motivation: {str(e)}",
        )
