"""Deterministic analysis used when no model reply is available."""
from __future__ import annotations

import logging
from typing import Any, NamedTuple

from app.models.analysis_type import resolve_analysis_type
from app.models.schemas import AnalysisArtifact, AnalysisRequest
from app.services.prompt_catalog import get_translation


logger = logging.getLogger(__name__)


class WorkoutAggregates(NamedTuple):
    count: int
    total_distance_m: float
    total_duration_s: int
    avg_calories: float


def aggregate_workouts(request: AnalysisRequest) -> WorkoutAggregates:
    """Summarize the request's workouts; calories average only over workouts reporting them."""

    workouts = request.recent_workouts
    calories = [w.calories for w in workouts if w.calories is not None]
    return WorkoutAggregates(
        count=len(workouts),
        total_distance_m=sum(w.distance for w in workouts),
        total_duration_s=sum(w.duration for w in workouts),
        avg_calories=sum(calories) / len(calories) if calories else 0.0,
    )


def _format_hours_minutes(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    return f"{hours}:{remainder // 60:02d}"


def _template_values(aggregates: WorkoutAggregates, analysis_type: str) -> dict[str, Any]:
    avg_duration = aggregates.total_duration_s // aggregates.count if aggregates.count else 0
    return {
        "count": aggregates.count,
        "total_distance": f"{aggregates.total_distance_m / 1000:.1f} km",
        "total_duration": _format_hours_minutes(aggregates.total_duration_s),
        "avg_duration": _format_hours_minutes(avg_duration),
        "avg_calories": f"{aggregates.avg_calories:.0f}",
        "analysis_type": analysis_type.lower(),
    }


def synthesize_fallback(request: AnalysisRequest, provider: str) -> AnalysisArtifact:
    """
    Build a canned analysis from workout aggregates.

    The texts are keyed by analysis type like the prompt framings. The artifact
    is tagged with the provider that was attempted; degraded results are only
    recognizable by their wording.
    """
    analysis_type = resolve_analysis_type(request.analysis_type)
    language, texts = get_translation(request.locale)
    template = texts["fallback"][analysis_type.kind.value]

    aggregates = aggregate_workouts(request)
    values = _template_values(aggregates, analysis_type.label)
    logger.info(
        "Synthesizing %s fallback analysis (%s) for %d workouts | provider=%s",
        analysis_type.kind.value,
        language,
        aggregates.count,
        provider,
    )

    return AnalysisArtifact(
        analysis=template["analysis"].format(**values),
        key_insights=[line.format(**values) for line in template["insights"]],
        recommendations=[line.format(**values) for line in template["recommendations"]],
        provider=provider,
    )
