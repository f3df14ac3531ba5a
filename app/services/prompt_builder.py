"""Prompt construction for workout analysis requests."""
from __future__ import annotations

from typing import Any

from app.models.analysis_type import resolve_analysis_type
from app.models.schemas import AnalysisRequest, AthleteContext, WorkoutRecord
from app.services.prompt_catalog import get_translation
from app.services.response_parser import (
    ANALYSIS,
    INSIGHTS,
    RECOMMENDATIONS,
    canonical_header,
)


def format_distance(meters: float) -> str:
    """Format a distance in meters as kilometers, e.g. ``5000`` -> ``"5.00 km"``."""
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: int) -> str:
    """Format seconds as ``hh:mm:ss``; hours are not wrapped at 24."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _format_workout(workout: WorkoutRecord, texts: dict[str, Any]) -> str:
    calories = workout.calories if workout.calories is not None else texts["calories_unknown"]
    return texts["workout_line"].format(
        date=workout.date.isoformat(),
        activity_type=workout.activity_type,
        distance=format_distance(workout.distance),
        duration=format_duration(workout.duration),
        calories=calories,
    )


def _format_athlete_context(profile: AthleteContext | None, texts: dict[str, Any]) -> str | None:
    if profile is None:
        return None
    unknown = texts["unknown_value"]
    return texts["athlete_context"].format(
        fitness_level=profile.fitness_level or unknown,
        primary_goal=profile.primary_goal or unknown,
    )


def build_analysis_prompt(request: AnalysisRequest) -> str:
    """
    Build the model prompt for an analysis request.

    Requests without workouts short-circuit to a fixed "no data" message. All
    other prompts consist of the framing for the analysis type, one line per
    workout, an optional athlete context line, and instructions requesting the
    canonical section headers of the prompt language.
    """
    language, texts = get_translation(request.locale)
    if not request.recent_workouts:
        return texts["no_data"]

    analysis_type = resolve_analysis_type(request.analysis_type)
    framing = texts["framing"][analysis_type.kind.value].format(analysis_type=analysis_type.label)

    data_lines = [texts["data_heading"]]
    data_lines.extend(_format_workout(workout, texts) for workout in request.recent_workouts)
    athlete_context = _format_athlete_context(request.athlete_profile, texts)
    if athlete_context:
        data_lines.append(athlete_context)

    instructions = texts["instructions"].format(
        analysis_header=canonical_header(language, ANALYSIS),
        insights_header=canonical_header(language, INSIGHTS),
        recommendations_header=canonical_header(language, RECOMMENDATIONS),
    )

    return "\n\n".join([framing, "\n".join(data_lines), instructions])
