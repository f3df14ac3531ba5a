"""Pydantic models describing analysis requests and generated artifacts."""
import uuid
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_request_id() -> str:
    return str(uuid.uuid4())


class WorkoutRecord(BaseModel):
    """A single completed workout as reported by the client."""

    model_config = ConfigDict(frozen=True)

    date: date
    activity_type: str = Field(min_length=1, max_length=50)
    distance: float = Field(ge=0, description="Distance in meters")
    duration: int = Field(ge=1, description="Duration in seconds")
    calories: int | None = Field(default=None, ge=0)
    metrics: dict[str, float] | None = Field(
        default=None,
        description="Optional extra metrics such as average heart rate.",
    )


class AthleteContext(BaseModel):
    """Free-text athlete profile attached to a request."""

    name: str | None = Field(default=None, max_length=100)
    fitness_level: str | None = Field(default=None, max_length=50)
    primary_goal: str | None = Field(default=None, max_length=100)


class AnalysisRequest(BaseModel):
    """Schema for a workout analysis request."""

    recent_workouts: list[WorkoutRecord] = []
    analysis_type: str = "General"
    athlete_profile: AthleteContext | None = None
    additional_context: dict[str, Any] | None = None
    locale: str | None = Field(
        default=None,
        description="Preferred language for prompt and fallback texts (e.g. 'de', 'en-US').",
    )


class AnalysisArtifact(BaseModel):
    """Structured result of a workout analysis, parsed or synthesized."""

    analysis: str = Field(min_length=1)
    key_insights: list[str] | None = None
    recommendations: list[str] | None = None
    provider: str = ""
    request_id: str = Field(default_factory=_new_request_id)
    generated_at: datetime = Field(default_factory=_utcnow)


class MotivationRequest(BaseModel):
    """Schema for a motivational message request."""

    athlete_profile: AthleteContext | None = None
    last_workout: WorkoutRecord | None = None
    is_struggling: bool = False


class MotivationArtifact(BaseModel):
    """Motivational message with optional quote and tips."""

    motivational_message: str = Field(min_length=1)
    quote: str | None = None
    actionable_tips: list[str] | None = None
    provider: str = ""
    request_id: str = Field(default_factory=_new_request_id)
    generated_at: datetime = Field(default_factory=_utcnow)
