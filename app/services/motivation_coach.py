"""Motivational messages generated by the configured AI backend."""
from __future__ import annotations

import asyncio
import logging
import random
import re

from app.config import get_settings
from app.models.schemas import MotivationArtifact, MotivationRequest
from app.services.prompt_builder import format_distance, format_duration
from app.services.provider_router import ProviderRouter, get_provider_router
from app.services.providers.base import ProviderInvocationError


logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "You're doing great! Keep up the excellent work with your fitness journey."
FALLBACK_QUOTE = '"Success is the sum of small efforts repeated day in and day out." - Robert Collier'
FALLBACK_TIPS = [
    "Set small, achievable goals for today",
    "Focus on consistency over perfection",
    "Celebrate every small victory",
]

MAX_MESSAGE_LENGTH = 300
MAX_MESSAGE_SENTENCES = 3
MAX_TIPS = 3

_MESSAGE_STOP_PREFIXES = ("quote:", "tips:", "actionable", "1.", "2.")
_QUOTE_PATTERN = re.compile(r'"([^"]{10,})"')
_QUOTE_KEYWORDS = ("success", "achieve", "goal", "dream", "believe", "strong", "push", "better", "begin", "real")
_TIP_MARKERS = "-*•0123456789. "


def build_motivation_prompt(request: MotivationRequest) -> str:
    profile = request.athlete_profile
    name = (profile.name if profile else None) or "Champion"
    fitness_level = (profile.fitness_level if profile else None) or "Beginner"
    primary_goal = (profile.primary_goal if profile else None) or "General Fitness"

    workout = request.last_workout
    if workout is not None:
        last_workout = (
            f"Last workout: {workout.activity_type}, {format_distance(workout.distance)}, "
            f"{format_duration(workout.duration)}"
        )
    else:
        last_workout = "No recent workout data available"

    if request.is_struggling:
        mood = "The athlete is currently struggling with motivation and needs extra encouragement."
    else:
        mood = "The athlete is looking for additional motivation to stay on track."

    return (
        f"Create a motivational fitness message for {name}.\n\n"
        "Athlete Profile:\n"
        f"- Fitness Level: {fitness_level}\n"
        f"- Primary Goal: {primary_goal}\n"
        f"- {last_workout}\n"
        f"- {mood}\n\n"
        "Generate a motivational response with:\n"
        "1. Personal encouragement (2-3 sentences)\n"
        "2. An inspiring fitness quote, on its own line starting with 'Quote:'\n"
        "3. 2-3 actionable tips, listed after a line 'Tips:'\n\n"
        "Keep it positive, personal, and energizing!"
    )


def extract_message(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return DEFAULT_MESSAGE

    lines: list[str] = []
    for line in raw.splitlines():
        clean = line.strip()
        if clean.lower().startswith(_MESSAGE_STOP_PREFIXES):
            break
        # Stand-alone quotes belong to the quote field.
        if clean.startswith('"') and clean.endswith('"') and len(clean) > 20:
            continue
        if clean:
            lines.append(clean)

    message = " ".join(lines) if lines else DEFAULT_MESSAGE
    if len(message) > MAX_MESSAGE_LENGTH:
        sentences = [s.strip() for s in message.split(".") if s.strip()]
        message = ". ".join(sentences[:MAX_MESSAGE_SENTENCES]) + "."
    return message


def extract_quote(raw: str | None) -> str | None:
    if raw is None or not raw.strip():
        return None

    for match in _QUOTE_PATTERN.finditer(raw):
        quote = match.group(1).strip()
        if 15 <= len(quote) <= 150 and any(keyword in quote for keyword in _QUOTE_KEYWORDS):
            return quote

    labelled = re.search(r"quote:", raw, re.IGNORECASE)
    if labelled:
        first_line = raw[labelled.end():].lstrip(" \t").split("\n", 1)[0]
        quote = first_line.strip().strip('"-*').strip()
        if len(quote) >= 15:
            return quote
    return None


def extract_tips(raw: str | None) -> list[str] | None:
    if raw is None or not raw.strip():
        return None

    lowered = raw.lower()
    if "tips:" in lowered:
        section = raw[lowered.index("tips:") + len("tips:"):]
    elif "actionable" in lowered:
        section = raw[lowered.index("actionable"):]
    else:
        return None

    tips: list[str] = []
    for line in section.splitlines():
        tip = line.strip().lstrip(_TIP_MARKERS).strip()
        if 15 < len(tip) < 150 and not tip.lower().startswith("quote"):
            tips.append(tip)
            if len(tips) >= MAX_TIPS:
                break
    return tips or None


def fallback_message(request: MotivationRequest) -> str:
    profile = request.athlete_profile
    name = (profile.name if profile else None) or "Champion"
    goal = (profile.primary_goal if profile else None) or "fitness goals"
    level = (profile.fitness_level if profile else None) or "current"

    messages = [
        f"Great job, {name}! Your consistency in training is inspiring. Every workout brings you closer to your {goal}.",
        f"You're making excellent progress, {name}! Your dedication to fitness shows real commitment to your health and goals.",
        f"Keep pushing forward, {name}! Your {level} level shows you have what it takes to achieve great things.",
        f"Amazing work, {name}! Your commitment to {goal} is paying off. Stay strong and keep moving forward!",
    ]
    return random.choice(messages)


class MotivationCoachService:
    """Generates motivational messages, falling back to canned encouragement."""

    def __init__(self, router: ProviderRouter | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self.router = router or get_provider_router()
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds

    async def generate(
        self,
        request: MotivationRequest,
        provider: str | None = None,
        timeout: float | None = None,
    ) -> MotivationArtifact:
        provider_name, capability = self.router.resolve(provider)
        athlete = request.athlete_profile.name if request.athlete_profile else None
        logger.info("Generating motivational message for %s with %s", athlete or "unknown athlete", provider_name)

        try:
            raw_response = await asyncio.wait_for(
                self.router.complete_motivation(capability, build_motivation_prompt(request)),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except (ProviderInvocationError, asyncio.TimeoutError) as err:
            logger.warning("Motivation with %s failed, using fallback: %s", provider_name, str(err) or "timeout")
            return self._fallback(request, provider_name)
        except Exception:
            logger.exception("Unexpected error generating motivation with %s", provider_name)
            return self._fallback(request, provider_name)

        result = MotivationArtifact(
            motivational_message=extract_message(raw_response),
            quote=extract_quote(raw_response),
            actionable_tips=extract_tips(raw_response),
            provider=provider_name,
        )
        logger.info("Generated motivational message with %d characters", len(result.motivational_message))
        return result

    @staticmethod
    def _fallback(request: MotivationRequest, provider: str) -> MotivationArtifact:
        return MotivationArtifact(
            motivational_message=fallback_message(request),
            quote=FALLBACK_QUOTE,
            actionable_tips=list(FALLBACK_TIPS),
            provider=provider,
        )
