"""Tests for analysis prompt construction."""
from datetime import date

import pytest

from app.config import Settings
from app.models.schemas import AnalysisRequest, AthleteContext, WorkoutRecord
from app.services.prompt_builder import build_analysis_prompt, format_distance, format_duration
from app.services.prompt_catalog import resolve_language


def _request(analysis_type: str = "Performance", locale: str | None = "en", **kwargs) -> AnalysisRequest:
    return AnalysisRequest(
        recent_workouts=[
            WorkoutRecord(date=date(2025, 6, 2), activity_type="Run", distance=5000, duration=1800, calories=320),
            WorkoutRecord(date=date(2025, 6, 4), activity_type="Swim", distance=12000, duration=3909),
        ],
        analysis_type=analysis_type,
        locale=locale,
        **kwargs,
    )


class TestFormatting:
    def test_format_distance(self):
        assert format_distance(5000) == "5.00 km"
        assert format_distance(1234.5) == "1.23 km"

    def test_format_duration(self):
        assert format_duration(1800) == "00:30:00"
        assert format_duration(3909) == "01:05:09"
        assert format_duration(90061) == "25:01:01"


class TestLanguageResolution:
    def test_region_suffix_is_dropped(self):
        assert resolve_language("de-AT", {"de": {}, "en": {}}, "en") == "de"
        assert resolve_language("en_GB", {"de": {}, "en": {}}, "de") == "en"

    def test_unknown_locale_uses_default(self):
        assert resolve_language("fr", {"de": {}, "en": {}}, "de") == "de"

    def test_unsupported_default_uses_english(self):
        assert resolve_language(None, {"de": {}, "en": {}}, "it") == "en"


def test_empty_workouts_short_circuit():
    prompt = build_analysis_prompt(AnalysisRequest(analysis_type="Health", locale="en"))

    assert prompt.startswith("No recent workout data available for analysis.")
    assert "KEY INSIGHTS:" not in prompt


def test_empty_workouts_short_circuit_german():
    prompt = build_analysis_prompt(AnalysisRequest(locale="de"))

    assert prompt.startswith("Keine aktuellen Trainingsdaten")


@pytest.mark.parametrize("locale", ["en", "de"])
@pytest.mark.parametrize("analysis_type", ["Health", "Performance", "Trends", "General", "Foo"])
def test_every_workout_appears_exactly_once(analysis_type, locale):
    prompt = build_analysis_prompt(_request(analysis_type, locale))

    assert prompt.count("Run") == 1
    assert prompt.count("Swim") == 1
    assert prompt.count("5.00 km") == 1
    assert prompt.count("12.00 km") == 1


def test_workout_lines_are_formatted():
    prompt = build_analysis_prompt(_request())

    assert "Date: 2025-06-02, Type: Run, Distance: 5.00 km, Duration: 00:30:00, Calories: 320" in prompt
    assert "Date: 2025-06-04, Type: Swim, Distance: 12.00 km, Duration: 01:05:09, Calories: n/a" in prompt


def test_english_prompt_requests_english_headers():
    prompt = build_analysis_prompt(_request())

    assert "ANALYSIS:" in prompt
    assert "KEY INSIGHTS:" in prompt
    assert "RECOMMENDATIONS:" in prompt
    assert "WICHTIGE ERKENNTNISSE:" not in prompt


def test_german_prompt_requests_german_headers():
    prompt = build_analysis_prompt(_request(locale="de-CH"))

    assert "ANALYSE:" in prompt
    assert "WICHTIGE ERKENNTNISSE:" in prompt
    assert "EMPFEHLUNGEN:" in prompt
    assert "Datum: 2025-06-02, Typ: Run, Distanz: 5.00 km" in prompt


def test_instructions_are_shared_across_types():
    health = build_analysis_prompt(_request("Health"))
    trends = build_analysis_prompt(_request("Trends"))

    assert health.split("\n\n", 2)[2] == trends.split("\n\n", 2)[2]
    assert health.split("\n\n", 1)[0] != trends.split("\n\n", 1)[0]


@pytest.mark.parametrize(
    "analysis_type, expected",
    [
        ("Health", "health and fitness expert"),
        ("health", "health and fitness expert"),
        ("Performance", "performance coach"),
        ("TRENDS", "specialized in fitness trends"),
        ("General", "Analysis focus: General"),
    ],
)
def test_framing_follows_analysis_type(analysis_type, expected):
    assert expected in build_analysis_prompt(_request(analysis_type))


def test_unrecognized_type_uses_general_framing_with_label():
    prompt = build_analysis_prompt(_request("Foo"))

    assert "You are a fitness expert." in prompt
    assert "Analysis focus: Foo" in prompt


def test_athlete_context_line():
    prompt = build_analysis_prompt(
        _request(athlete_profile=AthleteContext(fitness_level="Intermediate", primary_goal="Half marathon"))
    )

    assert "Athlete level: Intermediate, Primary goal: Half marathon" in prompt


def test_athlete_context_with_missing_fields():
    prompt = build_analysis_prompt(_request(athlete_profile=AthleteContext(fitness_level="Advanced")))

    assert "Athlete level: Advanced, Primary goal: not specified" in prompt


def test_missing_locale_uses_configured_language(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        "app.services.prompt_catalog.get_settings",
        lambda: Settings(default_language="en"),
    )

    prompt = build_analysis_prompt(_request(locale=None))

    assert "KEY INSIGHTS:" in prompt
