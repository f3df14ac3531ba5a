"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from app.logging_config import configure_logging

configure_logging()

from app.main import app
from app.models.schemas import AnalysisRequest, WorkoutRecord
from app.services.provider_router import ProviderRouter


class FakeProvider:
    """In-memory capability recording which operation was invoked."""

    def __init__(
        self,
        response: str | None = None,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def _respond(self, operation: str, prompt: str) -> str:
        self.calls.append((operation, prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response or ""

    async def get_fitness_analysis(self, prompt: str) -> str:
        return await self._respond("fitness", prompt)

    async def get_health_analysis(self, prompt: str) -> str:
        return await self._respond("health", prompt)

    async def get_motivation(self, prompt: str) -> str:
        return await self._respond("motivation", prompt)


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Factory for fake capabilities."""

    return FakeProvider


@pytest.fixture
def make_router() -> Callable[..., ProviderRouter]:
    """Build a router over fake capabilities; ``googlegemini`` is the default."""

    def _make(default: str = "googlegemini", **providers: FakeProvider) -> ProviderRouter:
        registry: dict[str, Any] = {"googlegemini": FakeProvider(), "huggingface": FakeProvider()}
        registry.update(providers)
        return ProviderRouter(registry, default)

    return _make


@pytest.fixture
def two_workout_request() -> Callable[..., AnalysisRequest]:
    """Two workouts: 5 km / 30 min / 300 kcal and 3 km / 20 min / 250 kcal."""

    def _make(analysis_type: str = "Health", locale: str | None = "en") -> AnalysisRequest:
        return AnalysisRequest(
            recent_workouts=[
                WorkoutRecord(
                    date=date(2025, 5, 1),
                    activity_type="Run",
                    distance=5000,
                    duration=1800,
                    calories=300,
                ),
                WorkoutRecord(
                    date=date(2025, 5, 3),
                    activity_type="Ride",
                    distance=3000,
                    duration=1200,
                    calories=250,
                ),
            ],
            analysis_type=analysis_type,
            locale=locale,
        )

    return _make
