"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.logging_config import configure_logging
from app.routers import motivation, workout_analysis
from app.services.provider_router import get_provider_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup; close backend clients on shutdown."""
    configure_logging()
    settings = get_settings()
    logger.info(
        "Starting workout analysis assistant | default_provider=%s language=%s",
        settings.default_ai_provider,
        settings.default_language,
    )
    yield
    if get_provider_router.cache_info().currsize:
        await get_provider_router().aclose()
    logger.info("Workout analysis assistant stopped")


app = FastAPI(title="Workout Analysis Assistant API", lifespan=lifespan)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


app.include_router(workout_analysis.router)
app.include_router(motivation.router)
