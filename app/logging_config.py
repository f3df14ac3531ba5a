"""Logging setup for the API server, the CLI and the test suite."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from app.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME = "assistant.log"

# Backend SDKs and HTTP transports log every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "anthropic")

_configured = False


def build_logging_config(level: str, log_dir: Path | None) -> dict:
    """
    Build a ``dictConfig`` mapping for the given level.

    Console output is always enabled. A file handler writing to
    ``<log_dir>/assistant.log`` is added when ``log_dir`` is given. Uvicorn's
    own loggers are routed through the same handlers so access logs share
    the format.
    """
    handlers: dict[str, dict] = {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    }
    if log_dir is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": str(log_dir / LOG_FILE_NAME),
            "encoding": "utf-8",
            "formatter": "standard",
        }

    loggers: dict[str, dict] = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        loggers[name] = {"level": level, "handlers": [], "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": level, "handlers": list(handlers)},
    }


def configure_logging(settings: Settings | None = None) -> None:
    """Configure logging once per process; later calls are no-ops."""

    global _configured
    if _configured:
        return

    try:
        settings = settings or get_settings()
    except ValidationError as exc:
        # Still log to the console so the configuration error is visible.
        dictConfig(build_logging_config("INFO", None))
        logging.getLogger(__name__).error("Invalid settings, file logging disabled: %s", exc)
    else:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        dictConfig(build_logging_config(settings.log_level, settings.log_dir))
        logging.getLogger(__name__).debug(
            "Logging configured | level=%s file=%s", settings.log_level, settings.log_dir / LOG_FILE_NAME
        )
    _configured = True
