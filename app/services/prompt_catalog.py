"""Loading and language selection for the YAML prompt catalog."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from app.config import get_settings


logger = logging.getLogger(__name__)


@lru_cache()
def load_prompt_catalog(path: Path) -> dict[str, Any]:
    """Read the prompt catalog once per path."""

    with Path(path).open("r", encoding="utf-8") as fh:
        catalog = yaml.safe_load(fh)
    logger.debug("Loaded prompt catalog from %s (%d languages)", path, len(catalog.get("translations", {})))
    return catalog


def resolve_language(
    locale: str | None,
    translations: dict[str, Any],
    default_language: str,
) -> str:
    """Normalize requested locale to a supported translation key."""

    if locale:
        normalized = locale.strip().lower().replace("_", "-")
        candidates = [normalized]
        if "-" in normalized:
            candidates.append(normalized.split("-")[0])
        for candidate in candidates:
            if candidate in translations:
                return candidate

    if default_language in translations:
        return default_language

    if "en" in translations:
        return "en"

    return next(iter(translations))


def get_translation(locale: str | None) -> tuple[str, dict[str, Any]]:
    """Return ``(language, texts)`` for the requested locale using configured defaults."""

    settings = get_settings()
    catalog = load_prompt_catalog(settings.prompt_config_path)
    translations = catalog["translations"]
    language = resolve_language(locale, translations, settings.default_language)
    return language, translations[language]
