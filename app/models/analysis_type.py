"""Closed taxonomy of analysis types."""
from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple


logger = logging.getLogger(__name__)


class AnalysisKind(str, Enum):
    """Analysis types with dedicated prompt framings and fallback texts."""

    HEALTH = "health"
    PERFORMANCE = "performance"
    TRENDS = "trends"
    GENERAL = "general"


class ResolvedAnalysisType(NamedTuple):
    kind: AnalysisKind
    label: str
    recognized: bool


DEFAULT_LABEL = "General"


def resolve_analysis_type(tag: str | None) -> ResolvedAnalysisType:
    """
    Map a free-form analysis type tag onto :class:`AnalysisKind`.

    Matching is case-insensitive. Blank tags become ``General``. Any other tag
    outside the taxonomy resolves to ``GENERAL`` with ``recognized=False`` and
    keeps its literal text as ``label`` so prompts and fallbacks can echo it.

    Example:
        >>> resolve_analysis_type("Foo")
        ResolvedAnalysisType(kind=<AnalysisKind.GENERAL: 'general'>, label='Foo', recognized=False)
    """
    label = (tag or "").strip() or DEFAULT_LABEL
    try:
        kind = AnalysisKind(label.lower())
    except ValueError:
        logger.info("Unrecognized analysis type %r - using general analysis", label)
        return ResolvedAnalysisType(AnalysisKind.GENERAL, label, False)
    return ResolvedAnalysisType(kind, label, True)
