"""Heuristic parser for free-form workout analysis replies.

Model output has no enforced schema. Replies may be German or English, may
skip or reorder sections, or may be cut off mid-sentence. Parsing works in two
phases: sections anchored on known header tokens first, then a line-based
heuristic. The parser never raises; malformed input only degrades the result.
"""
from __future__ import annotations

import re
from typing import Iterable, NamedTuple


ANALYSIS = "analysis"
INSIGHTS = "insights"
RECOMMENDATIONS = "recommendations"


class HeaderToken(NamedTuple):
    language: str
    section: str
    token: str


# Priority within a section follows table order; the first entry per
# (language, section) is the canonical header requested in prompts.
HEADER_TOKENS: tuple[HeaderToken, ...] = (
    HeaderToken("de", ANALYSIS, "ANALYSE:"),
    HeaderToken("de", ANALYSIS, "GESUNDHEITSANALYSE:"),
    HeaderToken("de", ANALYSIS, "LEISTUNGSANALYSE:"),
    HeaderToken("de", ANALYSIS, "TRENDANALYSE:"),
    HeaderToken("en", ANALYSIS, "ANALYSIS:"),
    HeaderToken("en", ANALYSIS, "HEALTH ANALYSIS:"),
    HeaderToken("en", ANALYSIS, "PERFORMANCE ANALYSIS:"),
    HeaderToken("en", ANALYSIS, "TRENDS ANALYSIS:"),
    HeaderToken("de", INSIGHTS, "WICHTIGE ERKENNTNISSE:"),
    HeaderToken("en", INSIGHTS, "KEY INSIGHTS:"),
    HeaderToken("en", INSIGHTS, "INSIGHTS:"),
    HeaderToken("de", INSIGHTS, "ERKENNTNISSE:"),
    HeaderToken("de", RECOMMENDATIONS, "EMPFEHLUNGEN:"),
    HeaderToken("en", RECOMMENDATIONS, "RECOMMENDATIONS:"),
    HeaderToken("en", RECOMMENDATIONS, "ADVICE:"),
    HeaderToken("de", RECOMMENDATIONS, "RATSCHLÄGE:"),
)

DEFAULT_ANALYSIS = "Unable to generate analysis at this time. Please try again later."
GENERIC_ANALYSIS = (
    "Your recent training shows steady commitment. "
    "Keep your current routine and focus on gradual, consistent progress."
)

MIN_ANALYSIS_LENGTH = 20
MAX_ANALYSIS_LENGTH = 400
MAX_ANALYSIS_SENTENCES = 4
MAX_LEADING_LINES = 5

MAX_LIST_ITEMS = 5
MIN_ITEM_LENGTH = 15
MAX_ITEM_LENGTH = 200
_ITEM_MARKERS = "-*•0123456789. "


class ParsedAnalysis(NamedTuple):
    analysis: str
    key_insights: list[str] | None
    recommendations: list[str] | None


def headers_for(*sections: str) -> list[HeaderToken]:
    """Header tokens of the given sections in priority order."""
    return [header for header in HEADER_TOKENS if header.section in sections]


def canonical_header(language: str, section: str) -> str:
    for header in HEADER_TOKENS:
        if header.language == language and header.section == section:
            return header.token
    raise KeyError(f"No {section} header for language {language!r}")


def _search(text: str, token: str) -> re.Match[str] | None:
    return re.search(re.escape(token), text, re.IGNORECASE)


def _text_after(text: str, token: str) -> str | None:
    match = _search(text, token)
    return text[match.end():] if match else None


def _cut_at_first(text: str, headers: Iterable[HeaderToken]) -> str:
    """Cut ``text`` at the earliest occurrence of any of ``headers``."""
    positions = [match.start() for match in (_search(text, h.token) for h in headers) if match]
    return text[: min(positions)] if positions else text


def parse_analysis_response(raw: str | None) -> ParsedAnalysis:
    """Split a model reply into analysis text, key insights and recommendations."""

    return ParsedAnalysis(
        analysis=extract_analysis(raw),
        key_insights=extract_list_section(raw, INSIGHTS),
        recommendations=extract_list_section(raw, RECOMMENDATIONS),
    )


def extract_analysis(raw: str | None) -> str:
    """
    Extract the narrative analysis from a model reply.

    The text following the highest-priority analysis header is used when it
    is long enough. Otherwise the leading lines of the reply are used, up to
    the first insights or recommendations header. The result never exceeds
    ``MAX_ANALYSIS_LENGTH`` characters unless it has no sentence breaks.
    """
    if raw is None or not raw.strip():
        return DEFAULT_ANALYSIS

    analysis = _extract_headed_analysis(raw) or _extract_leading_lines(raw)
    return _limit_length(analysis)


def _extract_headed_analysis(raw: str) -> str | None:
    for header in headers_for(ANALYSIS):
        section = _text_after(raw, header.token)
        if section is None:
            continue
        section = _cut_at_first(section, headers_for(INSIGHTS, RECOMMENDATIONS)).strip()
        return section if len(section) > MIN_ANALYSIS_LENGTH else None
    return None


def _extract_leading_lines(raw: str) -> str:
    stop_markers = tuple(header.token.lower() for header in headers_for(INSIGHTS, RECOMMENDATIONS))
    lines: list[str] = []
    for line in raw.splitlines():
        clean = line.strip()
        if not clean:
            continue
        if clean.lower().startswith(stop_markers):
            break
        lines.append(clean)
        if len(lines) >= MAX_LEADING_LINES:
            break
    return " ".join(lines) if lines else GENERIC_ANALYSIS


def _limit_length(analysis: str) -> str:
    if len(analysis) <= MAX_ANALYSIS_LENGTH:
        return analysis
    sentences = [sentence.strip() for sentence in analysis.split(".") if sentence.strip()]
    return ". ".join(sentences[:MAX_ANALYSIS_SENTENCES]) + "."


def extract_list_section(raw: str | None, section: str) -> list[str] | None:
    """
    Extract up to five bullet items below the first matching ``section`` header.

    Only the highest-priority header found is used. Its content ends where any
    other known header begins. Returns ``None`` when no header matches or no
    line qualifies as an item.
    """
    if raw is None or not raw.strip():
        return None

    for header in headers_for(section):
        body = _text_after(raw, header.token)
        if body is None:
            continue
        others = [other for other in HEADER_TOKENS if other.token != header.token]
        items = _parse_items(_cut_at_first(body, others))
        return items or None
    return None


def _parse_items(body: str) -> list[str]:
    items: list[str] = []
    for line in body.splitlines():
        item = line.strip().lstrip(_ITEM_MARKERS).strip()
        if MIN_ITEM_LENGTH < len(item) < MAX_ITEM_LENGTH:
            items.append(item)
            if len(items) >= MAX_LIST_ITEMS:
                break
    return items
