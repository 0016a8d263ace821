"""Turns the backend's tagged text reply into a ``VerificationResult``.

The backend is asked to open its reply with::

    [VERDICT: <True|False|Mixed|Unverifiable>]
    [TRUTH_PERCENTAGE: <0-100>]
    [ANALYSIS]
    <markdown>

Replies that do not follow this shape are not errors. They become a
degraded ``Unverifiable`` result that keeps the raw text in ``analysis``.
"""
from enum import Enum
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

from config import logger
from config.constants import MESSAGES, VERIFICATION_CONFIG
from models.verdicts import VERDICTS, Source, VerificationResult
from utils.parsing import (
    clamp,
    extract_tag_value,
    parse_int_value,
    tag_pattern,
    text_after_marker,
)

VERDICT_TAG = "VERDICT"
PERCENTAGE_TAG = "TRUTH_PERCENTAGE"
ANALYSIS_TAG = "ANALYSIS"

VERDICT_PATTERN = tag_pattern(VERDICT_TAG)
PERCENTAGE_PATTERN = tag_pattern(PERCENTAGE_TAG, r"(\d+)")

_CANONICAL_VERDICTS = {v.lower(): v for v in VERDICTS}


class ParseStatus(Enum):
    WELL_FORMED = "well_formed"
    DEGRADED = "degraded"


class ParsedResponse(NamedTuple):
    status: ParseStatus
    result: VerificationResult
    missing: Tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        return self.status is ParseStatus.DEGRADED


def normalize_verdict(raw: Optional[str]) -> Optional[str]:
    """Map a captured verdict onto its canonical spelling, or None if unknown."""
    if raw is None:
        return None
    return _CANONICAL_VERDICTS.get(raw.strip().lower())


def build_sources(grounding_chunks: Optional[Iterable[Any]]) -> Tuple[Source, ...]:
    """Keep the web chunks that carry both a URI and a title, in metadata order."""
    if not grounding_chunks:
        return ()

    sources: List[Source] = []
    for chunk in grounding_chunks:
        if not isinstance(chunk, dict):
            continue
        web = chunk.get("web")
        if not isinstance(web, dict):
            continue
        uri = web.get("uri")
        title = web.get("title")
        if isinstance(uri, str) and uri and isinstance(title, str) and title:
            sources.append(Source(uri=uri, title=title))
    return tuple(sources)


def degraded_analysis(raw_text: str) -> str:
    return f"{MESSAGES.DEGRADED_ANALYSIS_PREFIX}\n\n{raw_text}"


def parse_backend_response(
    text: Optional[str],
    grounding_chunks: Optional[Iterable[Any]] = None,
) -> ParsedResponse:
    """
    Parse a raw backend reply. Never raises for malformed text.
    Args:
        text: Raw reply text
        grounding_chunks: ``groundingChunks`` entries from the reply metadata, or None
    Returns:
        ParsedResponse tagged WELL_FORMED or DEGRADED
    """
    raw_text = text or ""
    sources = build_sources(grounding_chunks)

    verdict = normalize_verdict(extract_tag_value(raw_text, VERDICT_PATTERN))
    percentage = parse_int_value(extract_tag_value(raw_text, PERCENTAGE_PATTERN))
    analysis = text_after_marker(raw_text, VERIFICATION_CONFIG.ANALYSIS_MARKER) or None

    missing = tuple(
        name for name, value in (
            (VERDICT_TAG, verdict),
            (PERCENTAGE_TAG, percentage),
            (ANALYSIS_TAG, analysis),
        )
        if value is None
    )

    if missing:
        logger.warning(
            "Response format from AI is invalid, treating as Unverifiable. Missing: %s. Raw: %s",
            ", ".join(missing),
            raw_text
        )
        result = VerificationResult(
            verdict="Unverifiable",
            truth_percentage=0,
            analysis=degraded_analysis(raw_text),
            sources=sources,
        )
        return ParsedResponse(ParseStatus.DEGRADED, result, missing)

    result = VerificationResult(
        verdict=verdict,
        truth_percentage=clamp(
            percentage,
            VERIFICATION_CONFIG.MIN_TRUTH_PERCENTAGE,
            VERIFICATION_CONFIG.MAX_TRUTH_PERCENTAGE
        ),
        analysis=analysis,
        sources=sources,
    )
    return ParsedResponse(ParseStatus.WELL_FORMED, result)


def parse_verification_result(
    text: Optional[str],
    grounding_chunks: Optional[Iterable[Any]] = None,
) -> VerificationResult:
    return parse_backend_response(text, grounding_chunks).result
