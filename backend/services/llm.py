from typing import Dict, Any, List
import httpx
from config.constants import LLM_CONFIG, RATE_LIMITS_PER_SECOND, RESILIENCE_CONFIG
from utils.retry import async_retry
from utils.rate_limiter import get_rate_limiter
from utils.circuit_breaker import circuit_breaker
from exceptions import LLMException
from models.backend import BackendResponse, GroundingChunk

from config import settings, logger

_gemini_limiter = get_rate_limiter("GEMINI", RATE_LIMITS_PER_SECOND.GEMINI)

WEB_SEARCH_TOOL = {"google_search": {}}


def _is_recoverable(exc: BaseException) -> bool:
    return isinstance(exc, LLMException) and exc.recoverable


def _extract_text(candidate: Dict[str, Any]) -> str:
    content = candidate.get("content") or {}
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        return ""
    return "".join(
        part.get("text", "") for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


def _extract_grounding_chunks(candidate: Dict[str, Any]) -> List[GroundingChunk]:
    metadata = candidate.get("groundingMetadata") or {}
    chunks = metadata.get("groundingChunks") or []
    return chunks if isinstance(chunks, list) else []


@circuit_breaker(
    "gemini_llm",
    failure_threshold=RESILIENCE_CONFIG.FAILURE_THRESHOLD,
    recovery_timeout=RESILIENCE_CONFIG.RECOVERY_TIMEOUT,
    should_trip=_is_recoverable
)
@async_retry(
    max_attempts=LLM_CONFIG.MAX_ATTEMPTS,
    exceptions=(LLMException,),
    should_retry=_is_recoverable
)
async def generate_grounded(prompt: str) -> BackendResponse:
    """
    Send a prompt to Gemini with Google Search grounding enabled.
    Args:
        prompt: Full prompt text, instruction template included
    Returns:
        The candidate text, its grounding chunks and the raw response body
    Raises:
        LLMException: on any transport, HTTP or response-shape failure
    """
    if not settings.GEMINI_API_KEY:
        logger.critical("GEMINI_API_KEY not configured.")
        raise LLMException("API key not configured", recoverable=False)

    await _gemini_limiter.acquire()

    headers = {"Content-Type": "application/json", "x-goog-api-key": settings.GEMINI_API_KEY}
    body = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "tools": [WEB_SEARCH_TOOL],
    }
    try:
        async with httpx.AsyncClient(timeout=LLM_CONFIG.REQUEST_TIMEOUT) as client:
            response = await client.post(settings.GEMINI_ENDPOINT, headers=headers, json=body)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error("Gemini HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text)
        status = e.response.status_code
        raise LLMException(f"HTTP {status}", recoverable=status == 429 or status >= 500)
    except httpx.RequestError as e:
        logger.error("Gemini request error for URL %s: %s", settings.GEMINI_ENDPOINT, str(e))
        raise LLMException(f"Request failed: {str(e)}", recoverable=True)
    except ValueError as e:
        logger.error("Gemini returned a non-JSON body: %s", str(e))
        raise LLMException("Malformed response body", recoverable=False)

    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        logger.error("Gemini response has no candidates: %s", data)
        raise LLMException("Response contained no candidates", recoverable=False)

    candidate = candidates[0]
    text = _extract_text(candidate)
    if not text:
        logger.error(
            "Gemini candidate has no text (finishReason=%s): %s",
            candidate.get("finishReason"),
            data
        )
        raise LLMException("Response contained no text", recoverable=False)

    return {
        "text": text,
        "grounding_chunks": _extract_grounding_chunks(candidate),
        "raw": data,
    }
