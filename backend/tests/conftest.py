import pytest
import os
import sys
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ.setdefault("GEMINI_API_KEY", "test_gemini_key")
os.environ.setdefault("GEMINI_MODEL", "gemini-2.5-flash")


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Point the shared settings at a test key and model."""
    from config import settings

    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test_gemini_key")
    monkeypatch.setattr(settings, "GEMINI_MODEL", "gemini-2.5-flash")
    return settings


@pytest.fixture(autouse=True)
def reset_gemini_guards():
    """Close the Gemini circuit breaker and skip rate limiting between tests."""
    from services import llm

    llm.generate_grounded._circuit_breaker.reset()
    with patch.object(llm._gemini_limiter, "acquire", AsyncMock()):
        yield
    llm.generate_grounded._circuit_breaker.reset()


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)


@pytest.fixture
def well_formed_text():
    return (
        "[VERDICT: True]\n"
        "[TRUTH_PERCENTAGE: 95]\n"
        "[ANALYSIS]\n"
        "The claim is supported by multiple sources."
    )


@pytest.fixture
def sample_grounding_chunks():
    return [
        {"web": {"uri": "https://example.org/a", "title": "Example A"}},
        {"web": {"uri": "https://example.org/b", "title": ""}},
        {"retrievedContext": {"uri": "gs://bucket/doc"}},
        {"web": {"uri": "https://example.org/c", "title": "Example C"}},
    ]


@pytest.fixture
def sample_gemini_response(well_formed_text, sample_grounding_chunks):
    """Sample grounded Gemini generateContent response."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [{"text": well_formed_text}]
                },
                "finishReason": "STOP",
                "groundingMetadata": {
                    "webSearchQueries": ["eiffel tower height"],
                    "groundingChunks": sample_grounding_chunks,
                }
            }
        ]
    }


@pytest.fixture
def mock_httpx_client():
    """Build a mocked httpx.AsyncClient whose post returns ``payload``."""
    def factory(payload=None, side_effect=None):
        mock_client = MagicMock()
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = payload
        mock_response.raise_for_status = MagicMock()
        if side_effect is not None:
            mock_client.post = AsyncMock(side_effect=side_effect)
        else:
            mock_client.post = AsyncMock(return_value=mock_response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        return mock_client
    return factory
