import pytest
from unittest.mock import AsyncMock

from exceptions import LLMException
from services.orchestrator import RequestOrchestrator


@pytest.fixture
def override_backend():
    """Serve /verify through an orchestrator backed by ``backend``."""
    import main

    def install(backend):
        main.app.dependency_overrides[main.get_orchestrator] = lambda: RequestOrchestrator(generate=backend)
        return backend

    yield install
    main.app.dependency_overrides.clear()


class TestHealthCheckEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, test_client):
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "ClaimCheck" in data["message"]

    def test_request_id_is_echoed(self, test_client):
        response = test_client.get("/", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert "X-Response-Time" in response.headers


class TestVerifyEndpoint:
    """Tests for the /verify endpoint."""

    def test_verify_empty_claim(self, test_client, override_backend):
        backend = override_backend(AsyncMock())

        response = test_client.post("/verify", json={"claim": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a claim to verify."
        backend.assert_not_called()

    def test_verify_missing_claim(self, test_client):
        response = test_client.post("/verify", json={})

        assert response.status_code == 422

    def test_verify_successful(self, test_client, override_backend, well_formed_text, sample_grounding_chunks):
        override_backend(AsyncMock(return_value={
            "text": well_formed_text,
            "grounding_chunks": sample_grounding_chunks,
            "raw": {},
        }))

        response = test_client.post("/verify", json={"claim": "The Eiffel Tower is in Paris."})

        assert response.status_code == 200
        data = response.json()
        assert data["verdict"] == "True"
        assert data["truth_percentage"] == 95
        assert data["analysis"] == "The claim is supported by multiple sources."
        assert data["sources"] == [
            {"uri": "https://example.org/a", "title": "Example A"},
            {"uri": "https://example.org/c", "title": "Example C"},
        ]

    def test_verify_degraded(self, test_client, override_backend):
        override_backend(AsyncMock(return_value={"text": "I cannot verify this.", "grounding_chunks": [], "raw": {}}))

        response = test_client.post("/verify", json={"claim": "Who took my wallet?"})

        assert response.status_code == 200
        data = response.json()
        assert data["verdict"] == "Unverifiable"
        assert data["truth_percentage"] == 0
        assert "I cannot verify this." in data["analysis"]

    def test_verify_backend_failure(self, test_client, override_backend):
        override_backend(AsyncMock(side_effect=LLMException("HTTP 503")))

        response = test_client.post("/verify", json={"claim": "Some claim"})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail.startswith("Failed to get a response from the AI")
        assert "503" not in detail


class TestPlainTextEndpoint:

    def test_strips_markup(self, test_client):
        response = test_client.post("/verify/plain-text", json={"text": "<p>Plain <b>text</b></p>"})

        assert response.status_code == 200
        assert response.json() == {"text": "Plain text"}


class TestVerifyErrorMapping:
    """Every failure is settled by the orchestrator and mapped per route."""

    def test_over_long_claim_is_bad_request(self, test_client, override_backend):
        backend = override_backend(AsyncMock())

        response = test_client.post("/verify", json={"claim": "x" * 5001})

        assert response.status_code == 400
        assert response.json()["detail"] == "Claim cannot exceed 5000 characters"
        backend.assert_not_called()

    def test_unexpected_backend_error_is_bad_gateway(self, test_client, override_backend):
        override_backend(AsyncMock(side_effect=RuntimeError("socket closed")))

        response = test_client.post("/verify", json={"claim": "Some claim"})

        assert response.status_code == 502
        assert "socket closed" not in response.json()["detail"]
