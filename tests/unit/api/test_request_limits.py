"""Tests for API request size limits and health."""

from fastapi.testclient import TestClient

from lbquote import __version__
from lbquote.api.main import app


class TestRequestSizeLimits:
    """Request body size limit."""

    def test_oversized_request_returns_413(self):
        """Request with Content-Length exceeding limit returns 413."""
        client = TestClient(app)
        response = client.post(
            "/quote/exact-in",
            json={"pool": {}, "amount": 1, "swapForX": True},
            headers={"Content-Length": str(20 * 1024 * 1024)},  # 20 MB
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"

    def test_normal_request_reaches_validation(self):
        """Normal-sized request passes the limit and hits schema validation."""
        client = TestClient(app)
        response = client.post(
            "/quote/exact-in",
            json={"pool": {}, "amount": 1, "swapForX": True},
        )
        assert response.status_code == 422


class TestHealthEndpoint:
    """Health endpoint."""

    def test_health_returns_ok(self):
        """Health endpoint returns ok status and the package version."""
        client = TestClient(app)
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}
