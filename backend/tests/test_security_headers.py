"""Tests for security headers middleware.

Verifies that the SecurityHeadersMiddleware adds the API security
headers to every HTTP response.
"""

import pytest

from models.config import settings


class TestSecurityHeaders:
    """Test security headers are present in responses."""

    def test_x_content_type_options(self, client) -> None:
        """X-Content-Type-Options header should be 'nosniff'."""
        response = client.get("/api/health")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"

    def test_x_frame_options(self, client) -> None:
        response = client.get("/api/health")
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_referrer_policy(self, client) -> None:
        response = client.get("/api/health")
        assert response.headers.get("Referrer-Policy") == "no-referrer"

    def test_content_security_policy(self, client) -> None:
        """The API serves no documents, so every source is denied."""
        response = client.get("/api/health")
        csp = response.headers.get("Content-Security-Policy", "")
        assert "default-src 'none'" in csp
        assert "frame-ancestors 'none'" in csp

    def test_cache_control_default(self, client) -> None:
        """Cache-Control should default to no-store for API responses."""
        response = client.get("/api/health")
        assert response.headers.get("Cache-Control") == "no-store"

    def test_headers_on_error_response(self, client) -> None:
        """Security headers should be present even on error responses."""
        response = client.get("/api/petitions/does-not-exist")
        assert response.status_code == 404
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_correlation_id_echoed(self, client) -> None:
        response = client.get("/api/health", headers={"X-Correlation-ID": "abc12345"})
        assert response.headers.get("X-Correlation-ID") == "abc12345"


class TestHSTSHeader:
    """Test HSTS header behavior based on environment."""

    def test_hsts_not_outside_production(self, client) -> None:
        response = client.get("/api/health")
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(
        self, client, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The middleware reads settings.ENVIRONMENT at dispatch time."""
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        response = client.get("/api/health")
        hsts = response.headers.get("Strict-Transport-Security", "")
        assert "max-age=31536000" in hsts
