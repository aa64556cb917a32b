"""Tests for Sentry configuration: PII scrubbing, trace filtering and sampling."""

import os
from typing import Any
from unittest.mock import patch

import pytest

from core.sentry_config import (
    PII_FIELDS,
    _before_send,
    _before_send_transaction,
    _traces_sampler,
    init_sentry,
)


def incident_report_event() -> dict[str, Any]:
    return {
        "user": {
            "id": "admin-uid",
            "email": "admin@test.com",
            "username": "admin",
            "ip_address": "203.0.113.7",
        },
        "request": {
            "url": "/api/reports",
            "cookies": {"session": "secret"},
            "headers": {
                "Authorization": "Bearer id-token",
                "Content-Type": "application/json",
            },
            "data": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "phone": "555-0100",
                "brandName": "Acme",
                "issueDescription": "Blender caught fire",
            },
        },
    }


class TestBeforeSend:
    def test_user_identity_removed(self) -> None:
        result = _before_send(incident_report_event(), {})  # type: ignore[arg-type]
        assert result is not None
        user = result["user"]  # type: ignore[typeddict-item]
        assert user == {"id": "admin-uid", "ip_address": "{{auto}}"}

    def test_cookies_and_token_removed(self) -> None:
        result = _before_send(incident_report_event(), {})  # type: ignore[arg-type]
        assert result is not None
        request = result["request"]  # type: ignore[typeddict-item]
        assert "cookies" not in request
        assert request["headers"]["Authorization"] == "[Filtered]"
        assert request["headers"]["Content-Type"] == "application/json"

    def test_reporter_identity_filtered_from_body(self) -> None:
        result = _before_send(incident_report_event(), {})  # type: ignore[arg-type]
        assert result is not None
        data = result["request"]["data"]  # type: ignore[typeddict-item]
        for field in ("name", "email", "phone"):
            assert data[field] == "[Filtered]"
        assert data["brandName"] == "Acme"
        assert data["issueDescription"] == "Blender caught fire"

    def test_claimant_fields_are_scrubbed_too(self) -> None:
        assert {"claimantName", "claimantEmail", "reporterName"} <= set(PII_FIELDS)

    def test_non_dict_body_left_alone(self) -> None:
        event: dict[str, Any] = {"request": {"url": "/api/reports", "data": "raw"}}
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result is not None
        assert result["request"]["data"] == "raw"  # type: ignore[typeddict-item, index]

    def test_bare_event_passes_through(self) -> None:
        event: dict[str, Any] = {"message": "Test error"}
        assert _before_send(event, {}) == {"message": "Test error"}  # type: ignore[arg-type]


class TestBeforeSendTransaction:
    @pytest.mark.parametrize(
        "name", ["/health", "/api/health", "GET /health", "GET /api/health"]
    )
    def test_health_checks_dropped(self, name: str) -> None:
        assert _before_send_transaction({"transaction": name}, {}) is None  # type: ignore[arg-type, typeddict-item]

    def test_other_transactions_kept(self) -> None:
        event: dict[str, Any] = {"transaction": "/api/petitions"}
        assert _before_send_transaction(event, {}) is event  # type: ignore[arg-type]


class TestTracesSampler:
    @pytest.mark.parametrize(
        "path, rate",
        [
            ("/api/health", 0.0),
            ("/api/admin/reports/triage", 0.5),
            ("/api/callable/updateAdminDocument", 0.5),
            ("/api/petitions", 0.2),
            ("/api/reports", 0.2),
        ],
    )
    def test_rate_by_path(self, path: str, rate: float) -> None:
        assert _traces_sampler({"asgi_scope": {"path": path}}) == rate

    def test_parent_decision_respected(self) -> None:
        context = {"parent_sampled": True, "asgi_scope": {"path": "/api/petitions"}}
        assert _traces_sampler(context) == 1.0

    def test_missing_scope_uses_default(self) -> None:
        assert _traces_sampler({}) == 0.2


class TestInitSentry:
    def test_no_dsn_no_init(self) -> None:
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(os.environ, {}, clear=True):
                init_sentry()
        mock_init.assert_not_called()

    def test_configured_from_environment(self) -> None:
        env = {
            "SENTRY_DSN": "https://test@o0.ingest.sentry.io/0",
            "ENVIRONMENT": "production",
            "SENTRY_RELEASE": "1.2.3",
        }
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(os.environ, env, clear=True):
                init_sentry()
        kwargs = mock_init.call_args.kwargs
        assert kwargs["dsn"] == env["SENTRY_DSN"]
        assert kwargs["environment"] == "production"
        assert kwargs["release"] == "1.2.3"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _before_send

    def test_defaults(self) -> None:
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(
                os.environ, {"SENTRY_DSN": "https://test@o0.ingest.sentry.io/0"}, clear=True
            ):
                init_sentry()
        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "development"
        assert kwargs["release"] == "unknown"
