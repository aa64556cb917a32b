"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from firebase_admin import auth as firebase_auth

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["ENVIRONMENT"] = "test"
os.environ["ADMIN_EMAILS"] = "admin@test.com"
os.environ["CORS_ORIGINS"] = "http://localhost:5173"
os.environ["RATE_LIMIT_COMMENTS"] = "1000/minute"
os.environ["RATE_LIMIT_COMMENT_REPORTS"] = "1000/minute"
os.environ["RATE_LIMIT_INCIDENT_REPORTS"] = "1000/minute"
os.environ.pop("SENTRY_DSN", None)

from repositories.database import get_db  # noqa: E402
from firestore_fake import FakeFirestoreDatabase  # noqa: E402

# ID tokens accepted by the patched verifier, and the claims they decode to
TEST_TOKENS = {
    "admin-token": {"uid": "admin-uid", "email": "admin@test.com"},
    "claim-admin-token": {"uid": "claim-uid", "email": "ops@test.com", "admin": True},
    "user-token": {"uid": "user-uid", "email": "someone@example.com"},
}


def fake_verify_firebase_token(token: str) -> dict:
    if token == "expired-token":
        raise firebase_auth.ExpiredIdTokenError("Token expired", cause=None)
    if token not in TEST_TOKENS:
        raise firebase_auth.InvalidIdTokenError("Invalid token")
    return dict(TEST_TOKENS[token])


@pytest.fixture(autouse=True)
def patch_token_verification(monkeypatch):
    """Never reach Firebase Auth from tests."""
    import authentication.auth as auth

    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify_firebase_token)


@pytest.fixture(scope="function")
def firestore_db() -> FakeFirestoreDatabase:
    """Fresh in-memory Firestore for each test."""
    return FakeFirestoreDatabase()


@pytest.fixture(scope="function")
def db(firestore_db):
    """Alias for firestore_db."""
    return firestore_db


@pytest.fixture(scope="function")
def client(firestore_db):
    """Create a test client with overridden database dependency."""
    from helpers.rate_limiter import limiter
    from main import app

    # Reset rate limiter storage before each test to prevent rate limit errors
    limiter.reset()

    app.dependency_overrides[get_db] = lambda: firestore_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
def user_headers() -> dict:
    """Authenticated, but not an admin."""
    return {"Authorization": "Bearer user-token"}


@pytest.fixture
def test_petition(firestore_db) -> str:
    """An active investigation with no supporters."""
    from repositories.petition_repository import PetitionRepository

    return PetitionRepository(firestore_db).create(
        {
            "brand": "Acme",
            "title": "Acme blenders overheating",
            "description": "Several blenders caught fire during normal use.",
            "status": "active",
            "blogContent": "",
        }
    )


@pytest.fixture
def test_report(firestore_db) -> str:
    """A new, unlinked incident report."""
    from repositories.incident_report_repository import IncidentReportRepository

    return IncidentReportRepository(firestore_db).create(
        {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": None,
            "brandName": "Acme",
            "category": "safety-concerns",
            "amount": 89.99,
            "issueDescription": "My blender started smoking after two minutes of use.",
            "desiredOutcome": "Refund",
        }
    )


@pytest.fixture
def make_report(firestore_db):
    """Factory for incident reports with overridable fields."""
    from repositories.incident_report_repository import IncidentReportRepository

    def _make(**fields) -> str:
        data = {
            "name": "Reporter",
            "email": "reporter@example.com",
            "brandName": "Acme",
            "category": "other",
            "amount": None,
            "issueDescription": "Something went wrong.",
            "desiredOutcome": "",
        }
        data.update(fields)
        return IncidentReportRepository(firestore_db).create(data)

    return _make
