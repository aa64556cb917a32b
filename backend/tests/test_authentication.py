"""
Tests for Firebase ID token authentication and the admin check.

Token verification is patched in conftest; these tests cover how decoded
claims become a FirebaseUser and how failures surface.
"""

import pytest

from authentication.auth import authenticate, is_admin_claims, require_admin
from models.exceptions import AuthenticationException, PermissionDeniedException
from models.schemas import FirebaseUser


class TestAuthenticate:
    def test_admin_by_email(self):
        user = authenticate("admin-token")
        assert user.uid == "admin-uid"
        assert user.email == "admin@test.com"
        assert user.is_admin is True

    def test_admin_by_custom_claim(self):
        user = authenticate("claim-admin-token")
        assert user.is_admin is True

    def test_regular_user(self):
        user = authenticate("user-token")
        assert user.uid == "user-uid"
        assert user.is_admin is False

    def test_missing_token(self):
        with pytest.raises(AuthenticationException, match="Authentication required"):
            authenticate(None)

    def test_expired_token(self):
        with pytest.raises(AuthenticationException, match="Session expired"):
            authenticate("expired-token")

    def test_invalid_token(self):
        with pytest.raises(AuthenticationException, match="Could not validate"):
            authenticate("garbage")


class TestAdminClaims:
    def test_email_match_is_case_insensitive(self):
        assert is_admin_claims({"email": "Admin@Test.com"}) is True

    def test_claim_must_be_true(self):
        assert is_admin_claims({"admin": "yes", "email": "x@example.com"}) is False

    def test_no_email(self):
        assert is_admin_claims({"uid": "abc"}) is False


class TestRequireAdmin:
    def test_passes_admin_through(self):
        user = FirebaseUser(uid="a", email="admin@test.com", is_admin=True)
        assert require_admin(user) is user

    def test_rejects_non_admin(self):
        with pytest.raises(PermissionDeniedException):
            require_admin(FirebaseUser(uid="u", email="u@example.com"))


class TestAdminRoutesRequireAuth:
    def test_no_token_is_401(self, client):
        response = client.get("/api/admin/stats")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_non_admin_is_403(self, client, user_headers):
        response = client.get("/api/admin/stats", headers=user_headers)
        assert response.status_code == 403

    def test_admin_allowed(self, client, admin_headers):
        response = client.get("/api/admin/stats", headers=admin_headers)
        assert response.status_code == 200
