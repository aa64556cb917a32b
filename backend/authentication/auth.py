"""
Firebase Authentication for the admin API and the callable endpoints.

Callers send a Firebase ID token as a Bearer token. Admins are users with an
`admin: true` custom claim or an email listed in ADMIN_EMAILS.
"""

from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth

import models.schemas as schemas
from models.config import settings
from models.exceptions import AuthenticationException, PermissionDeniedException
from repositories.database import get_firebase_app

bearer_scheme = HTTPBearer(auto_error=False)


def verify_firebase_token(token: str) -> dict[str, Any]:
    """Verify a Firebase ID token and return its decoded claims."""
    return firebase_auth.verify_id_token(token, app=get_firebase_app())


def is_admin_claims(claims: dict[str, Any]) -> bool:
    if claims.get("admin") is True:
        return True
    email = (claims.get("email") or "").lower()
    return bool(email) and email in {e.lower() for e in settings.ADMIN_EMAILS}


def authenticate(token: Optional[str]) -> schemas.FirebaseUser:
    """
    Resolve a raw ID token to the calling user.

    Raises:
        AuthenticationException: If the token is missing, expired or invalid.
    """
    if not token:
        raise AuthenticationException("Authentication required")

    try:
        claims = verify_firebase_token(token)
    except firebase_auth.ExpiredIdTokenError:
        raise AuthenticationException("Session expired. Please sign in again.")
    except (ValueError, firebase_auth.InvalidIdTokenError):
        raise AuthenticationException("Could not validate credentials")

    return schemas.FirebaseUser(
        uid=claims.get("uid") or claims.get("sub", ""),
        email=claims.get("email"),
        is_admin=is_admin_claims(claims),
    )


def require_admin(user: schemas.FirebaseUser) -> schemas.FirebaseUser:
    """
    Raises:
        PermissionDeniedException: If the user is not an administrator.
    """
    if not user.is_admin:
        raise PermissionDeniedException("Administrator access required")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> schemas.FirebaseUser:
    """
    Get the current user from the Firebase ID token.

    Raises:
        AuthenticationException: If credentials are missing or invalid.
    """
    return authenticate(credentials.credentials if credentials else None)


async def get_admin_user(
    current_user: schemas.FirebaseUser = Depends(get_current_user),
) -> schemas.FirebaseUser:
    """
    Require admin permissions.

    Raises:
        PermissionDeniedException: If the user is not an admin.
    """
    return require_admin(current_user)
