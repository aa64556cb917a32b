"""
Callable endpoints for privileged admin writes.

Speaks the Firebase callable protocol so the admin console can keep using
`httpsCallable`: the request body is {"data": {...}}, a success answers
{"result": {...}} and a failure {"error": {"status": ..., "message": ...}}.
"""

from collections.abc import Callable
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from google.api_core.exceptions import GoogleAPIError
from loguru import logger

import authentication.auth as auth
import models.schemas as schemas
from models.exceptions import (
    AuthenticationException,
    CallableException,
    DomainException,
    NotFoundException,
    PermissionDeniedException,
    ValidationException,
)
from repositories.database import FirestoreDatabase, get_db
from services import AdminWriteService

router = APIRouter(prefix="/callable", tags=["callable"])

# Domain exception -> canonical callable status, most specific first
CALLABLE_STATUS: tuple[tuple[type[DomainException], str], ...] = (
    (AuthenticationException, "UNAUTHENTICATED"),
    (PermissionDeniedException, "PERMISSION_DENIED"),
    (ValidationException, "INVALID_ARGUMENT"),
    (NotFoundException, "NOT_FOUND"),
)


def callable_error(exc: CallableException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": {"status": exc.status, "message": exc.message}},
        headers={"X-Correlation-ID": exc.correlation_id},
    )


def run_callable(
    name: str,
    credentials: Optional[HTTPAuthorizationCredentials],
    handler: Callable[[], schemas.CallableResult],
    failure_message: str,
) -> Any:
    """
    Authenticate an admin, run a callable handler and wrap the outcome.

    Store failures are logged and answered with a generic INTERNAL error.
    """
    try:
        user = auth.require_admin(
            auth.authenticate(credentials.credentials if credentials else None)
        )
        result = handler()
    except DomainException as e:
        for exc_type, code in CALLABLE_STATUS:
            if isinstance(e, exc_type):
                logger.warning(f"Callable {name} rejected ({code}): {e.message}")
                return callable_error(CallableException(code, e.message))
        logger.error(f"Callable {name} failed: {e.message}")
        return callable_error(CallableException("INTERNAL", failure_message))
    except GoogleAPIError as e:
        logger.error(f"Callable {name} store error: {e!r}")
        return callable_error(CallableException("INTERNAL", failure_message))

    logger.info(f"Callable {name} by {user.uid}: {result.message}")
    return schemas.CallableResponse(result=result)


@router.post("/updateAdminDocument", response_model=schemas.CallableResponse)
def update_admin_document(
    request: schemas.CallableRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(auth.bearer_scheme),
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Update whitelisted fields of a petition or blog article.

    data: {collectionName, id, updates}
    """
    return run_callable(
        "updateAdminDocument",
        credentials,
        lambda: AdminWriteService.update_document(db, request.data),
        "Server failed to execute the update operation.",
    )


@router.post("/addTimelineLog", response_model=schemas.CallableResponse)
def add_timeline_log(
    request: schemas.CallableRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(auth.bearer_scheme),
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Append one entry to a petition's timeline (set-union semantics).

    data: {petitionId, updateObject: {id, title, content, date}}
    """
    return run_callable(
        "addTimelineLog",
        credentials,
        lambda: AdminWriteService.add_timeline_log(db, request.data),
        "Server failed to add timeline update.",
    )
