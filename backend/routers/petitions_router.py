from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

import models.schemas as schemas
from helpers.pagination import CommentCursor, CommentPageSize
from helpers.rate_limiter import limiter
from models.config import settings
from repositories.database import FirestoreDatabase, get_db
from services import CommentService, PetitionService

router = APIRouter(prefix="/petitions", tags=["petitions"])


@router.get("", response_model=schemas.PetitionListResponse)
def list_petitions(
    search: Optional[str] = Query(None, max_length=200),
    brand: Optional[str] = Query(None, max_length=120),
    db: FirestoreDatabase = Depends(get_db),
):
    """
    List investigations, newest first.

    `search` matches brand and title case-insensitively; `brand` keeps one
    brand ("all" keeps every brand).
    """
    return PetitionService.list_petitions(db, search=search, brand=brand)


@router.get("/{petition_id}", response_model=schemas.Petition)
def get_petition(petition_id: str, db: FirestoreDatabase = Depends(get_db)):
    """
    Get an investigation with its timeline.

    Domain exceptions are caught by centralized exception handlers.
    """
    return PetitionService.get_petition(db, petition_id)


@router.get("/{petition_id}/comments", response_model=schemas.CommentPage)
def get_comments(
    petition_id: str,
    cursor: CommentCursor = None,
    page_size: CommentPageSize = None,
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Get one page of comments, newest first.

    Pass the returned `nextCursor` to fetch the following page.
    """
    return CommentService.get_comment_page(
        db, petition_id, cursor=cursor, page_size=page_size
    )


@router.post(
    "/{petition_id}/comments",
    response_model=schemas.Comment,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(lambda: settings.RATE_LIMIT_COMMENTS)
def add_comment(
    request: Request,
    petition_id: str,
    comment: schemas.CommentCreate,
    db: FirestoreDatabase = Depends(get_db),
):
    """Post a public comment on an investigation."""
    return CommentService.add_comment(db, petition_id, comment)


@router.post(
    "/{petition_id}/comments/{comment_id}/report",
    response_model=schemas.MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(lambda: settings.RATE_LIMIT_COMMENT_REPORTS)
def report_comment(
    request: Request,
    petition_id: str,
    comment_id: str,
    report: schemas.ReportedCommentCreate,
    db: FirestoreDatabase = Depends(get_db),
):
    """Flag a comment for review by the moderators."""
    CommentService.report_comment(db, petition_id, comment_id, report)
    return {"message": "Thank you. The comment has been reported for review."}
