"""
Comment service for the public comment thread of an investigation.
"""

from loguru import logger

import models.schemas as schemas
from helpers.sanitization import sanitize_plain_text
from models.config import settings
from models.exceptions import (
    CommentNotFoundException,
    PetitionNotFoundException,
    ValidationException,
)
from repositories.comment_repository import CommentRepository
from repositories.database import FirestoreDatabase
from repositories.petition_repository import PetitionRepository
from repositories.reported_comment_repository import ReportedCommentRepository


class CommentService:
    """Service for comment-related business logic."""

    @staticmethod
    def _ensure_petition(db: FirestoreDatabase, petition_id: str) -> None:
        if PetitionRepository(db).get_by_id(petition_id) is None:
            raise PetitionNotFoundException(petition_id)

    @staticmethod
    def get_comment_page(
        db: FirestoreDatabase,
        petition_id: str,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> schemas.CommentPage:
        """
        Get one page of a petition's comments, newest first.

        Args:
            db: Firestore handle
            petition_id: Petition ID
            cursor: `nextCursor` of the previous page
            page_size: Comments per page (COMMENTS_PAGE_SIZE by default)

        Returns:
            The page, the cursor for the next one and whether more exist

        Raises:
            PetitionNotFoundException: If petition not found
            InvalidCursorException: If the cursor does not name a comment
        """
        CommentService._ensure_petition(db, petition_id)
        comments, next_cursor, has_more = CommentRepository(db).get_page(
            petition_id, cursor=cursor, page_size=page_size or settings.COMMENTS_PAGE_SIZE
        )
        return schemas.CommentPage(
            comments=[schemas.Comment.model_validate(c) for c in comments],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    @staticmethod
    def add_comment(
        db: FirestoreDatabase, petition_id: str, comment: schemas.CommentCreate
    ) -> schemas.Comment:
        """
        Post a public comment.

        Raises:
            PetitionNotFoundException: If petition not found
            ValidationException: If nothing is left once markup is stripped
        """
        CommentService._ensure_petition(db, petition_id)

        author = sanitize_plain_text(comment.author)
        content = sanitize_plain_text(comment.content)
        if not author or not content:
            raise ValidationException("Name and comment are required")

        repo = CommentRepository(db)
        comment_id = repo.create(petition_id, author, content)
        logger.info(f"Comment {comment_id} posted on petition {petition_id}")

        created = repo.get_by_id(petition_id, comment_id)
        return schemas.Comment.model_validate(created)

    @staticmethod
    def report_comment(
        db: FirestoreDatabase,
        petition_id: str,
        comment_id: str,
        report: schemas.ReportedCommentCreate,
    ) -> str:
        """
        Flag a comment for moderation.

        Returns:
            ID of the reported comment record

        Raises:
            CommentNotFoundException: If the comment does not exist
        """
        if CommentRepository(db).get_by_id(petition_id, comment_id) is None:
            raise CommentNotFoundException(petition_id, comment_id)

        reporter_name = sanitize_plain_text(report.reporter_name)
        reason = sanitize_plain_text(report.reason)
        if not reporter_name or not reason:
            raise ValidationException("Name and reason are required")

        reported_id = ReportedCommentRepository(db).create_report(
            petition_id, comment_id, reporter_name, reason
        )
        logger.info(
            f"Comment {comment_id} on petition {petition_id} reported ({reported_id})"
        )
        return reported_id

    @staticmethod
    def delete_comment(db: FirestoreDatabase, petition_id: str, comment_id: str) -> None:
        """
        Delete a public comment and any reports filed against it.

        Claimant comments are refused: removing one must go through the
        unlink operation so the supporter count stays in step.

        Raises:
            CommentNotFoundException: If the comment does not exist
            ValidationException: If the comment is a claimant comment
        """
        repo = CommentRepository(db)
        comment = repo.get_by_id(petition_id, comment_id)
        if comment is None:
            raise CommentNotFoundException(petition_id, comment_id)
        if comment["isClaimant"]:
            raise ValidationException(
                "Claimant comments are removed by unlinking the claimant"
            )

        repo.delete(petition_id, comment_id)

        reported_repo = ReportedCommentRepository(db)
        for reported in reported_repo.get_for_comment(petition_id, comment_id):
            reported_repo.delete(reported["id"])

        logger.info(f"Comment {comment_id} deleted from petition {petition_id}")
