"""
Service for admin moderation of reported comments.
"""

from typing import List

from loguru import logger

import models.schemas as schemas
from models.exceptions import (
    ReportedCommentAlreadyReviewedException,
    ReportedCommentNotFoundException,
    ValidationException,
)
from repositories.collections import ReportedCommentStatus
from repositories.comment_repository import CommentRepository
from repositories.database import FirestoreDatabase
from repositories.reported_comment_repository import ReportedCommentRepository


class ModerationService:
    """Service for admin moderation operations."""

    @staticmethod
    def get_reported_comments(
        db: FirestoreDatabase,
        status: ReportedCommentStatus | None = None,
    ) -> List[schemas.ReportedComment]:
        """
        List reported comments, newest first.

        Args:
            db: Firestore handle
            status: Keep only reports in this status

        Returns:
            Reported comments
        """
        reported = [
            schemas.ReportedComment.model_validate(entity)
            for entity in ReportedCommentRepository(db).get_all()
        ]
        if status is not None:
            reported = [r for r in reported if r.status == status]
        return reported

    @staticmethod
    def _get(db: FirestoreDatabase, reported_id: str) -> schemas.ReportedComment:
        entity = ReportedCommentRepository(db).get_by_id(reported_id)
        if entity is None:
            raise ReportedCommentNotFoundException(reported_id)
        return schemas.ReportedComment.model_validate(entity)

    @staticmethod
    def review(
        db: FirestoreDatabase,
        reported_id: str,
        status: ReportedCommentStatus,
    ) -> schemas.ReportedComment:
        """
        Move a report out of `new`.

        Statuses only move forward: new -> reviewed or new -> action_taken.

        Raises:
            ReportedCommentNotFoundException: If the record does not exist
            ValidationException: If the target status is `new`
            ReportedCommentAlreadyReviewedException: If already reviewed
        """
        if status == ReportedCommentStatus.NEW:
            raise ValidationException("A reported comment cannot be reset to new")

        reported = ModerationService._get(db, reported_id)
        if reported.status != ReportedCommentStatus.NEW:
            raise ReportedCommentAlreadyReviewedException(
                reported_id, reported.status.value
            )

        ReportedCommentRepository(db).update_status(reported_id, status)
        logger.info(f"Reported comment {reported_id} marked {status.value}")
        return ModerationService._get(db, reported_id)

    @staticmethod
    def remove_comment(db: FirestoreDatabase, reported_id: str) -> None:
        """
        Take action on a report: delete the flagged comment and the report.

        Other reports filed against the same comment are dismissed too. A
        comment that is already gone only clears the reports.

        Raises:
            ReportedCommentNotFoundException: If the record does not exist
            ValidationException: If the flagged comment is a claimant comment
        """
        reported = ModerationService._get(db, reported_id)

        comment_repo = CommentRepository(db)
        comment = comment_repo.get_by_id(reported.petition_id, reported.comment_id)
        if comment is not None:
            if comment["isClaimant"]:
                raise ValidationException(
                    "Claimant comments are removed by unlinking the claimant"
                )
            comment_repo.delete(reported.petition_id, reported.comment_id)

        reported_repo = ReportedCommentRepository(db)
        siblings = reported_repo.get_for_comment(
            reported.petition_id, reported.comment_id
        )
        for record in siblings:
            reported_repo.delete(record["id"])
        if not any(record["id"] == reported_id for record in siblings):
            reported_repo.delete(reported_id)

        logger.info(
            f"Moderation: comment {reported.comment_id} removed from petition "
            f"{reported.petition_id} (report {reported_id})"
        )

    @staticmethod
    def count_pending(db: FirestoreDatabase) -> int:
        return len(
            ModerationService.get_reported_comments(db, ReportedCommentStatus.NEW)
        )
