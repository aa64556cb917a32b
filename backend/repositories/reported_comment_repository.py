"""
Reported comment repository for Firestore operations.
"""

from typing import Any

from google.cloud.firestore_v1.base_query import FieldFilter

from repositories.base import BaseRepository
from repositories.collections import (
    ORDER_FIELDS,
    REPORTED_COMMENTS,
    ReportedCommentStatus,
)


class ReportedCommentRepository(BaseRepository):
    """Repository for the `reported_comments` collection."""

    collection_name = REPORTED_COMMENTS
    date_field = ORDER_FIELDS[REPORTED_COMMENTS]

    def create_report(
        self, petition_id: str, comment_id: str, reporter_name: str, reason: str
    ) -> str:
        """
        Record a public flag on a comment.

        Returns:
            New reported comment ID
        """
        return self.create(
            {
                "petitionId": petition_id,
                "commentId": comment_id,
                "reporterName": reporter_name,
                "reason": reason,
                "status": ReportedCommentStatus.NEW.value,
            }
        )

    def get_for_comment(self, petition_id: str, comment_id: str) -> list[dict[str, Any]]:
        """Get every report filed against one comment."""
        query = self.collection.where(
            filter=FieldFilter("petitionId", "==", petition_id)
        ).where(filter=FieldFilter("commentId", "==", comment_id))
        return [self.to_entity(snapshot) for snapshot in query.stream()]

    def update_status(self, id: str, status: ReportedCommentStatus) -> None:
        self.update(id, {"status": status.value})

    def get_for_petition(self, petition_id: str) -> list[dict[str, Any]]:
        """Get every report filed against comments of one petition."""
        query = self.collection.where(filter=FieldFilter("petitionId", "==", petition_id))
        return [self.to_entity(snapshot) for snapshot in query.stream()]
