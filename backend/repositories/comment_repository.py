"""
Comment repository for the `petitions/{id}/comments` subcollection.
"""

from typing import Any

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from helpers.time_utils import timestamp_to_iso
from models.exceptions import InvalidCursorException
from repositories.collections import COMMENTS, PETITIONS
from repositories.database import FirestoreDatabase


class CommentRepository:
    """Repository for petition comments."""

    date_field = "date"

    def __init__(self, db: FirestoreDatabase):
        """
        Initialize comment repository.

        Args:
            db: Firestore handle
        """
        self.db = db

    def comments(self, petition_id: str) -> Any:
        """Collection handle for one petition's comments."""
        return self.db.document(PETITIONS, petition_id).collection(COMMENTS)

    def to_entity(self, snapshot: Any) -> dict[str, Any]:
        data = snapshot.to_dict() or {}
        entity = {**data, "id": snapshot.id}
        entity["date"] = timestamp_to_iso(data.get("date"))
        entity["isClaimant"] = bool(data.get("isClaimant", False))
        return entity

    def get_by_id(self, petition_id: str, comment_id: str) -> dict[str, Any] | None:
        snapshot = self.comments(petition_id).document(comment_id).get()
        if not snapshot.exists:
            return None
        return self.to_entity(snapshot)

    def get_page(
        self,
        petition_id: str,
        cursor: str | None = None,
        page_size: int = 10,
    ) -> tuple[list[dict[str, Any]], str | None, bool]:
        """
        Get one page of comments, newest first.

        Args:
            petition_id: Petition ID
            cursor: ID of the last comment of the previous page, None for
                the first page
            page_size: Comments per page

        Returns:
            Tuple of (comments, cursor for the next page, more pages exist)

        Raises:
            InvalidCursorException: If the cursor does not name a comment
        """
        query = self.comments(petition_id).order_by(
            self.date_field, direction=firestore.Query.DESCENDING
        )

        if cursor:
            cursor_snapshot = self.comments(petition_id).document(cursor).get()
            if not cursor_snapshot.exists:
                raise InvalidCursorException(cursor)
            query = query.start_after(cursor_snapshot)

        # One extra document tells whether another page exists
        snapshots = list(query.limit(page_size + 1).stream())
        has_more = len(snapshots) > page_size
        page = [self.to_entity(snapshot) for snapshot in snapshots[:page_size]]
        next_cursor = page[-1]["id"] if page and has_more else None
        return page, next_cursor, has_more

    def get_claimants(self, petition_id: str) -> list[dict[str, Any]]:
        """Get the claimant comments of a petition, newest first."""
        query = (
            self.comments(petition_id)
            .where(filter=FieldFilter("isClaimant", "==", True))
            .order_by(self.date_field, direction=firestore.Query.DESCENDING)
        )
        return [self.to_entity(snapshot) for snapshot in query.stream()]

    def create(self, petition_id: str, author: str, content: str) -> str:
        """
        Create a public (non-claimant) comment.

        Args:
            petition_id: Petition ID
            author: Display name entered by the commenter
            content: Comment text

        Returns:
            New comment ID
        """
        _, doc_ref = self.comments(petition_id).add(
            {
                "author": author,
                "content": content,
                "date": firestore.SERVER_TIMESTAMP,
                "isClaimant": False,
            }
        )
        return doc_ref.id

    def delete(self, petition_id: str, comment_id: str) -> None:
        self.comments(petition_id).document(comment_id).delete()

    def delete_all(self, petition_id: str, batch_size: int = 400) -> int:
        """
        Delete every comment of a petition.

        Firestore does not cascade deletes to subcollections, so the
        comments are removed in batches.

        Returns:
            Number of comments deleted
        """
        deleted = 0
        while True:
            snapshots = list(self.comments(petition_id).limit(batch_size).stream())
            if not snapshots:
                return deleted
            batch = self.db.batch()
            for snapshot in snapshots:
                batch.delete(snapshot.reference)
            batch.commit()
            deleted += len(snapshots)
