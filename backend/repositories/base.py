"""
Base repository class providing common Firestore document operations.
"""

from typing import Any

from firebase_admin import firestore

from helpers.time_utils import timestamp_to_iso
from repositories.database import FirestoreDatabase


class BaseRepository:
    """
    Base repository for a top-level collection.

    Subclasses set `collection_name` and `date_field`. Entities are plain
    dicts holding the document fields plus `id`, with the timestamp field
    converted to an ISO 8601 string.
    """

    collection_name: str = ""
    date_field: str = ""

    def __init__(self, db: FirestoreDatabase):
        """
        Initialize repository.

        Args:
            db: Firestore handle
        """
        self.db = db

    @property
    def collection(self) -> Any:
        return self.db.collection(self.collection_name)

    def document(self, id: str) -> Any:
        return self.collection.document(id)

    def to_entity(self, snapshot: Any) -> dict[str, Any]:
        """
        Map a document snapshot to an entity dict.

        Args:
            snapshot: Firestore document snapshot

        Returns:
            Document fields with `id` and a textual timestamp
        """
        data = snapshot.to_dict() or {}
        entity = {**data, "id": snapshot.id}
        if self.date_field:
            entity[self.date_field] = timestamp_to_iso(data.get(self.date_field))
        return entity

    def get_by_id(self, id: str) -> dict[str, Any] | None:
        """
        Get entity by ID.

        Args:
            id: Document ID

        Returns:
            Entity if found, None otherwise
        """
        snapshot = self.document(id).get()
        if not snapshot.exists:
            return None
        return self.to_entity(snapshot)

    def get_all(self) -> list[dict[str, Any]]:
        """
        Get all entities, newest first by the collection's timestamp field.

        Store errors propagate to the caller.
        """
        query = self.collection.order_by(
            self.date_field, direction=firestore.Query.DESCENDING
        )
        return [self.to_entity(snapshot) for snapshot in query.stream()]

    def create(self, data: dict[str, Any]) -> str:
        """
        Create a document with a store-assigned ID.

        The collection's timestamp field is set to the server timestamp.

        Args:
            data: Document fields

        Returns:
            New document ID
        """
        payload = dict(data)
        if self.date_field:
            payload[self.date_field] = firestore.SERVER_TIMESTAMP
        _, doc_ref = self.collection.add(payload)
        return doc_ref.id

    def update(self, id: str, fields: dict[str, Any]) -> None:
        """
        Merge `fields` into an existing document.

        Callers are responsible for whitelisting fields. Raises the store's
        NotFound error if the document does not exist.
        """
        self.document(id).update(fields)

    def delete(self, id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        self.document(id).delete()
