"""
Petition repository for Firestore operations.
"""

from typing import Any

from firebase_admin import firestore

from repositories.base import BaseRepository
from repositories.collections import ORDER_FIELDS, PETITIONS


class PetitionRepository(BaseRepository):
    """Repository for the `petitions` collection."""

    collection_name = PETITIONS
    date_field = ORDER_FIELDS[PETITIONS]

    def to_entity(self, snapshot: Any) -> dict[str, Any]:
        """Map a petition snapshot, defaulting counters and the timeline."""
        entity = super().to_entity(snapshot)
        entity["supporters"] = entity.get("supporters") or 0
        entity["updates"] = entity.get("updates") or []
        # Legacy embedded comment array; comments live in the subcollection
        entity.pop("comments", None)
        return entity

    def create(self, data: dict[str, Any]) -> str:
        """
        Create a petition.

        The supporter counter always starts at zero and the timeline empty,
        whatever the caller sends.
        """
        payload = {**data, "supporters": 0, "updates": []}
        return super().create(payload)

    def append_timeline_entry(self, petition_id: str, entry: dict[str, Any]) -> None:
        """
        Append one entry to the petition's `updates` log.

        Uses a set-union write: an entry equal to one already stored is not
        added twice.

        Args:
            petition_id: Petition ID
            entry: Timeline entry ({id, title, content, date})
        """
        self.document(petition_id).update({"updates": firestore.ArrayUnion([entry])})
