"""
Incident report repository for Firestore operations.
"""

from typing import Any

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from repositories.base import BaseRepository
from repositories.collections import (
    INCIDENT_REPORTS,
    ORDER_FIELDS,
    ReportStatus,
    VerificationLevel,
)


class IncidentReportRepository(BaseRepository):
    """Repository for the `incident_reports` collection."""

    collection_name = INCIDENT_REPORTS
    date_field = ORDER_FIELDS[INCIDENT_REPORTS]

    def create(self, data: dict[str, Any]) -> str:
        """
        Store a public submission.

        New reports always start unlinked and unverified.
        """
        payload = {
            **data,
            "status": ReportStatus.NEW.value,
            "verification_level": VerificationLevel.UNVERIFIED.value,
        }
        return super().create(payload)

    def get_linked_to_petition(self, petition_id: str) -> list[dict[str, Any]]:
        """Get the reports whose back-reference points at a petition."""
        query = self.collection.where(filter=FieldFilter("petitionId", "==", petition_id))
        return [self.to_entity(snapshot) for snapshot in query.stream()]

    def revert_to_new(self, id: str) -> None:
        """Put a report back in the triage queue, clearing its petition link."""
        self.update(
            id,
            {"status": ReportStatus.NEW.value, "petitionId": firestore.DELETE_FIELD},
        )
