"""
Petition (investigation) service for business logic.
"""

import uuid
from typing import Any

from loguru import logger

import models.schemas as schemas
from helpers.time_utils import utc_now
from models.config import settings
from models.exceptions import PetitionNotFoundException
from repositories.collections import PETITIONS
from repositories.comment_repository import CommentRepository
from repositories.database import FirestoreDatabase
from repositories.incident_report_repository import IncidentReportRepository
from repositories.petition_repository import PetitionRepository
from repositories.reported_comment_repository import ReportedCommentRepository
from services.write_policy import WritePolicy


class PetitionService:
    """Service for petition-related business logic."""

    @staticmethod
    def list_petitions(
        db: FirestoreDatabase,
        search: str | None = None,
        brand: str | None = None,
    ) -> schemas.PetitionListResponse:
        """
        List petitions newest first, with the brand filter options.

        Args:
            db: Firestore handle
            search: Case-insensitive substring matched against brand and title
            brand: Exact brand to keep ("all" or None keeps every brand)

        Returns:
            Matching petitions and the sorted list of distinct brands
        """
        petitions = [
            schemas.Petition.model_validate(entity)
            for entity in PetitionRepository(db).get_all()
        ]
        brands = sorted({p.brand for p in petitions if p.brand})

        needle = (search or "").strip().lower()
        if needle:
            petitions = [
                p
                for p in petitions
                if needle in p.brand.lower() or needle in p.title.lower()
            ]
        if brand and brand != "all":
            petitions = [p for p in petitions if p.brand == brand]

        return schemas.PetitionListResponse(petitions=petitions, brands=brands)

    @staticmethod
    def get_petition(db: FirestoreDatabase, petition_id: str) -> schemas.Petition:
        """
        Get a petition.

        Raises:
            PetitionNotFoundException: If petition not found
        """
        entity = PetitionRepository(db).get_by_id(petition_id)
        if entity is None:
            raise PetitionNotFoundException(petition_id)
        return schemas.Petition.model_validate(entity)

    @staticmethod
    def create_petition(
        db: FirestoreDatabase, petition: schemas.PetitionCreate
    ) -> schemas.Petition:
        """Launch a new investigation with zero supporters and an empty timeline."""
        petition_id = PetitionRepository(db).create(
            petition.model_dump(mode="json", by_alias=True)
        )
        logger.info(f"Petition {petition_id} created for brand {petition.brand}")
        return PetitionService.get_petition(db, petition_id)

    @staticmethod
    def update_petition(
        db: FirestoreDatabase, petition_id: str, updates: dict[str, Any]
    ) -> schemas.Petition:
        """
        Apply a whitelisted partial update.

        Raises:
            PetitionNotFoundException: If petition not found
            ValidationException: If the update is outside the petition schema
        """
        payload = WritePolicy.validate_update(PETITIONS, updates)
        repo = PetitionRepository(db)
        if repo.get_by_id(petition_id) is None:
            raise PetitionNotFoundException(petition_id)
        repo.update(petition_id, payload)
        return PetitionService.get_petition(db, petition_id)

    @staticmethod
    def delete_petition(db: FirestoreDatabase, petition_id: str) -> int:
        """
        Delete a petition and everything that hangs off it.

        Comments in the subcollection and their flags are deleted; reports
        linked to the petition go back to the triage queue.

        Returns:
            Number of comments deleted
        """
        comments_deleted = CommentRepository(db).delete_all(
            petition_id, batch_size=settings.FIRESTORE_BATCH_SIZE
        )

        reported_repo = ReportedCommentRepository(db)
        for reported in reported_repo.get_for_petition(petition_id):
            reported_repo.delete(reported["id"])

        report_repo = IncidentReportRepository(db)
        for report in report_repo.get_linked_to_petition(petition_id):
            report_repo.revert_to_new(report["id"])

        PetitionRepository(db).delete(petition_id)
        logger.info(
            f"Petition {petition_id} deleted with {comments_deleted} comments"
        )
        return comments_deleted

    @staticmethod
    def add_timeline_entry(
        db: FirestoreDatabase, petition_id: str, entry: schemas.TimelineEntryCreate
    ) -> schemas.TimelineEntry:
        """
        Post a progress update on an investigation.

        The entry gets a generated ID and the current date, so two posts with
        the same text are both kept.
        """
        timeline_entry = schemas.TimelineEntry(
            id=uuid.uuid4().hex,
            title=entry.title,
            content=entry.content,
            date=utc_now().isoformat(),
        )
        PetitionService.append_timeline_entry(db, petition_id, timeline_entry)
        return timeline_entry

    @staticmethod
    def append_timeline_entry(
        db: FirestoreDatabase, petition_id: str, entry: schemas.TimelineEntry
    ) -> None:
        """
        Append a complete entry to the timeline (set-union semantics).

        Raises:
            PetitionNotFoundException: If petition not found
        """
        repo = PetitionRepository(db)
        if repo.get_by_id(petition_id) is None:
            raise PetitionNotFoundException(petition_id)
        repo.append_timeline_entry(petition_id, entry.model_dump(mode="json"))
        logger.info(f"Timeline entry {entry.id} appended to petition {petition_id}")

