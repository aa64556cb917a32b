"""
Claimant service: linking incident reports to petitions.
"""

from typing import List

import models.schemas as schemas
from models.config import settings
from models.exceptions import IncidentReportNotFoundException, PetitionNotFoundException
from repositories.claimant_repository import ClaimantRepository
from repositories.comment_repository import CommentRepository
from repositories.database import FirestoreDatabase
from repositories.incident_report_repository import IncidentReportRepository
from repositories.petition_repository import PetitionRepository


class ClaimantService:
    """Service for verified claimant workflows."""

    @staticmethod
    def link_report(
        db: FirestoreDatabase, report_id: str, petition_id: str
    ) -> schemas.ClaimantComment:
        """
        Link an incident report to a petition as a verified claimant.

        Args:
            db: Firestore handle
            report_id: Incident report ID
            petition_id: Petition ID

        Returns:
            The claimant comment added to the petition

        Raises:
            IncidentReportNotFoundException: If the report does not exist
            PetitionNotFoundException: If the petition does not exist
            ReportAlreadyLinkedException: If the report is already linked
        """
        report = IncidentReportRepository(db).get_by_id(report_id)
        if report is None:
            raise IncidentReportNotFoundException(report_id)

        comment = ClaimantRepository(db).link_report_to_petition(
            report_id,
            petition_id,
            report,
            excerpt_length=settings.CLAIMANT_EXCERPT_LENGTH,
        )
        return schemas.ClaimantComment.model_validate(comment)

    @staticmethod
    def unlink_claimant(
        db: FirestoreDatabase,
        petition_id: str,
        report_id: str,
        delete_report: bool = True,
    ) -> None:
        """
        Remove a claimant from a petition.

        The claimant comment is the one whose ID equals the report ID. By
        default the source report is deleted as well; pass
        `delete_report=False` to send it back to triage instead.

        Raises:
            PetitionNotFoundException: If the petition does not exist
            ClaimantNotFoundException: If the report is not a claimant of it
        """
        ClaimantRepository(db).unlink_claimant_from_petition(
            petition_id,
            claimant_comment_id=report_id,
            report_id=report_id,
            delete_report=delete_report,
        )

    @staticmethod
    def get_claimants(
        db: FirestoreDatabase, petition_id: str
    ) -> List[schemas.ClaimantComment]:
        """
        List a petition's claimants with their contact details.

        Raises:
            PetitionNotFoundException: If the petition does not exist
        """
        if PetitionRepository(db).get_by_id(petition_id) is None:
            raise PetitionNotFoundException(petition_id)
        return [
            schemas.ClaimantComment.model_validate(entity)
            for entity in CommentRepository(db).get_claimants(petition_id)
        ]
