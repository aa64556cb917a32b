"""
Incident report service: public submissions and admin triage.
"""

from typing import List

from loguru import logger

import models.schemas as schemas
from helpers.sanitization import sanitize_plain_text
from models.exceptions import (
    ClaimantNotFoundException,
    IncidentReportNotFoundException,
    PetitionNotFoundException,
)
from repositories.collections import ReportStatus
from repositories.database import FirestoreDatabase
from repositories.incident_report_repository import IncidentReportRepository
from services.claimant_service import ClaimantService
from services.export_service import ExportService
from services.triage_service import TriageService

FREE_TEXT_FIELDS = ("name", "brand_name", "issue_description", "desired_outcome")


class IncidentReportService:
    """Service for incident report business logic."""

    @staticmethod
    def submit_report(
        db: FirestoreDatabase, report: schemas.IncidentReportCreate
    ) -> schemas.IncidentReportReceipt:
        """
        File a complaint from the public form.

        The report starts as New and Unverified with a server timestamp.
        """
        clean = report.model_copy(
            update={
                field: sanitize_plain_text(getattr(report, field))
                for field in FREE_TEXT_FIELDS
            }
        )
        report_id = IncidentReportRepository(db).create(
            clean.model_dump(mode="json", by_alias=True)
        )
        logger.info(f"Incident report {report_id} filed against {clean.brand_name}")
        return schemas.IncidentReportReceipt(
            id=report_id,
            message="Thank you. Your report has been received and will be reviewed.",
        )

    @staticmethod
    def list_reports(db: FirestoreDatabase) -> List[schemas.IncidentReport]:
        """All reports, newest first."""
        return [
            schemas.IncidentReport.model_validate(entity)
            for entity in IncidentReportRepository(db).get_all()
        ]

    @staticmethod
    def get_report(db: FirestoreDatabase, report_id: str) -> schemas.IncidentReport:
        """
        Raises:
            IncidentReportNotFoundException: If report not found
        """
        entity = IncidentReportRepository(db).get_by_id(report_id)
        if entity is None:
            raise IncidentReportNotFoundException(report_id)
        return schemas.IncidentReport.model_validate(entity)

    @staticmethod
    def get_triage(
        db: FirestoreDatabase,
        search: str = "",
        group_by: schemas.TriageGroupBy = schemas.TriageGroupBy.BRAND,
    ) -> schemas.TriageResponse:
        return TriageService.build_triage(
            IncidentReportService.list_reports(db), search=search, group_by=group_by
        )

    @staticmethod
    def export_csv(db: FirestoreDatabase) -> str:
        return ExportService.reports_to_csv(IncidentReportService.list_reports(db))

    @staticmethod
    def delete_report(db: FirestoreDatabase, report_id: str) -> None:
        """
        Delete an incident report.

        A linked report is removed through the unlink transaction so the
        petition loses its claimant and one supporter at the same time.
        """
        entity = IncidentReportRepository(db).get_by_id(report_id)
        if entity is None:
            return

        petition_id = entity.get("petitionId")
        if entity.get("status") == ReportStatus.LINKED.value and petition_id:
            try:
                ClaimantService.unlink_claimant(
                    db, petition_id, report_id, delete_report=True
                )
                return
            except (PetitionNotFoundException, ClaimantNotFoundException) as e:
                logger.warning(
                    f"Report {report_id} marked linked but {e.message}; deleting it"
                )

        IncidentReportRepository(db).delete(report_id)
        logger.info(f"Incident report {report_id} deleted")
