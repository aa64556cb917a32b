"""
Admin dashboard statistics.
"""

import models.schemas as schemas
from repositories.collections import PetitionStatus, ReportStatus
from repositories.database import FirestoreDatabase
from repositories.incident_report_repository import IncidentReportRepository
from repositories.petition_repository import PetitionRepository
from services.moderation_service import ModerationService

OPEN_STATUSES = (PetitionStatus.ACTIVE.value, PetitionStatus.INVESTIGATING.value)


class DashboardService:
    """Counters shown at the top of the admin console."""

    @staticmethod
    def get_stats(db: FirestoreDatabase) -> schemas.DashboardStats:
        petitions = PetitionRepository(db).get_all()
        reports = IncidentReportRepository(db).get_all()
        return schemas.DashboardStats(
            total_petitions=len(petitions),
            active_petitions=sum(1 for p in petitions if p.get("status") in OPEN_STATUSES),
            total_supporters=sum(p["supporters"] for p in petitions),
            unlinked_reports=sum(
                1 for r in reports if r.get("status") != ReportStatus.LINKED.value
            ),
            pending_reported_comments=ModerationService.count_pending(db),
        )
