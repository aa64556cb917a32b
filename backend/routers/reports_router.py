from fastapi import APIRouter, Depends, Request, status

import models.schemas as schemas
from helpers.rate_limiter import limiter
from models.config import settings
from repositories.database import FirestoreDatabase, get_db
from services import IncidentReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post(
    "",
    response_model=schemas.IncidentReportReceipt,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(lambda: settings.RATE_LIMIT_INCIDENT_REPORTS)
def submit_report(
    request: Request,
    report: schemas.IncidentReportCreate,
    db: FirestoreDatabase = Depends(get_db),
):
    """
    File a complaint against a brand.

    The report is stored as New and Unverified until an admin triages it.
    """
    return IncidentReportService.submit_report(db, report)
