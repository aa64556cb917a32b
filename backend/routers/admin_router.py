from typing import Annotated, Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

import authentication.auth as auth
import models.schemas as schemas
from models.exceptions import ConfirmationRequiredException
from repositories.collections import ReportedCommentStatus
from repositories.database import FirestoreDatabase, get_db
from services import (
    BlogService,
    ClaimantService,
    CommentService,
    DashboardService,
    IncidentReportService,
    ModerationService,
    PetitionService,
)
from services.export_service import ExportService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(auth.get_admin_user)],
)

ConfirmFlag = Annotated[
    bool, Query(description="Must be true for destructive actions")
]


def require_confirmation(confirm: bool, action: str) -> None:
    """
    Raises:
        ConfirmationRequiredException: Unless the admin confirmed the action.
    """
    if not confirm:
        raise ConfirmationRequiredException(action)


@router.get("/stats", response_model=schemas.DashboardStats)
def get_dashboard_stats(db: FirestoreDatabase = Depends(get_db)):
    return DashboardService.get_stats(db)


# ============================================================================
# Petitions
# ============================================================================


@router.post(
    "/petitions", response_model=schemas.Petition, status_code=status.HTTP_201_CREATED
)
def create_petition(
    petition: schemas.PetitionCreate, db: FirestoreDatabase = Depends(get_db)
):
    """Launch a new investigation."""
    return PetitionService.create_petition(db, petition)


@router.patch("/petitions/{petition_id}", response_model=schemas.Petition)
def update_petition(
    petition_id: str,
    updates: dict[str, Any] = Body(...),
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Edit an investigation.

    Only brand, title, description, status and blogContent are accepted;
    any other field is rejected with 422.
    """
    return PetitionService.update_petition(db, petition_id, updates)


@router.delete("/petitions/{petition_id}", response_model=schemas.MessageResponse)
def delete_petition(
    petition_id: str,
    confirm: ConfirmFlag = False,
    db: FirestoreDatabase = Depends(get_db),
):
    """Delete an investigation with its comments."""
    require_confirmation(confirm, "delete this petition")
    deleted = PetitionService.delete_petition(db, petition_id)
    return {"message": f"Petition deleted with {deleted} comments"}


@router.post(
    "/petitions/{petition_id}/updates",
    response_model=schemas.TimelineEntry,
    status_code=status.HTTP_201_CREATED,
)
def add_timeline_entry(
    petition_id: str,
    entry: schemas.TimelineEntryCreate,
    db: FirestoreDatabase = Depends(get_db),
):
    """Post a progress update on the investigation timeline."""
    return PetitionService.add_timeline_entry(db, petition_id, entry)


@router.get(
    "/petitions/{petition_id}/claimants",
    response_model=List[schemas.ClaimantComment],
)
def get_claimants(petition_id: str, db: FirestoreDatabase = Depends(get_db)):
    """Claimants of an investigation with their contact details."""
    return ClaimantService.get_claimants(db, petition_id)


@router.delete(
    "/petitions/{petition_id}/claimants/{report_id}",
    response_model=schemas.MessageResponse,
)
def remove_claimant(
    petition_id: str,
    report_id: str,
    confirm: ConfirmFlag = False,
    delete_report: bool = Query(True, alias="deleteReport"),
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Remove a claimant: one supporter fewer, claimant comment removed.

    The source report is deleted unless `deleteReport=false`, in which case
    it goes back to the triage queue.
    """
    require_confirmation(confirm, "remove this claimant")
    ClaimantService.unlink_claimant(
        db, petition_id, report_id, delete_report=delete_report
    )
    return {"message": "Claimant removed"}


@router.delete(
    "/petitions/{petition_id}/comments/{comment_id}",
    response_model=schemas.MessageResponse,
)
def delete_comment(
    petition_id: str,
    comment_id: str,
    confirm: ConfirmFlag = False,
    db: FirestoreDatabase = Depends(get_db),
):
    require_confirmation(confirm, "delete this comment")
    CommentService.delete_comment(db, petition_id, comment_id)
    return {"message": "Comment deleted successfully"}


# ============================================================================
# Incident reports
# ============================================================================


@router.get("/reports", response_model=List[schemas.IncidentReport])
def list_reports(db: FirestoreDatabase = Depends(get_db)):
    """Every incident report, newest first."""
    return IncidentReportService.list_reports(db)


@router.get("/reports/triage", response_model=schemas.TriageResponse)
def get_triage(
    search: str = Query("", max_length=200),
    group_by: schemas.TriageGroupBy = Query(
        schemas.TriageGroupBy.BRAND, alias="groupBy"
    ),
    db: FirestoreDatabase = Depends(get_db),
):
    """Unlinked reports matching `search`, grouped by brand or category."""
    return IncidentReportService.get_triage(db, search=search, group_by=group_by)


@router.get("/reports/export")
def export_reports(db: FirestoreDatabase = Depends(get_db)):
    """Download every incident report as CSV."""
    content = IncidentReportService.export_csv(db)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": (
                f'attachment; filename="{ExportService.export_filename()}"'
            )
        },
    )


@router.get("/reports/{report_id}", response_model=schemas.IncidentReport)
def get_report(report_id: str, db: FirestoreDatabase = Depends(get_db)):
    return IncidentReportService.get_report(db, report_id)


@router.post(
    "/reports/{report_id}/link",
    response_model=schemas.ClaimantComment,
)
def link_report(
    report_id: str,
    link: schemas.LinkReportRequest,
    db: FirestoreDatabase = Depends(get_db),
):
    """
    Link a report to an investigation as a verified claimant.

    Returns 409 if the report is already linked.
    """
    return ClaimantService.link_report(db, report_id, link.petition_id)


@router.delete("/reports/{report_id}", response_model=schemas.MessageResponse)
def delete_report(
    report_id: str,
    confirm: ConfirmFlag = False,
    db: FirestoreDatabase = Depends(get_db),
):
    """Delete a report; a linked report is unlinked from its petition first."""
    require_confirmation(confirm, "delete this report")
    IncidentReportService.delete_report(db, report_id)
    return {"message": "Report deleted"}


# ============================================================================
# Blog articles
# ============================================================================


@router.get("/blog", response_model=List[schemas.BlogArticle])
def list_articles(db: FirestoreDatabase = Depends(get_db)):
    return BlogService.list_articles(db)


@router.post(
    "/blog", response_model=schemas.BlogArticle, status_code=status.HTTP_201_CREATED
)
def create_article(
    article: schemas.BlogArticleCreate, db: FirestoreDatabase = Depends(get_db)
):
    return BlogService.create_article(db, article)


@router.patch("/blog/{article_id}", response_model=schemas.BlogArticle)
def update_article(
    article_id: str,
    updates: dict[str, Any] = Body(...),
    db: FirestoreDatabase = Depends(get_db),
):
    return BlogService.update_article(db, article_id, updates)


@router.delete("/blog/{article_id}", response_model=schemas.MessageResponse)
def delete_article(
    article_id: str,
    confirm: ConfirmFlag = False,
    db: FirestoreDatabase = Depends(get_db),
):
    require_confirmation(confirm, "delete this article")
    BlogService.delete_article(db, article_id)
    return {"message": "Article deleted"}


# ============================================================================
# Moderation
# ============================================================================


@router.get("/reported-comments", response_model=List[schemas.ReportedComment])
def list_reported_comments(
    status_filter: Optional[ReportedCommentStatus] = Query(None, alias="status"),
    db: FirestoreDatabase = Depends(get_db),
):
    return ModerationService.get_reported_comments(db, status_filter)


@router.post(
    "/reported-comments/{reported_id}/review",
    response_model=schemas.ReportedComment,
)
def review_reported_comment(
    reported_id: str,
    review: schemas.ReportedCommentReview,
    db: FirestoreDatabase = Depends(get_db),
):
    """Mark a report reviewed (or action taken) without deleting anything."""
    return ModerationService.review(db, reported_id, review.status)


@router.post(
    "/reported-comments/{reported_id}/remove",
    response_model=schemas.MessageResponse,
)
def remove_reported_comment(
    reported_id: str,
    confirm: ConfirmFlag = False,
    db: FirestoreDatabase = Depends(get_db),
):
    """Delete the flagged comment together with its report."""
    require_confirmation(confirm, "remove this comment")
    ModerationService.remove_comment(db, reported_id)
    return {"message": "Comment removed and report dismissed"}
