"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .petition_service import PetitionService
from .comment_service import CommentService
from .claimant_service import ClaimantService
from .incident_report_service import IncidentReportService
from .blog_service import BlogService
from .moderation_service import ModerationService
from .dashboard_service import DashboardService
from .admin_write_service import AdminWriteService

__all__ = [
    "PetitionService",
    "CommentService",
    "ClaimantService",
    "IncidentReportService",
    "BlogService",
    "ModerationService",
    "DashboardService",
    "AdminWriteService",
]
