"""
Repository pattern implementation for the Firestore data access layer.
"""

from .base import BaseRepository
from .blog_article_repository import BlogArticleRepository
from .claimant_repository import ClaimantRepository
from .comment_repository import CommentRepository
from .incident_report_repository import IncidentReportRepository
from .petition_repository import PetitionRepository
from .reported_comment_repository import ReportedCommentRepository

__all__ = [
    "BaseRepository",
    "BlogArticleRepository",
    "ClaimantRepository",
    "CommentRepository",
    "IncidentReportRepository",
    "PetitionRepository",
    "ReportedCommentRepository",
]
