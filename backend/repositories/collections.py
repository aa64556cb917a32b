"""
Firestore collection names and stored enum values (schema-in-code).

Firestore has no DDL: collections appear on first write. These constants are
the single source of truth for collection paths and the string values the
documents hold.
"""

from enum import Enum

PETITIONS = "petitions"
COMMENTS = "comments"  # subcollection of petitions/{id}
INCIDENT_REPORTS = "incident_reports"
BLOG_ARTICLES = "blog_articles"
REPORTED_COMMENTS = "reported_comments"


class PetitionStatus(str, Enum):
    """Investigation lifecycle."""

    ACTIVE = "active"  # shown as "Under Observation"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"


class ReportStatus(str, Enum):
    """Incident report triage status."""

    NEW = "New"
    LINKED = "Linked"


class VerificationLevel(str, Enum):
    UNVERIFIED = "Unverified"
    VERIFIED = "Verified"


class IssueCategory(str, Enum):
    """Issue types offered by the complaint form."""

    PRODUCT_QUALITY = "product-quality"
    FALSE_ADVERTISING = "false-advertising"
    REFUND_ISSUES = "refund-issues"
    DELIVERY_PROBLEMS = "delivery-problems"
    CUSTOMER_SERVICE = "customer-service"
    PRICING_ISSUES = "pricing-issues"
    DATA_PRIVACY = "data-privacy"
    SAFETY_CONCERNS = "safety-concerns"
    OTHER = "other"


class BlogCategory(str, Enum):
    CONSUMER_EDUCATION = "Consumer Education"
    CONSUMER_TIPS = "Consumer Tips"
    INVESTIGATIONS = "Investigations"
    LEGAL_INSIGHTS = "Legal Insights"


class ReportedCommentStatus(str, Enum):
    """Moderation status of a flagged comment. Moves forward only."""

    NEW = "new"
    REVIEWED = "reviewed"
    ACTION_TAKEN = "action_taken"


# Timestamp field each top-level collection is ordered by
ORDER_FIELDS = {
    PETITIONS: "createdAt",
    INCIDENT_REPORTS: "submittedAt",
    BLOG_ARTICLES: "publishedAt",
    REPORTED_COMMENTS: "reportedAt",
}
