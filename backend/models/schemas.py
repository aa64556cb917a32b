from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from repositories.collections import (
    BlogCategory,
    IssueCategory,
    PetitionStatus,
    ReportedCommentStatus,
    ReportStatus,
    VerificationLevel,
)


class DocumentModel(BaseModel):
    """
    Base for schemas that mirror Firestore documents.

    Documents use camelCase keys; Python code uses snake_case attributes.
    Both spellings are accepted on input and responses are serialized with
    the camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class UpdateModel(DocumentModel):
    """Base for per-collection update schemas: unknown fields are rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )


class MessageResponse(BaseModel):
    message: str


# Timeline Schemas
class TimelineEntryCreate(DocumentModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)


class TimelineEntry(TimelineEntryCreate):
    """A stored timeline entry, kept exactly as the caller sent it."""

    model_config = ConfigDict(str_strip_whitespace=False)

    id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)


# Petition Schemas
class PetitionBase(DocumentModel):
    brand: str = Field(..., min_length=1, max_length=120)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    status: PetitionStatus = PetitionStatus.ACTIVE
    blog_content: str = ""


class PetitionCreate(PetitionBase):
    pass


class PetitionUpdate(UpdateModel):
    brand: Optional[str] = Field(default=None, min_length=1, max_length=120)
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[PetitionStatus] = None
    blog_content: Optional[str] = None


class Petition(PetitionBase):
    id: str
    created_at: str
    supporters: int = 0
    updates: List[TimelineEntry] = []


class PetitionListResponse(BaseModel):
    petitions: List[Petition]
    brands: List[str]


# Comment Schemas
class CommentCreate(DocumentModel):
    author: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=2000)


class Comment(DocumentModel):
    id: str
    author: str
    content: str
    date: str
    is_claimant: bool = False


class ClaimantComment(Comment):
    """Claimant comment with the identity and contact details only admins may see."""

    claimant_name: Optional[str] = None
    claimant_email: Optional[str] = None
    original_report_id: Optional[str] = None
    petition_id: Optional[str] = None


class CommentPage(DocumentModel):
    comments: List[Comment]
    next_cursor: Optional[str] = None
    has_more: bool


# Incident Report Schemas
class IncidentReportCreate(DocumentModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=40)
    brand_name: str = Field(..., min_length=1, max_length=120)
    category: IssueCategory
    purchase_date: Optional[str] = None
    order_number: Optional[str] = Field(default=None, max_length=100)
    amount: Optional[float] = None
    issue_description: str = Field(..., min_length=1, max_length=5000)
    desired_outcome: str = Field(default="", max_length=2000)

    @field_validator("amount", mode="before")
    @classmethod
    def blank_amount_is_null(cls, v: Any) -> Any:
        """An empty, unparseable or zero amount is stored as null."""
        if v is None or v == "":
            return None
        try:
            amount = float(v)
        except (TypeError, ValueError):
            return None
        if amount != amount or amount == 0:  # NaN or zero
            return None
        return amount

    @field_validator("phone", "purchase_date", "order_number", mode="before")
    @classmethod
    def blank_is_null(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class IncidentReport(DocumentModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    brand_name: str
    category: str
    purchase_date: Optional[str] = None
    order_number: Optional[str] = None
    amount: Optional[float] = None
    issue_description: str
    desired_outcome: str = ""
    status: ReportStatus = ReportStatus.NEW
    verification_level: str = Field(
        default=VerificationLevel.UNVERIFIED.value, alias="verification_level"
    )
    submitted_at: str
    petition_id: Optional[str] = None


class IncidentReportReceipt(DocumentModel):
    id: str
    message: str


class TriageGroupBy(str, Enum):
    BRAND = "brand"
    CATEGORY = "category"


class TriageGroup(DocumentModel):
    key: str
    count: int
    reports: List[IncidentReport]


class TriageResponse(DocumentModel):
    group_by: TriageGroupBy
    search: str
    total: int
    groups: List[TriageGroup]


class LinkReportRequest(DocumentModel):
    petition_id: str = Field(..., min_length=1)


# Blog Schemas
PLACEHOLDER_IMAGE = "/placeholder.svg"


class BlogArticleBase(DocumentModel):
    title: str = Field(..., min_length=1, max_length=200)
    excerpt: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    author: str = "The Brand Report Team"
    category: BlogCategory = BlogCategory.CONSUMER_EDUCATION
    featured: bool = False
    image: str = PLACEHOLDER_IMAGE


class BlogArticleCreate(BlogArticleBase):
    pass


class BlogArticleUpdate(UpdateModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    excerpt: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    category: Optional[BlogCategory] = None
    featured: Optional[bool] = None
    image: Optional[str] = None


class BlogArticle(BlogArticleBase):
    id: str
    published_at: str


class BlogListResponse(DocumentModel):
    featured: List[BlogArticle]
    articles: List[BlogArticle]


# Moderation Schemas
class ReportedCommentCreate(DocumentModel):
    reporter_name: str = Field(..., min_length=1, max_length=100)
    reason: str = Field(..., min_length=1, max_length=1000)


class ReportedComment(DocumentModel):
    id: str
    petition_id: str
    comment_id: str
    reporter_name: str
    reason: str
    reported_at: str
    status: ReportedCommentStatus = ReportedCommentStatus.NEW


class ReportedCommentReview(DocumentModel):
    status: ReportedCommentStatus


# Admin dashboard
class DashboardStats(DocumentModel):
    total_petitions: int
    active_petitions: int
    total_supporters: int
    unlinked_reports: int
    pending_reported_comments: int


# Callable endpoint envelopes (Firebase callable wire format)
class CallableRequest(BaseModel):
    data: Any = None


class CallableResult(BaseModel):
    success: bool
    message: str


class CallableResponse(BaseModel):
    result: CallableResult


# Authenticated caller (decoded Firebase ID token)
class FirebaseUser(BaseModel):
    uid: str
    email: Optional[str] = None
    is_admin: bool = False
