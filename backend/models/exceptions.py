"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP responses
by centralized exception handlers in main.py. The callable router converts them
to Firebase callable error codes instead.

Every exception carries a correlation ID so the admin console can quote it
when an operation fails.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    pass


class PermissionDeniedException(DomainException):
    """Raised when user lacks required permissions."""

    pass


class ValidationException(DomainException):
    """Raised when input validation fails."""

    pass


class ConflictException(DomainException):
    """Raised when operation conflicts with existing data."""

    pass


class AuthenticationException(DomainException):
    """Raised when authentication fails."""

    pass


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    pass


# Specific exceptions for domain entities


class PetitionNotFoundException(NotFoundException):
    """Petition (investigation) not found."""

    def __init__(self, petition_id: str) -> None:
        super().__init__(f"Petition {petition_id} does not exist")
        self.petition_id = petition_id


class IncidentReportNotFoundException(NotFoundException):
    """Incident report not found."""

    def __init__(self, report_id: str) -> None:
        super().__init__(f"Incident report {report_id} does not exist")
        self.report_id = report_id


class BlogArticleNotFoundException(NotFoundException):
    """Blog article not found."""

    def __init__(self, article_id: str) -> None:
        super().__init__(f"Blog article {article_id} does not exist")
        self.article_id = article_id


class CommentNotFoundException(NotFoundException):
    """Comment not found on the given petition."""

    def __init__(self, petition_id: str, comment_id: str) -> None:
        super().__init__(f"Comment {comment_id} not found on petition {petition_id}")
        self.petition_id = petition_id
        self.comment_id = comment_id


class ReportedCommentNotFoundException(NotFoundException):
    """Reported comment record not found."""

    def __init__(self, reported_comment_id: str) -> None:
        super().__init__(f"Reported comment {reported_comment_id} does not exist")
        self.reported_comment_id = reported_comment_id


class ClaimantNotFoundException(NotFoundException):
    """Raised when a petition has no claimant comment for the given report."""

    def __init__(self, petition_id: str, report_id: str) -> None:
        super().__init__(
            f"Petition {petition_id} has no claimant linked from report {report_id}"
        )
        self.petition_id = petition_id
        self.report_id = report_id


# ============================================================================
# Claimant linking exceptions
# ============================================================================


class ReportAlreadyLinkedException(ConflictException):
    """Raised when linking a report that already backs a petition."""

    def __init__(self, report_id: str, petition_id: str | None) -> None:
        super().__init__(
            f"Incident report {report_id} is already linked to petition {petition_id}"
        )
        self.report_id = report_id
        self.petition_id = petition_id


# ============================================================================
# Write policy exceptions
# ============================================================================


class InvalidCollectionException(ValidationException):
    """Raised when a privileged write targets a collection that is not editable."""

    def __init__(self, collection_name: str) -> None:
        super().__init__(f"Collection '{collection_name}' cannot be edited")
        self.collection_name = collection_name


class DisallowedFieldsException(ValidationException):
    """Raised when an update carries fields outside the collection's schema."""

    def __init__(self, collection_name: str, fields: list[str]) -> None:
        super().__init__(
            f"Fields not editable on '{collection_name}': {', '.join(sorted(fields))}"
        )
        self.collection_name = collection_name
        self.fields = fields


class InvalidCursorException(ValidationException):
    """Raised when a pagination cursor does not resolve to a comment."""

    def __init__(self, cursor: str) -> None:
        super().__init__(f"Invalid pagination cursor: {cursor}")
        self.cursor = cursor


class ConfirmationRequiredException(BusinessRuleException):
    """Raised when a destructive admin action is sent without confirmation."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Confirmation required to {action}")
        self.action = action


# ============================================================================
# Moderation exceptions
# ============================================================================


class ReportedCommentAlreadyReviewedException(BusinessRuleException):
    """Raised when a reported comment is moved out of a final status."""

    def __init__(self, reported_comment_id: str, status: str) -> None:
        super().__init__(
            f"Reported comment {reported_comment_id} was already marked {status}"
        )
        self.reported_comment_id = reported_comment_id
        self.status = status


# ============================================================================
# Callable endpoint errors
# ============================================================================


class CallableException(DomainException):
    """
    Error returned by a callable endpoint.

    Mirrors the Firebase callable error envelope: a canonical status code
    plus a message, sent as {"error": {"status": ..., "message": ...}}.
    """

    HTTP_STATUS = {
        "INVALID_ARGUMENT": 400,
        "UNAUTHENTICATED": 401,
        "PERMISSION_DENIED": 403,
        "NOT_FOUND": 404,
        "INTERNAL": 500,
    }

    def __init__(self, status: str, message: str) -> None:
        super().__init__(message)
        self.status = status

    @property
    def http_status(self) -> int:
        return self.HTTP_STATUS.get(self.status, 500)
