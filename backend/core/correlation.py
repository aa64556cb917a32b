"""
Correlation ID generation and context management.

Every request gets a short ID that ties together the log lines, the Sentry
event and the error body returned to the admin console.
"""

import uuid
from contextvars import ContextVar

# Request-scoped correlation ID
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short, unique correlation ID.

    Returns:
        8-character hexadecimal string (e.g. "abc123de").
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the current request's correlation ID, or "" outside a request."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current request context.

    Args:
        correlation_id: ID received in X-Correlation-ID or freshly generated.
    """
    correlation_id_var.set(correlation_id)
