"""Rate limiter for unauthenticated public writes.

This module is separate from main.py to avoid circular imports when routers
need to access the limiter.
"""

from fastapi import Request
from slowapi import Limiter


def client_ip_key(request: Request) -> str:
    """
    Key requests by the original client address.

    Behind Firebase Hosting or Cloud Run the first X-Forwarded-For entry is
    the client; direct connections fall back to the socket address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first_ip = forwarded_for.split(",")[0].strip()
        if first_ip:
            return first_ip
    if request.client:
        return request.client.host
    return "unknown"


# Imported by routers and main.py
limiter = Limiter(key_func=client_ip_key)
