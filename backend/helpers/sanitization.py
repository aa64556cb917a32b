"""
Sanitization of free text submitted by the public.

Comments, comment reports and incident reports are rendered back on public
pages and in the admin console, so any markup is stripped before storage.
"""

from typing import Optional

import html

import bleach


def sanitize_plain_text(content: Optional[str]) -> Optional[str]:
    """
    Strip all HTML tags from a plain text field.

    Args:
        content: Raw content from user input

    Returns:
        Plain text with all HTML removed, or None if input is None

    Examples:
        >>> sanitize_plain_text('<script>alert(1)</script>Refund denied')
        'alert(1)Refund denied'
        >>> sanitize_plain_text('<b>Bold</b> text')
        'Bold text'
    """
    if content is None:
        return None

    # bleach escapes what it leaves behind; stored values are plain text
    return html.unescape(bleach.clean(content, tags=[], strip=True)).strip()


def sanitize_url(url: Optional[str]) -> Optional[str]:
    """
    Sanitize URLs to prevent javascript: protocol attacks.

    Only allows http, https, and relative URLs.

    Examples:
        >>> sanitize_url('javascript:alert(1)')
        ''
        >>> sanitize_url('/placeholder.svg')
        '/placeholder.svg'
    """
    if url is None:
        return None

    url = url.strip()

    if url.lower().startswith("javascript:"):
        return ""

    if url and not url.startswith(("http://", "https://")):
        # Relative URLs are allowed
        if url.startswith("/") or ":" not in url.split("/")[0]:
            return url
        return ""

    return url
