"""
Standardized pagination parameters for the cursor-paginated comment thread.
"""

from typing import Annotated, Optional

from fastapi import Query

# Comments per page; COMMENTS_PAGE_SIZE applies when omitted
CommentPageSize = Annotated[
    Optional[int],
    Query(ge=1, le=50, alias="pageSize", description="Comments per page"),
]

# Opaque cursor returned as `nextCursor` by the previous page
CommentCursor = Annotated[
    Optional[str],
    Query(min_length=1, description="Cursor of the previous page"),
]
