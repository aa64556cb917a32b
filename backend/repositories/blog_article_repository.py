"""
Blog article repository for Firestore operations.
"""

from repositories.base import BaseRepository
from repositories.collections import BLOG_ARTICLES, ORDER_FIELDS


class BlogArticleRepository(BaseRepository):
    """Repository for the `blog_articles` collection."""

    collection_name = BLOG_ARTICLES
    date_field = ORDER_FIELDS[BLOG_ARTICLES]
