"""
Blog article service for business logic.
"""

from typing import Any, List

from loguru import logger

import models.schemas as schemas
from helpers.sanitization import sanitize_url
from models.exceptions import BlogArticleNotFoundException
from repositories.blog_article_repository import BlogArticleRepository
from repositories.collections import BLOG_ARTICLES
from repositories.database import FirestoreDatabase
from services.write_policy import WritePolicy


class BlogService:
    """Service for blog-related business logic."""

    @staticmethod
    def list_articles(db: FirestoreDatabase) -> List[schemas.BlogArticle]:
        """All articles, newest first."""
        return [
            schemas.BlogArticle.model_validate(entity)
            for entity in BlogArticleRepository(db).get_all()
        ]

    @staticmethod
    def get_blog_listing(db: FirestoreDatabase) -> schemas.BlogListResponse:
        """Split the articles into the featured row and the rest, both newest first."""
        articles = BlogService.list_articles(db)
        return schemas.BlogListResponse(
            featured=[a for a in articles if a.featured],
            articles=[a for a in articles if not a.featured],
        )

    @staticmethod
    def get_article(db: FirestoreDatabase, article_id: str) -> schemas.BlogArticle:
        """
        Raises:
            BlogArticleNotFoundException: If article not found
        """
        entity = BlogArticleRepository(db).get_by_id(article_id)
        if entity is None:
            raise BlogArticleNotFoundException(article_id)
        return schemas.BlogArticle.model_validate(entity)

    @staticmethod
    def create_article(
        db: FirestoreDatabase, article: schemas.BlogArticleCreate
    ) -> schemas.BlogArticle:
        payload = article.model_dump(mode="json", by_alias=True)
        payload["image"] = sanitize_url(payload["image"]) or schemas.PLACEHOLDER_IMAGE
        article_id = BlogArticleRepository(db).create(payload)
        logger.info(f"Blog article {article_id} published")
        return BlogService.get_article(db, article_id)

    @staticmethod
    def update_article(
        db: FirestoreDatabase, article_id: str, updates: dict[str, Any]
    ) -> schemas.BlogArticle:
        """
        Apply a whitelisted partial update.

        Raises:
            BlogArticleNotFoundException: If article not found
            ValidationException: If the update is outside the article schema
        """
        payload = WritePolicy.validate_update(BLOG_ARTICLES, updates)
        repo = BlogArticleRepository(db)
        if repo.get_by_id(article_id) is None:
            raise BlogArticleNotFoundException(article_id)
        repo.update(article_id, payload)
        return BlogService.get_article(db, article_id)

    @staticmethod
    def delete_article(db: FirestoreDatabase, article_id: str) -> None:
        BlogArticleRepository(db).delete(article_id)
        logger.info(f"Blog article {article_id} deleted")
