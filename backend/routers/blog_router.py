from fastapi import APIRouter, Depends

import models.schemas as schemas
from repositories.database import FirestoreDatabase, get_db
from services import BlogService

router = APIRouter(prefix="/blog", tags=["blog"])


@router.get("", response_model=schemas.BlogListResponse)
def list_articles(db: FirestoreDatabase = Depends(get_db)):
    """Featured articles and the rest, both newest first."""
    return BlogService.get_blog_listing(db)


@router.get("/{article_id}", response_model=schemas.BlogArticle)
def get_article(article_id: str, db: FirestoreDatabase = Depends(get_db)):
    return BlogService.get_article(db, article_id)
