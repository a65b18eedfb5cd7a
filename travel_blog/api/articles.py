from typing import List

from fastapi import APIRouter, Depends

from travel_blog.api.deps import get_article_catalog
from travel_blog.schemas import ArticleResponse
from travel_blog.services import ArticleCatalog

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=List[ArticleResponse])
async def list_articles(catalog: ArticleCatalog = Depends(get_article_catalog)):
    """All catalog articles with like counters and comments"""
    articles = await catalog.list_articles()
    return [ArticleResponse.model_validate(article) for article in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    catalog: ArticleCatalog = Depends(get_article_catalog),
):
    article = await catalog.get_article(article_id)
    return ArticleResponse.model_validate(article)
