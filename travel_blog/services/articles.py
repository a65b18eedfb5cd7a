import json
import logging
from pathlib import Path
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from travel_blog.database import Database
from travel_blog.exceptions import ArticleNotFound
from travel_blog.models import Article
from travel_blog.schemas import ArticleSeed

logger = logging.getLogger(__name__)


class ArticleCatalog:
    """Read access to catalog articles and startup seeding."""

    def __init__(self, db: Database):
        self.db = db

    async def list_articles(self) -> List[Article]:
        async with self.db.session() as session:
            result = await session.execute(
                select(Article)
                .options(selectinload(Article.comments))
                .order_by(Article.created_at, Article.id)
            )
            return list(result.scalars().all())

    async def get_article(self, article_id: str) -> Article:
        async with self.db.session() as session:
            result = await session.execute(
                select(Article)
                .where(Article.id == article_id)
                .options(selectinload(Article.comments))
            )
            article = result.scalar_one_or_none()

        if article is None:
            raise ArticleNotFound(article_id)
        return article

    async def seed(self, articles: Iterable[ArticleSeed]) -> int:
        """
        Insert catalog articles that don't exist yet.
        Existing articles keep their counters and comments.
        """
        created = 0
        async with self.db.session() as session:
            async with session.begin():
                for seed in articles:
                    if await session.get(Article, seed.id) is not None:
                        continue
                    session.add(Article(**seed.model_dump()))
                    created += 1

        logger.info(f"Seeded {created} new articles")
        return created

    async def seed_from_file(self, path: str) -> int:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return await self.seed(ArticleSeed.model_validate(item) for item in raw)
