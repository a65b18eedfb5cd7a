import logging
from typing import Set

from sqlalchemy.ext.asyncio import AsyncSession

from travel_blog.database import Database
from travel_blog.exceptions import ArticleNotFound, InvalidInput
from travel_blog.models import Article, UserLikes
from travel_blog.services.transaction import run_transaction

logger = logging.getLogger(__name__)


class LikeLedgerService:
    """
    Per-user liked-article sets plus the denormalized `likes_count` on articles.

    Both sides change in the same transaction. Articles keep no list of who
    liked them, so the counter is only as correct as this discipline.
    """

    def __init__(self, db: Database, max_attempts: int = 5):
        self.db = db
        self.max_attempts = max_attempts

    async def get_liked_article_ids(self, user_id: str) -> Set[str]:
        """Liked article ids of a user; empty until the first like."""
        async with self.db.session() as session:
            ledger = await session.get(UserLikes, user_id)

        if ledger is None:
            return set()
        return set(ledger.liked_article_ids or [])

    async def like(self, user_id: str, article_id: str) -> int:
        """
        Like an article. Returns the new like count.
        Idempotent - liking twice leaves the counter where the first like put it.
        """
        self._require_article_id(article_id)

        async def work(session: AsyncSession) -> int:
            ledger = await session.get(UserLikes, user_id)
            article = await session.get(Article, article_id)

            if article is None:
                raise ArticleNotFound(article_id)

            current = article.likes_count or 0
            liked_ids = list(ledger.liked_article_ids or []) if ledger else []

            if article_id in liked_ids:
                logger.info(f"User {user_id} already likes article {article_id}")
                return current

            if ledger is None:
                session.add(UserLikes(user_id=user_id, liked_article_ids=[article_id]))
            else:
                ledger.liked_article_ids = liked_ids + [article_id]

            # Versioned row: a concurrent writer makes this commit fail and retry
            article.likes_count = current + 1
            return current + 1

        count = await run_transaction(
            self.db, work, max_attempts=self.max_attempts, name=f"like {article_id}"
        )
        logger.info(f"User {user_id} liked article {article_id}, likes={count}")
        return count

    async def unlike(self, user_id: str, article_id: str) -> int:
        """
        Remove a like. Returns the new like count.
        Unliking something never liked is a no-op, and the counter never goes below 0.
        """
        self._require_article_id(article_id)

        async def work(session: AsyncSession) -> int:
            ledger = await session.get(UserLikes, user_id)
            article = await session.get(Article, article_id)
            current = (article.likes_count or 0) if article is not None else 0

            if ledger is None:
                logger.info(f"User {user_id} has no likes yet, nothing to remove")
                return current

            liked_ids = list(ledger.liked_article_ids or [])
            if article_id not in liked_ids:
                logger.info(f"User {user_id} does not like article {article_id}")
                return current

            ledger.liked_article_ids = [i for i in liked_ids if i != article_id]

            if article is not None and current > 0:
                article.likes_count = current - 1
                return current - 1

            if article is None:
                logger.warning(f"Article {article_id} is gone but was still liked by {user_id}")
            return 0

        count = await run_transaction(
            self.db, work, max_attempts=self.max_attempts, name=f"unlike {article_id}"
        )
        logger.info(f"User {user_id} unliked article {article_id}, likes={count}")
        return count

    @staticmethod
    def _require_article_id(article_id: str) -> None:
        if not article_id or not article_id.strip():
            raise InvalidInput("articleId is required")
