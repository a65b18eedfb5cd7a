import logging
from typing import Optional

from travel_blog.auth.identity import AuthenticatedUser
from travel_blog.database import Database
from travel_blog.exceptions import ArticleNotFound, InvalidInput
from travel_blog.models import Article, Comment, utc_now

logger = logging.getLogger(__name__)


class CommentService:
    """Appends comments to articles"""

    def __init__(self, db: Database, anonymous_name: str = "Anonymous"):
        self.db = db
        self.anonymous_name = anonymous_name

    async def add_comment(
        self,
        article_id: str,
        author: AuthenticatedUser,
        text: Optional[str],
        name: Optional[str] = None,
    ) -> Comment:
        body = (text or "").strip()
        if not body:
            raise InvalidInput("Comment text must not be empty")

        display_name = name.strip() if name and name.strip() else self.anonymous_name

        # Comments are rows of their own, so concurrent commenters never
        # overwrite each other and the article row is left untouched.
        async with self.db.session() as session:
            async with session.begin():
                article = await session.get(Article, article_id)
                if article is None:
                    raise ArticleNotFound(article_id)

                comment = Comment(
                    article_id=article_id,
                    user_id=author.uid,
                    user_email=author.email,
                    display_name=display_name,
                    text=body,
                    created_at=utc_now(),
                )
                session.add(comment)

        logger.info(f"User {author.uid} commented on article {article_id}")
        return comment
