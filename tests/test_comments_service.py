import pytest

from travel_blog.auth import AuthenticatedUser
from travel_blog.exceptions import ArticleNotFound, InvalidInput
from travel_blog.services import ArticleCatalog, CommentService

pytestmark = pytest.mark.anyio

AUTHOR = AuthenticatedUser(uid="u1", email="traveller@example.com")


class TestAddComment:

    async def test_comment_is_appended(self, db):
        service = CommentService(db)

        comment = await service.add_comment("art1", AUTHOR, "  Beautiful photos!  ", name=" Olena ")

        assert comment.text == "Beautiful photos!"
        assert comment.display_name == "Olena"
        assert comment.user_id == "u1"
        assert comment.user_email == "traveller@example.com"
        assert comment.created_at is not None

    async def test_missing_name_uses_default(self, db):
        service = CommentService(db, anonymous_name="Anonymous")

        comment = await service.add_comment("art1", AUTHOR, "Nice", name="   ")

        assert comment.display_name == "Anonymous"

    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_empty_text_rejected(self, db, text):
        with pytest.raises(InvalidInput):
            await CommentService(db).add_comment("art1", AUTHOR, text)

    async def test_missing_article_rejected(self, db):
        with pytest.raises(ArticleNotFound):
            await CommentService(db).add_comment("nope", AUTHOR, "Hello")

    async def test_comments_keep_append_order(self, db):
        service = CommentService(db)
        for text in ["first", "second", "third"]:
            await service.add_comment("art2", AUTHOR, text)

        article = await ArticleCatalog(db).get_article("art2")

        assert [c.text for c in article.comments] == ["first", "second", "third"]

    async def test_comment_does_not_touch_like_counter(self, db):
        await CommentService(db).add_comment("art1", AUTHOR, "Hello")

        article = await ArticleCatalog(db).get_article("art1")

        assert article.likes_count == 5
