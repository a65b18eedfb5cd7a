from fastapi import APIRouter

from travel_blog.api import articles, comments, likes

router = APIRouter(prefix="/api")

router.include_router(likes.router)
router.include_router(comments.router)
router.include_router(articles.router)
