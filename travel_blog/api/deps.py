from fastapi import Request

from travel_blog.config import Settings
from travel_blog.database import Database
from travel_blog.services import ArticleCatalog, CommentService, LikeLedgerService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_like_ledger(request: Request) -> LikeLedgerService:
    settings = get_app_settings(request)
    return LikeLedgerService(
        get_database(request),
        max_attempts=settings.transaction_max_attempts,
    )


def get_comment_service(request: Request) -> CommentService:
    settings = get_app_settings(request)
    return CommentService(
        get_database(request),
        anonymous_name=settings.anonymous_display_name,
    )


def get_article_catalog(request: Request) -> ArticleCatalog:
    return ArticleCatalog(get_database(request))
