from travel_blog.services.articles import ArticleCatalog
from travel_blog.services.comments import CommentService
from travel_blog.services.likes import LikeLedgerService
from travel_blog.services.transaction import run_transaction

__all__ = [
    "ArticleCatalog",
    "CommentService",
    "LikeLedgerService",
    "run_transaction",
]
