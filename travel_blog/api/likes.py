from fastapi import APIRouter, Depends

from travel_blog.api.deps import get_like_ledger
from travel_blog.auth import AuthenticatedUser, get_current_user
from travel_blog.schemas import LikeCreate, LikedArticlesResponse, LikesCountResponse
from travel_blog.services import LikeLedgerService

router = APIRouter(prefix="/likes", tags=["Likes"])


@router.get("", response_model=LikedArticlesResponse)
async def get_liked_articles(
    user: AuthenticatedUser = Depends(get_current_user),
    ledger: LikeLedgerService = Depends(get_like_ledger),
):
    """Articles the caller has liked"""
    liked = await ledger.get_liked_article_ids(user.uid)
    return LikedArticlesResponse(liked_article_ids=sorted(liked))


@router.post("", response_model=LikesCountResponse)
async def like_article(
    payload: LikeCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    ledger: LikeLedgerService = Depends(get_like_ledger),
):
    """
    Like an article. Idempotent - returns the current count if already liked.
    """
    count = await ledger.like(user.uid, payload.article_id)
    return LikesCountResponse(message="Article liked", likes_count=count)


@router.delete("/{article_id}", response_model=LikesCountResponse)
async def unlike_article(
    article_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    ledger: LikeLedgerService = Depends(get_like_ledger),
):
    """
    Remove a like. Unknown articles and missing likes are not errors.
    """
    count = await ledger.unlike(user.uid, article_id)
    return LikesCountResponse(message="Like removed", likes_count=count)
