from fastapi import APIRouter, Depends, status

from travel_blog.api.deps import get_comment_service
from travel_blog.auth import AuthenticatedUser, get_current_user
from travel_blog.schemas import CommentCreate, CommentCreatedResponse, CommentResponse
from travel_blog.services import CommentService

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post(
    "/{article_id}",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    article_id: str,
    payload: CommentCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    """Append a comment to an article"""
    comment = await comments.add_comment(
        article_id,
        author=user,
        text=payload.text,
        name=payload.name,
    )
    return CommentCreatedResponse(
        message="Comment added",
        comment=CommentResponse.model_validate(comment),
    )
