from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON payloads use camelCase keys; Python code uses snake_case"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ============ Like Schemas ============

class LikeCreate(CamelModel):
    # Optional so a missing id maps to 400 instead of a validation error
    article_id: Optional[str] = Field(default=None, description="Article to like")


class LikedArticlesResponse(CamelModel):
    liked_article_ids: List[str] = Field(..., description="Articles liked by the caller")


class LikesCountResponse(CamelModel):
    message: str
    likes_count: int = Field(..., ge=0, description="Authoritative like counter")


# ============ Comment Schemas ============

class CommentCreate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    text: Optional[str] = Field(default=None, description="Comment text")


class CommentResponse(CamelModel):
    user_id: str
    user_email: Optional[str] = None
    display_name: str
    text: str
    created_at: datetime


class CommentCreatedResponse(CamelModel):
    message: str
    comment: CommentResponse


# ============ Article Schemas ============

class ArticleSeed(CamelModel):
    id: str = Field(..., min_length=1, max_length=128)
    title: str = ""
    date: Optional[str] = None
    image: Optional[str] = None
    alt: Optional[str] = None
    paragraphs: List[str] = []
    likes_count: int = Field(default=0, ge=0)


class ArticleResponse(CamelModel):
    id: str
    title: str
    date: Optional[str] = None
    image: Optional[str] = None
    alt: Optional[str] = None
    paragraphs: List[str] = []
    likes_count: int
    comments: List[CommentResponse] = []


# ============ Misc ============

class ErrorResponse(BaseModel):
    message: str
    error: str


class HealthResponse(BaseModel):
    status: str
    database: str
    version: str
