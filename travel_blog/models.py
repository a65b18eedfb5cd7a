from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_blog.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Article(Base):
    """Catalog article with its denormalized like counter."""

    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    date: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    alt: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    paragraphs: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    comments: Mapped[List["Comment"]] = relationship(
        "Comment",
        back_populates="article",
        order_by="Comment.id",
        lazy="raise",
    )

    # Concurrent writers to the same article fail at commit instead of overwriting
    __mapper_args__ = {"version_id_col": version}


class UserLikes(Base):
    """Per-user ledger of liked article ids."""

    __tablename__ = "user_likes"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    liked_article_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __mapper_args__ = {"version_id_col": version}


class Comment(Base):
    """Immutable comment appended to an article."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    article_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    user_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    article: Mapped["Article"] = relationship("Article", back_populates="comments")
