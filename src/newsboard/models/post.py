"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from newsboard.db.session import Base
from newsboard.db.time import utcnow
from newsboard.models.user import User


class PostType(str, enum.Enum):
    """Kind of submission; decides which of url/text_content is populated."""

    LINK = "LINK"
    TEXT = "TEXT"


class Post(Base):
    """A link or text submission.

    LINK posts carry an absolute URL and no text, TEXT posts carry text and no
    URL. Posts are immutable after creation; their score is derived from votes
    and never stored here.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_created_at", "created_at"),
        Index("ix_post_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    type: Mapped[PostType] = mapped_column(Enum(PostType, name="post_type"), nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    text_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined")
