"""Models for in-app notifications produced by comment activity."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from newsboard.db.session import Base
from newsboard.db.time import utcnow
from newsboard.models.comment import Comment
from newsboard.models.post import Post
from newsboard.models.user import User


class NotificationType(str, enum.Enum):
    """Reason a notification was raised."""

    NEW_COMMENT_ON_POST = "NEW_COMMENT_ON_POST"
    REPLY_TO_COMMENT = "REPLY_TO_COMMENT"


class Notification(Base):
    """Notification delivered to one recipient for one comment.

    Only the ``read`` flag changes after creation. ``comment_id`` is unique so
    fan-out for a comment can be retried without duplicating rows.
    """

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_created", "recipient_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, name="notification_type"),
        nullable=False,
    )
    recipient_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    triggering_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    triggering_user: Mapped[User] = relationship("User", foreign_keys=[triggering_user_id])
    post: Mapped[Post] = relationship("Post")
    comment: Mapped[Comment] = relationship("Comment")
