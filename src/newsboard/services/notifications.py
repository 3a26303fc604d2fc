"""Notification fan-out for comment activity and the per-user inbox."""

from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from newsboard.models import Comment, Notification, NotificationType, Post
from newsboard.schemas.common import AuthorSummary, total_pages
from newsboard.schemas.notification import (
    NotificationCommentRef,
    NotificationPage,
    NotificationPostRef,
    NotificationResponse,
)
from newsboard.services.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)

COMMENT_PREVIEW_LENGTH = 100

__all__ = [
    "fan_out_comment",
    "list_notifications",
    "mark_read",
    "mark_all_read",
    "to_notification_response",
]


def fan_out_comment(
    db: Session,
    comment: Comment,
    post: Post,
    parent: Comment | None = None,
) -> Notification | None:
    """Notify the one user affected by a new comment.

    A reply notifies the parent comment's author, a top-level comment notifies
    the post's author. Acting on your own post or comment notifies nobody.
    Calling this again for the same comment returns the existing row.

    Args:
        db: Active session; the caller owns the commit.
        comment: The freshly flushed comment.
        post: Root post of the comment.
        parent: Parent comment when ``comment`` is a reply.

    Returns:
        The notification that applies to the comment, or None when the action
        was on the actor's own content.
    """
    existing = db.scalars(
        select(Notification).where(Notification.comment_id == comment.id)
    ).first()
    if existing is not None:
        return existing

    if comment.parent_id is not None:
        if parent is None:
            parent = db.get(Comment, comment.parent_id)
        if parent is None or parent.author_id == comment.author_id:
            return None
        kind = NotificationType.REPLY_TO_COMMENT
        recipient_id = parent.author_id
    else:
        if post.author_id == comment.author_id:
            return None
        kind = NotificationType.NEW_COMMENT_ON_POST
        recipient_id = post.author_id

    notification = Notification(
        type=kind,
        recipient_id=recipient_id,
        triggering_user_id=comment.author_id,
        post_id=post.id,
        comment_id=comment.id,
        read=False,
    )
    db.add(notification)
    db.flush()
    logger.info(
        "Notification %s (%s) queued for user %s from comment %s",
        notification.id,
        kind.value,
        recipient_id,
        comment.id,
    )
    return notification


def to_notification_response(notification: Notification) -> NotificationResponse:
    """Convert a Notification ORM instance to an API schema."""
    trigger = notification.triggering_user
    post = notification.post
    comment = notification.comment
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        read=notification.read,
        created_at=notification.created_at,
        triggering_user=AuthorSummary.model_validate(trigger) if trigger else None,
        post=NotificationPostRef(id=post.id, title=post.title) if post else None,
        comment=(
            NotificationCommentRef(
                id=comment.id,
                text_content=comment.text_content[:COMMENT_PREVIEW_LENGTH],
            )
            if comment
            else None
        ),
    )


def list_notifications(db: Session, actor_id: int, page: int = 1, limit: int = 20) -> NotificationPage:
    """Return one page of the actor's inbox, newest first."""
    total = db.scalar(
        select(func.count()).select_from(Notification).where(Notification.recipient_id == actor_id)
    ) or 0
    unread = db.scalar(
        select(func.count())
        .select_from(Notification)
        .where(Notification.recipient_id == actor_id, Notification.read.is_(False))
    ) or 0
    rows = db.scalars(
        select(Notification)
        .where(Notification.recipient_id == actor_id)
        .options(
            selectinload(Notification.triggering_user),
            selectinload(Notification.post),
            selectinload(Notification.comment),
        )
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return NotificationPage(
        notifications=[to_notification_response(row) for row in rows],
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit),
        total_notifications=total,
        unread_count=unread,
    )


def mark_read(db: Session, notification_id: int, actor_id: int) -> Notification:
    """Mark one notification as read; already-read notifications are left as is.

    Raises:
        NotFound: If the notification does not exist.
        Forbidden: If the actor is not the recipient.
    """
    notification = db.get(Notification, notification_id)
    if notification is None:
        raise NotFound("Notification not found")
    if notification.recipient_id != actor_id:
        raise Forbidden("You do not have permission to update this notification")
    if not notification.read:
        notification.read = True
        db.flush()
    return notification


def mark_all_read(db: Session, actor_id: int) -> int:
    """Mark every unread notification of the actor as read and return how many changed."""
    result = db.execute(
        update(Notification)
        .where(Notification.recipient_id == actor_id, Notification.read.is_(False))
        .values(read=True)
        .execution_options(synchronize_session="fetch")
    )
    count = result.rowcount or 0
    logger.info("Marked %d notifications read for user %s", count, actor_id)
    return count
