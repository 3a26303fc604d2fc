"""Notification Pydantic schemas."""

from pydantic import BaseModel

from newsboard.models.notification import NotificationType
from newsboard.schemas.common import AuthorSummary, UTCDateTime


class NotificationPostRef(BaseModel):
    id: int
    title: str


class NotificationCommentRef(BaseModel):
    id: int
    text_content: str


class NotificationResponse(BaseModel):
    """Notification as shown in the inbox."""

    id: int
    type: NotificationType
    read: bool
    created_at: UTCDateTime
    triggering_user: AuthorSummary | None
    post: NotificationPostRef | None
    comment: NotificationCommentRef | None


class NotificationPage(BaseModel):
    """One page of the inbox."""

    notifications: list[NotificationResponse]
    page: int
    limit: int
    total_pages: int
    total_notifications: int
    unread_count: int


class MarkAllReadResponse(BaseModel):
    message: str
    count: int
