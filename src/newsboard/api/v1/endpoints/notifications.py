"""Notification inbox endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from newsboard.schemas.notification import (
    MarkAllReadResponse,
    NotificationPage,
    NotificationResponse,
)
from newsboard.services import notifications as notification_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationPage)
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=50)] = 20,
) -> NotificationPage:
    """Return the caller's notifications, newest first."""
    return notification_service.list_notifications(db, current_user.id, page=page, limit=limit)


@router.post("/mark-all-as-read", response_model=MarkAllReadResponse)
async def mark_all_as_read(current_user: CurrentUserDep, db: SessionDep) -> MarkAllReadResponse:
    """Mark every unread notification of the caller as read."""
    count = notification_service.mark_all_read(db, current_user.id)
    db.commit()
    return MarkAllReadResponse(message="All unread notifications marked as read.", count=count)


@router.patch("/{notification_id}", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> NotificationResponse:
    """Mark one notification as read; repeating the call is a no-op."""
    notification = notification_service.mark_read(db, notification_id, current_user.id)
    db.commit()
    return notification_service.to_notification_response(notification)
