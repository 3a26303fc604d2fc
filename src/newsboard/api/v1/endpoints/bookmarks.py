"""Bookmark endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from newsboard.schemas.bookmark import (
    BookmarkCheckRequest,
    BookmarkCreate,
    BookmarkLookup,
    BookmarkResponse,
)
from newsboard.services import bookmarks as bookmark_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=list[BookmarkResponse] | BookmarkLookup)
async def list_bookmarks(
    current_user: CurrentUserDep,
    db: SessionDep,
    post_id: Annotated[int | None, Query(description="Look up the bookmark for one post")] = None,
) -> list[BookmarkResponse] | BookmarkLookup:
    """List the caller's bookmarks, or look up the one for ``post_id``."""
    if post_id is not None:
        bookmark = bookmark_service.get_for_post(db, current_user.id, post_id)
        return BookmarkLookup(
            bookmark=BookmarkResponse.model_validate(bookmark) if bookmark else None,
        )
    return [
        BookmarkResponse.model_validate(bookmark)
        for bookmark in bookmark_service.list_for_user(db, current_user.id)
    ]


@router.post("/", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    payload: BookmarkCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> BookmarkResponse:
    """Save a post for later."""
    bookmark = bookmark_service.create(db, current_user.id, payload.post_id)
    db.commit()
    db.refresh(bookmark)
    return BookmarkResponse.model_validate(bookmark)


@router.post("/check", response_model=dict[int, bool])
async def check_bookmarks(
    payload: BookmarkCheckRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[int, bool]:
    """Report which of the given posts the caller has bookmarked."""
    return bookmark_service.check_many(db, current_user.id, payload.post_ids)


@router.delete("/{bookmark_id}")
async def delete_bookmark(
    bookmark_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, bool]:
    """Remove one of the caller's bookmarks."""
    bookmark_service.delete(db, bookmark_id, current_user.id)
    db.commit()
    return {"success": True}
