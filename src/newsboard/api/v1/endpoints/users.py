"""Public user profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from newsboard.schemas.post import PostPage
from newsboard.schemas.user import ProfileResponse
from newsboard.services import posts as post_service
from newsboard.services import users as user_service

from ..dependencies import OptionalUserDep, SessionDep, viewer_id

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(username: str, db: SessionDep) -> ProfileResponse:
    """Return a user's public profile."""
    return ProfileResponse.model_validate(user_service.get_by_username(db, username))


@router.get("/{username}/posts", response_model=PostPage)
async def get_user_posts(
    username: str,
    db: SessionDep,
    viewer: OptionalUserDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PostPage:
    """List a user's posts, newest first."""
    user = user_service.get_by_username(db, username)
    return post_service.list_posts(
        db,
        sort="new",
        page=page,
        limit=limit,
        viewer_id=viewer_id(viewer),
        author_id=user.id,
    )
